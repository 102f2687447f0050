"""Pydantic request/response models for the API.

Wire keys follow the editor's stored JSON (camelCase for field
attributes), so documents saved by the editor round-trip unchanged.
"""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core import LogicKind, PrintRecord, Template


class CanvasFieldModel(BaseModel):
    """One canvas object as stored by the editor."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    type: Literal["text", "image"] = "text"
    x: float = 0
    y: float = 0
    width: float = Field(gt=0)
    height: float | None = None
    text: str = ""
    raw_value: str = ""
    variable_key: str | None = None
    logic_type: LogicKind = LogicKind.STATIC
    date_format: str = "YYYY-MM-DD"
    font_size: float = 16
    font_family: str = "Arial"
    align: Literal["left", "center", "right"] = "left"
    src: str | None = None
    opacity: float = Field(1.0, ge=0, le=1)


class PageSettingsModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    unit: Literal["mm", "in"] = "mm"
    width_unit: float = Field(210, gt=0)
    height_unit: float = Field(297, gt=0)
    dpi: int = 96


class TemplateModel(BaseModel):
    """Template body for save requests and load responses."""

    id: str = "new"
    user_id: str | None = None
    name: str = "Untitled"
    objects: list[CanvasFieldModel] = []
    settings: PageSettingsModel = PageSettingsModel()
    is_public: bool = False
    updated_at: datetime | None = Field(None, alias="updatedAt")

    def to_template(self) -> Template:
        data = self.model_dump(by_alias=True, mode="json")
        return Template.from_dict(data)

    @classmethod
    def from_template(cls, template: Template) -> "TemplateModel":
        return cls.model_validate(template.to_dict())


class TemplateSaveResponse(BaseModel):
    id: str


class TemplateVariablesResponse(BaseModel):
    template_id: str
    variables: list[str]


class RenderRequest(BaseModel):
    """Print-time values keyed by variable key."""

    bindings: dict[str, str] = {}
    today: date | None = None  # defaults to today in the configured timezone
    user_id: str | None = None


class RenderedField(BaseModel):
    id: str
    kind: Literal["text", "image"]
    x: float
    y: float
    width: float
    height: float | None = None
    text: str | None = None
    src: str | None = None
    opacity: float | None = None
    style: dict | None = None


class RenderResponse(BaseModel):
    template_id: str
    fields: list[RenderedField]
    print_record_id: str | None = None


class PrintRecordModel(BaseModel):
    """One past print and the values it used."""

    id: str
    template_id: str
    user_id: str | None = None
    data: dict[str, str] = {}
    created_at: datetime

    @classmethod
    def from_record(cls, record: PrintRecord) -> "PrintRecordModel":
        return cls.model_validate(record.to_dict())


class ConvertRequest(BaseModel):
    amount: str
    kind: Literal["CURRENCY_ENG", "CURRENCY_CHI", "CURRENCY_NUM"]


class ConvertResponse(BaseModel):
    amount: str
    kind: str
    text: str
