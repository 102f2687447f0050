"""Core data types for Print-Anything.

All data structures are pure dataclasses with attribute access.
Fields are frozen so a tuple of them is an immutable snapshot that can be
handed to the history manager without copying.

Use attribute access: field.raw_value, template.settings.width, etc.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from enum import Enum
from types import MappingProxyType
from typing import Any

# 1 inch = 96 px (CSS standard), 1 mm = 3.7795 px
MM_TO_PX = 3.7795
IN_TO_PX = 96

MIN_FIELD_SIZE = 5.0


class FieldKind(Enum):
    """What a canvas field draws."""

    TEXT = "text"
    IMAGE = "image"


class LogicKind(Enum):
    """How a text field's display value is derived."""

    STATIC = "STATIC"
    VARIABLE = "VARIABLE"  # {{key}} placeholder until bound
    DATE = "DATE"
    CURRENCY_ENG = "CURRENCY_ENG"
    CURRENCY_CHI = "CURRENCY_CHI"
    CURRENCY_NUM = "CURRENCY_NUM"  # 1,234.56
    BOUND_NAME = "BOUND_NAME"

    @classmethod
    def _missing_(cls, value: object) -> "LogicKind | None":
        # Templates saved before the rename still carry CUSTOMER_NAME
        if value == "CUSTOMER_NAME":
            return cls.BOUND_NAME
        return None


class TextAlign(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class PageUnit(Enum):
    MM = "mm"
    IN = "in"


def to_px(value: float, unit: PageUnit) -> int:
    """Convert a physical length to whole CSS pixels."""
    return round(value * (MM_TO_PX if unit == PageUnit.MM else IN_TO_PX))


@dataclass(frozen=True)
class Field:
    """A positioned text or image element on a template page.

    Text fields carry the authored ``raw_value`` and the derived
    ``resolved_text``. Only the resolver writes ``resolved_text``.
    """

    id: str
    kind: FieldKind
    x: float
    y: float
    width: float
    height: float | None = None  # auto for text, required for images

    # Text
    raw_value: str = ""
    resolved_text: str = ""
    variable_key: str | None = None
    logic_kind: LogicKind = LogicKind.STATIC
    date_format: str = "YYYY-MM-DD"
    font_size: float = 16
    font_family: str = "Arial"
    align: TextAlign = TextAlign.LEFT

    # Image
    src: str | None = None
    opacity: float = 1.0

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError(f"Field {self.id} width must be positive, got {self.width}")
        if self.kind == FieldKind.IMAGE:
            if self.height is None or self.height <= 0:
                raise ValueError(f"Image field {self.id} requires a positive height")
            if not 0.0 <= self.opacity <= 1.0:
                raise ValueError(f"Image field {self.id} opacity must be in [0, 1]")

    @property
    def is_text(self) -> bool:
        return self.kind == FieldKind.TEXT

    @property
    def is_image(self) -> bool:
        return self.kind == FieldKind.IMAGE

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the editor's camelCase wire keys."""
        data: dict[str, Any] = {
            "id": self.id,
            "type": self.kind.value,
            "x": self.x,
            "y": self.y,
            "width": self.width,
        }
        if self.height is not None:
            data["height"] = self.height
        if self.is_image:
            data["src"] = self.src
            data["opacity"] = self.opacity
            return data
        data.update(
            {
                "text": self.resolved_text,
                "rawValue": self.raw_value,
                "logicType": self.logic_kind.value,
                "dateFormat": self.date_format,
                "fontSize": self.font_size,
                "fontFamily": self.font_family,
                "align": self.align.value,
            }
        )
        if self.variable_key:
            data["variableKey"] = self.variable_key
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Field":
        """Build a Field from a stored editor object."""
        kind = FieldKind(data.get("type", "text"))
        common = {
            "id": str(data["id"]),
            "kind": kind,
            "x": float(data.get("x", 0)),
            "y": float(data.get("y", 0)),
            "width": float(data["width"]),
            "height": float(data["height"]) if data.get("height") is not None else None,
        }
        if kind == FieldKind.IMAGE:
            return cls(
                **common,
                src=data.get("src"),
                opacity=float(data.get("opacity", 1.0)),
            )
        return cls(
            **common,
            raw_value=data.get("rawValue") or "",
            resolved_text=data.get("text") or "",
            variable_key=data.get("variableKey") or None,
            logic_kind=LogicKind(data.get("logicType") or LogicKind.STATIC.value),
            date_format=data.get("dateFormat") or "YYYY-MM-DD",
            font_size=float(data.get("fontSize", 16)),
            font_family=data.get("fontFamily") or "Arial",
            align=TextAlign(data.get("align") or TextAlign.LEFT.value),
        )


@dataclass(frozen=True)
class PageSettings:
    """Page size in physical units; pixel size is derived."""

    width_unit: float = 210
    height_unit: float = 297
    unit: PageUnit = PageUnit.MM
    dpi: int = 96

    @property
    def width(self) -> int:
        return to_px(self.width_unit, self.unit)

    @property
    def height(self) -> int:
        return to_px(self.height_unit, self.unit)

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "unit": self.unit.value,
            "widthUnit": self.width_unit,
            "heightUnit": self.height_unit,
            "dpi": self.dpi,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PageSettings":
        return cls(
            width_unit=float(data.get("widthUnit", 210)),
            height_unit=float(data.get("heightUnit", 297)),
            unit=PageUnit(data.get("unit", "mm")),
            dpi=int(data.get("dpi", 96)),
        )


@dataclass
class Template:
    """A saved page layout.

    ``fields`` keeps insertion order for stable identity; render order is
    derived from field kind, not from this order.
    """

    id: str
    name: str = "Untitled"
    owner_id: str | None = None
    fields: tuple[Field, ...] = ()
    settings: PageSettings = field(default_factory=PageSettings)
    is_public: bool = False
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.owner_id,
            "name": self.name,
            "objects": [f.to_dict() for f in self.fields],
            "settings": self.settings.to_dict(),
            "is_public": self.is_public,
            "updatedAt": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Template":
        updated = data.get("updatedAt")
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "Untitled",
            owner_id=data.get("user_id"),
            fields=tuple(Field.from_dict(obj) for obj in data.get("objects", [])),
            settings=PageSettings.from_dict(data.get("settings") or {}),
            is_public=bool(data.get("is_public", False)),
            updated_at=datetime.fromisoformat(updated) if updated else datetime.now(UTC),
        )


@dataclass(frozen=True)
class PrintRecord:
    """The values a template was printed with.

    Reapplying ``data`` as bindings reproduces the printed page.
    """

    id: str
    template_id: str
    user_id: str | None = None
    data: Mapping[str, str] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "template_id": self.template_id,
            "user_id": self.user_id,
            "data": dict(self.data),
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PrintRecord":
        created = data.get("created_at")
        return cls(
            id=str(data["id"]),
            template_id=str(data["template_id"]),
            user_id=data.get("user_id"),
            data={str(k): "" if v is None else str(v) for k, v in (data.get("data") or {}).items()},
            created_at=datetime.fromisoformat(created) if created else datetime.now(UTC),
        )


# =============================================================================
# Resolution Context
# Used by template_resolver for per-field resolution
# =============================================================================


@dataclass(frozen=True)
class ResolutionContext:
    """Everything besides the field itself that resolution depends on.

    ``bindings`` are print-time values keyed by variable key. They are
    never written back into a field's raw value.
    """

    bindings: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    today: date = field(default_factory=date.today)

    def __post_init__(self) -> None:
        if not isinstance(self.bindings, MappingProxyType):
            object.__setattr__(self, "bindings", MappingProxyType(dict(self.bindings)))

    def binding(self, key: str | None) -> str | None:
        """Return the bound value for key, or None when unbound or empty."""
        if not key:
            return None
        value = self.bindings.get(key)
        return value if value else None
