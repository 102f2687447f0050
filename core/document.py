"""Document model operations.

Every operation takes the current field collection and returns a new one.
Nothing is mutated in place, so results can be fed straight into the
history manager. Operations on an unknown field id return the input
collection unchanged.
"""

import dataclasses
import random
import string
from collections.abc import Iterable

from core.types import (
    MIN_FIELD_SIZE,
    Field,
    FieldKind,
    LogicKind,
    PageSettings,
    TextAlign,
)

Fields = tuple[Field, ...]

ID_ALPHABET = string.ascii_lowercase + string.digits
ID_LENGTH = 9

DEFAULT_POSITION = (50.0, 50.0)
MAX_IMAGE_SIZE = 300.0
DEFAULT_IMAGE_OPACITY = 0.5

# Per-kind defaults for newly added text fields: (width, raw_value)
TEXT_DEFAULTS: dict[LogicKind, tuple[float, str]] = {
    LogicKind.STATIC: (200, "Text"),
    LogicKind.VARIABLE: (200, "Text"),
    LogicKind.DATE: (200, "{{date}}"),
    LogicKind.CURRENCY_ENG: (300, "1234.56"),
    LogicKind.CURRENCY_CHI: (300, "1234.56"),
    LogicKind.CURRENCY_NUM: (150, "1234.56"),
    LogicKind.BOUND_NAME: (200, ""),
}


def generate_id() -> str:
    """Generate a short random id (9 base36 characters)."""
    return "".join(random.choices(ID_ALPHABET, k=ID_LENGTH))


def find_field(fields: Iterable[Field], field_id: str) -> Field | None:
    """Get a field by id."""
    return next((f for f in fields if f.id == field_id), None)


def _replace_where(fields: Fields, field_id: str, **changes) -> Fields:
    if find_field(fields, field_id) is None:
        return fields
    return tuple(dataclasses.replace(f, **changes) if f.id == field_id else f for f in fields)


def add_text_field(fields: Fields, logic_kind: LogicKind = LogicKind.STATIC, **overrides) -> Fields:
    """Append a new text field with the editor defaults for its logic kind.

    Any attribute of Field can be overridden by keyword. The id is always
    freshly generated.
    """
    width, raw_value = TEXT_DEFAULTS[logic_kind]
    x, y = DEFAULT_POSITION
    attrs = {
        "x": x,
        "y": y,
        "width": width,
        "raw_value": raw_value,
        "resolved_text": raw_value,
        "logic_kind": logic_kind,
        "font_size": 16,
        "font_family": "Arial",
        "align": TextAlign.LEFT,
    }
    attrs.update(overrides)
    attrs.pop("id", None)
    attrs.pop("kind", None)
    return (*fields, Field(id=generate_id(), kind=FieldKind.TEXT, **attrs))


def add_image_field(fields: Fields, src: str, natural_width: float, natural_height: float) -> Fields:
    """Append an image, scaled down to fit a 300px box."""
    width, height = float(natural_width), float(natural_height)
    if width > MAX_IMAGE_SIZE or height > MAX_IMAGE_SIZE:
        ratio = min(MAX_IMAGE_SIZE / width, MAX_IMAGE_SIZE / height)
        width *= ratio
        height *= ratio
    x, y = DEFAULT_POSITION
    image = Field(
        id=generate_id(),
        kind=FieldKind.IMAGE,
        x=x,
        y=y,
        width=width,
        height=height,
        src=src,
        opacity=DEFAULT_IMAGE_OPACITY,
    )
    return (*fields, image)


def update_field(fields: Fields, field_id: str, **changes) -> Fields:
    """Apply property edits to one field.

    ``resolved_text`` is derived state and cannot be edited; change
    ``raw_value`` instead.
    """
    if "resolved_text" in changes:
        raise ValueError("resolved_text is derived; edit raw_value instead")
    if "id" in changes or "kind" in changes:
        raise ValueError("Field id and kind are immutable")
    return _replace_where(fields, field_id, **changes)


def move_field(fields: Fields, field_id: str, x: float, y: float) -> Fields:
    return _replace_where(fields, field_id, x=x, y=y)


def resize_field(fields: Fields, field_id: str, width: float, height: float | None = None) -> Fields:
    """Resize a field; sizes are clamped to the 5px minimum."""
    current = find_field(fields, field_id)
    if current is None:
        return fields
    new_height = current.height if height is None else max(MIN_FIELD_SIZE, height)
    return _replace_where(fields, field_id, width=max(MIN_FIELD_SIZE, width), height=new_height)


def scale_text_field(fields: Fields, field_id: str, factor: float) -> Fields:
    """Corner-handle resize of a text field: width and font size scale together."""
    current = find_field(fields, field_id)
    if current is None or not current.is_text or factor <= 0:
        return fields
    return _replace_where(
        fields,
        field_id,
        width=max(MIN_FIELD_SIZE, current.width * factor),
        font_size=current.font_size * factor,
    )


def remove_field(fields: Fields, field_id: str) -> Fields:
    if find_field(fields, field_id) is None:
        return fields
    return tuple(f for f in fields if f.id != field_id)


def update_settings(settings: PageSettings, **changes) -> PageSettings:
    """Return new page settings; pixel size follows the unit values."""
    return dataclasses.replace(settings, **changes)


def render_order(fields: Iterable[Field]) -> list[Field]:
    """Images beneath text regardless of insertion order (stable per kind)."""
    return sorted(fields, key=lambda f: 0 if f.is_image else 1)


def variable_keys(fields: Iterable[Field]) -> list[str]:
    """Unique non-blank variable keys in collection order."""
    seen: set[str] = set()
    keys = []
    for f in fields:
        key = f.variable_key
        if key and key.strip() and key not in seen:
            seen.add(key)
            keys.append(key)
    return keys
