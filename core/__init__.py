"""Core types and interfaces for Print-Anything.

All data structures are dataclasses with attribute access.
Storage backends implement the TemplateStore interface.
"""

from core.exceptions import PrintAnythingError, StoreError, TemplateNotFoundError
from core.interfaces import LoadResult, SaveResult, TemplateStore
from core.types import (
    Field,
    FieldKind,
    LogicKind,
    PageSettings,
    PageUnit,
    PrintRecord,
    ResolutionContext,
    Template,
    TextAlign,
)

__all__ = [
    # Types
    "Field",
    "FieldKind",
    "LogicKind",
    "PageSettings",
    "PageUnit",
    "PrintRecord",
    "ResolutionContext",
    "Template",
    "TextAlign",
    # Interfaces
    "LoadResult",
    "SaveResult",
    "TemplateStore",
    # Exceptions
    "PrintAnythingError",
    "StoreError",
    "TemplateNotFoundError",
]
