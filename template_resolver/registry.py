"""Logic kind registry and registration decorator.

This module provides the dispatch table from LogicKind to the function
that derives a text field's display string. Resolvers are registered
using the @register_logic decorator, which captures metadata alongside
the resolver function.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from core.types import LogicKind

if TYPE_CHECKING:
    from core import Field, ResolutionContext

# Type alias for resolver functions
Resolver = Callable[["Field", "ResolutionContext"], str]


class Category(Enum):
    """Logic kind groupings for the editor's kind picker."""

    TEXT = auto()  # static, variable, bound name
    DATETIME = auto()  # date
    CURRENCY = auto()  # english, chinese, numeral


# Category display metadata for UI
CATEGORY_DISPLAY = {
    Category.TEXT: {"label": "Text", "icon": "🔤"},
    Category.DATETIME: {"label": "Date", "icon": "📅"},
    Category.CURRENCY: {"label": "Currency", "icon": "💰"},
}


@dataclass(frozen=True)
class LogicDefinition:
    """Complete definition of a logic kind."""

    kind: LogicKind
    category: Category
    resolver: Resolver
    label: str = ""
    description: str = ""
    uses_variable_key: bool = False  # editor shows the variable key input


class LogicRegistry:
    """Singleton registry for all logic kinds.

    Logic kinds are registered via the @register_logic decorator.
    The registry provides lookup and introspection capabilities.
    """

    _instance: "LogicRegistry | None" = None
    _definitions: dict[LogicKind, LogicDefinition]

    def __new__(cls) -> "LogicRegistry":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._definitions = {}
        return cls._instance

    def register(
        self,
        kind: LogicKind,
        category: Category,
        resolver: Resolver,
        label: str = "",
        description: str = "",
        uses_variable_key: bool = False,
    ) -> None:
        """Register a logic kind definition."""
        self._definitions[kind] = LogicDefinition(
            kind=kind,
            category=category,
            resolver=resolver,
            label=label,
            description=description,
            uses_variable_key=uses_variable_key,
        )

    def get(self, kind: LogicKind) -> LogicDefinition | None:
        """Get a logic kind definition."""
        return self._definitions.get(kind)

    def all_definitions(self) -> list[LogicDefinition]:
        """Get all registered logic kinds in declaration order."""
        return [self._definitions[k] for k in LogicKind if k in self._definitions]

    def by_category(self, category: Category) -> list[LogicDefinition]:
        return [d for d in self.all_definitions() if d.category == category]

    def count(self) -> int:
        return len(self._definitions)

    def to_api_format(self) -> dict:
        """Generate the API response format for the /api/logic-kinds endpoint."""
        kinds = []
        for definition in self.all_definitions():
            cat_info = CATEGORY_DISPLAY.get(
                definition.category,
                {"label": definition.category.name.title(), "icon": "📋"},
            )
            kinds.append(
                {
                    "kind": definition.kind.value,
                    "label": definition.label or definition.kind.name.title(),
                    "description": definition.description,
                    "category": f"{cat_info['icon']} {cat_info['label']}",
                    "uses_variable_key": definition.uses_variable_key,
                }
            )
        return {"total_kinds": len(kinds), "kinds": kinds}


def register_logic(
    kind: LogicKind,
    category: Category,
    label: str = "",
    description: str = "",
    uses_variable_key: bool = False,
) -> Callable[[Resolver], Resolver]:
    """Decorator to register a logic kind resolver.

    Usage:
        @register_logic(
            LogicKind.STATIC,
            category=Category.TEXT,
            label="Static Text",
            description="Author's text shown verbatim",
        )
        def resolve_static(field: Field, ctx: ResolutionContext) -> str:
            return field.raw_value
    """

    def decorator(func: Resolver) -> Resolver:
        LogicRegistry().register(kind, category, func, label, description, uses_variable_key)
        return func

    return decorator


def get_registry() -> LogicRegistry:
    """Get the singleton logic registry."""
    return LogicRegistry()
