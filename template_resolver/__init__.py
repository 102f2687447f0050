"""Template Resolution Engine.

Derives the printable text of every text field from its logic kind.

Usage:
    from template_resolver import TemplateResolver
    from core import ResolutionContext

    resolver = TemplateResolver()
    fields = resolver.resolve_fields(fields, ResolutionContext(bindings={"amount": "12"}))

The resolver dispatches on LogicKind through a registry populated by
the @register_logic decorator.
"""

from template_resolver.registry import (
    Category,
    LogicDefinition,
    LogicRegistry,
    get_registry,
    register_logic,
)
from template_resolver.resolver import TemplateResolver, resolve

__all__ = [
    # Main API
    "TemplateResolver",
    "resolve",
    # Registry
    "Category",
    "LogicDefinition",
    "LogicRegistry",
    "get_registry",
    "register_logic",
]

# Import all logic modules to register them
# This happens automatically when the package is imported
from template_resolver import logic  # noqa: F401, E402
