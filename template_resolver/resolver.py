"""Field resolution.

Computes the authoritative resolved text of every text field from its
logic kind, raw value, variable key, the print-time bindings and today's
date. Resolution is an explicit function call made by the owner of the
field collection whenever one of those inputs changes.

Unchanged fields come back as the same object, and an unchanged
collection comes back as the same tuple, so callers can skip emitting an
update with an identity check.
"""

import dataclasses
import logging
from collections.abc import Mapping, Sequence
from datetime import date

from core import Field, LogicKind, ResolutionContext
from printanything.utilities.dates import today_user
from template_resolver.registry import LogicRegistry, get_registry

logger = logging.getLogger(__name__)


class TemplateResolver:
    """Resolves text fields using the registered logic kinds.

    Usage:
        resolver = TemplateResolver()
        ctx = ResolutionContext(bindings={"amount": "100"}, today=date.today())
        fields = resolver.resolve_fields(fields, ctx)
    """

    def __init__(self, registry: LogicRegistry | None = None):
        self._registry = registry or get_registry()

    def resolve_text(self, field: Field, ctx: ResolutionContext) -> str:
        """Compute the display text for one field ("" for images)."""
        if not field.is_text:
            return ""

        definition = self._registry.get(field.logic_kind)
        if definition is None:
            logger.warning(
                f"[RESOLVE] No resolver for {field.logic_kind.value} on field {field.id}, "
                "showing raw value"
            )
            definition = self._registry.get(LogicKind.STATIC)
            if definition is None:
                return field.raw_value
        return definition.resolver(field, ctx)

    def resolve_field(self, field: Field, ctx: ResolutionContext) -> Field:
        """Return the field with fresh resolved text.

        The same object is returned when the text did not change.
        """
        text = self.resolve_text(field, ctx) if field.is_text else field.resolved_text
        if text == field.resolved_text:
            return field
        return dataclasses.replace(field, resolved_text=text)

    def resolve_fields(self, fields: Sequence[Field], ctx: ResolutionContext) -> tuple[Field, ...]:
        """Resolve a whole collection.

        Returns the input itself (as a tuple) when no field changed.
        """
        resolved = tuple(self.resolve_field(f, ctx) for f in fields)
        changed = sum(1 for old, new in zip(fields, resolved, strict=True) if old is not new)
        if not changed:
            return fields if isinstance(fields, tuple) else resolved
        logger.debug(f"[RESOLVE] Updated {changed} of {len(resolved)} fields")
        return resolved


def resolve(
    fields: Sequence[Field],
    bindings: Mapping[str, str] | None = None,
    today: date | None = None,
) -> tuple[Field, ...]:
    """Convenience function to resolve fields with the default registry.

    Args:
        fields: Field collection
        bindings: Print-time values keyed by variable key
        today: Date shown by DATE fields (defaults to today in user timezone)

    Returns:
        Resolved field collection
    """
    if today is None:
        today = today_user()
    ctx = ResolutionContext(bindings=bindings or {}, today=today)
    return TemplateResolver().resolve_fields(fields, ctx)
