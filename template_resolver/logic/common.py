"""Helpers shared by logic kind resolvers."""

from core import Field, ResolutionContext

PLACEHOLDER_FALLBACK_KEY = "var"


def effective_value(field: Field, ctx: ResolutionContext) -> str:
    """Print-time binding when bound and non-empty, else the author's raw value."""
    bound = ctx.binding(field.variable_key)
    return bound if bound is not None else field.raw_value


def placeholder(field: Field) -> str:
    """The {{key}} marker shown for an unbound variable."""
    return "{{" + (field.variable_key or PLACEHOLDER_FALLBACK_KEY) + "}}"
