"""Text logic kinds: static text, variables, bound names.

Static text is the author's raw value. Variables show a {{key}}
placeholder until a print-time binding supplies a value. Bound names
(client names, payees) show the binding or fall back to the raw value.
"""

from core import Field, LogicKind, ResolutionContext
from template_resolver.logic.common import effective_value, placeholder
from template_resolver.registry import Category, register_logic


@register_logic(
    LogicKind.STATIC,
    category=Category.TEXT,
    label="Static Text",
    description="Author's text shown verbatim",
)
def resolve_static(field: Field, ctx: ResolutionContext) -> str:
    return field.raw_value


@register_logic(
    LogicKind.VARIABLE,
    category=Category.TEXT,
    label="Variable",
    description="Print-time value for the variable key, '{{key}}' until bound",
    uses_variable_key=True,
)
def resolve_variable(field: Field, ctx: ResolutionContext) -> str:
    bound = ctx.binding(field.variable_key)
    if bound is None:
        return placeholder(field)
    return bound


@register_logic(
    LogicKind.BOUND_NAME,
    category=Category.TEXT,
    label="Client Name",
    description="Print-time name for the variable key, else the default text",
    uses_variable_key=True,
)
def resolve_bound_name(field: Field, ctx: ResolutionContext) -> str:
    return effective_value(field, ctx)
