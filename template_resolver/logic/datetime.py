"""Date logic kind.

Date fields ignore their raw value and any bindings: they always show the
context's "today" in the field's date format.
"""

from core import Field, LogicKind, ResolutionContext
from printanything.utilities.dates import format_date
from template_resolver.registry import Category, register_logic


@register_logic(
    LogicKind.DATE,
    category=Category.DATETIME,
    label="Date",
    description="Today's date (e.g., '2026-10-18' or '18 October 2026')",
)
def resolve_date(field: Field, ctx: ResolutionContext) -> str:
    return format_date(ctx.today, field.date_format)
