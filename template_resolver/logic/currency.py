"""Currency logic kinds.

The amount comes from the print-time binding when bound and non-empty,
otherwise from the raw value. Malformed amounts resolve to each
renderer's fallback text instead of failing.
"""

from core import Field, LogicKind, ResolutionContext
from printanything.utilities.numwords import (
    format_currency,
    number_to_chinese,
    number_to_english,
)
from template_resolver.logic.common import effective_value
from template_resolver.registry import Category, register_logic


@register_logic(
    LogicKind.CURRENCY_ENG,
    category=Category.CURRENCY,
    label="Amount in English",
    description="Amount spelled out (e.g., 'One Hundred Dollars Only')",
    uses_variable_key=True,
)
def resolve_currency_english(field: Field, ctx: ResolutionContext) -> str:
    return number_to_english(effective_value(field, ctx))


@register_logic(
    LogicKind.CURRENCY_CHI,
    category=Category.CURRENCY,
    label="Amount in Chinese",
    description="Amount in financial numerals (e.g., '壹佰圓整')",
    uses_variable_key=True,
)
def resolve_currency_chinese(field: Field, ctx: ResolutionContext) -> str:
    return number_to_chinese(effective_value(field, ctx))


@register_logic(
    LogicKind.CURRENCY_NUM,
    category=Category.CURRENCY,
    label="Amount in Numerals",
    description="Amount with separators (e.g., '1,234.56')",
    uses_variable_key=True,
)
def resolve_currency_numeral(field: Field, ctx: ResolutionContext) -> str:
    return format_currency(effective_value(field, ctx))
