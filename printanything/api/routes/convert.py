"""Amount conversion and logic kind introspection endpoints."""

from fastapi import APIRouter

from printanything.api.models import ConvertRequest, ConvertResponse
from printanything.utilities.dates import DATE_FORMATS
from printanything.utilities.numwords import (
    format_currency,
    number_to_chinese,
    number_to_english,
)
from template_resolver import get_registry

router = APIRouter()

CONVERTERS = {
    "CURRENCY_ENG": number_to_english,
    "CURRENCY_CHI": number_to_chinese,
    "CURRENCY_NUM": format_currency,
}


@router.post("/convert", response_model=ConvertResponse)
def convert_amount(request: ConvertRequest):
    """Preview an amount in one of the currency renderings."""
    text = CONVERTERS[request.kind](request.amount)
    return ConvertResponse(amount=request.amount, kind=request.kind, text=text)


@router.get("/logic-kinds")
def list_logic_kinds():
    """All logic kinds a text field can use."""
    return get_registry().to_api_format()


@router.get("/date-formats")
def list_date_formats():
    """Date pattern tokens with examples."""
    return [{"format": token, "description": desc} for token, desc in DATE_FORMATS.items()]
