"""Currency amount renderers.

Three renderings of a monetary amount, all total over their input:
malformed input never raises, each function has a fixed fallback.

Examples:
    number_to_english(1234.56)  -> "One Thousand Two Hundred Thirty Four Dollars And Fifty Six Cents"
    number_to_chinese(1234.56)  -> "壹仟貳佰參拾肆圓伍角陸分"
    format_currency("1234.5")   -> "1,234.50"
"""

import logging
import math
import re
from decimal import Decimal
from typing import Any

logger = logging.getLogger(__name__)

Amount = str | int | float | Decimal

# Longest numeric prefix, the way a browser parseFloat reads "12.5kg" as 12.5
NUMBER_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

ENGLISH_FALLBACK = "Zero Dollars Only"
CHINESE_FALLBACK = "零圓整"

ONES = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine"]
TEENS = [
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen",
    "Fifteen", "Sixteen", "Seventeen", "Eighteen", "Nineteen",
]
TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]
SCALES = (
    (1_000_000_000, "Billion"),
    (1_000_000, "Million"),
    (1_000, "Thousand"),
)

CH_ZERO = "零"
CH_DIGITS = "零壹貳參肆伍陸柒捌玖"
CH_UNITS = ("", "拾", "佰", "仟")
CH_GROUPS = ("", "萬", "億", "兆")
CH_REPEATED_ZERO = re.compile(f"{CH_ZERO}+")


def parse_amount(value: Any) -> float | None:
    """Parse an amount leniently.

    Numbers pass through; strings are read up to the end of their leading
    numeric prefix. Returns None for no number, NaN or infinity.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        num = float(value)
    else:
        match = NUMBER_PREFIX.match(str(value))
        if not match:
            return None
        num = float(match.group(1))
    if math.isnan(num) or math.isinf(num):
        return None
    return num


def _split_fixed(num: float) -> tuple[str, str]:
    """Fix |num| to two decimals and split into integer digits and cents digits."""
    int_str, dec_str = f"{abs(num):.2f}".split(".")
    return int_str, dec_str


# =============================================================================
# English
# =============================================================================


def _group_to_words(n: int) -> str:
    """Convert 0-999 to words ("" for zero)."""
    words = []
    if n >= 100:
        words += [ONES[n // 100], "Hundred"]
        n %= 100
    if n >= 20:
        words.append(TENS[n // 10])
        n %= 10
    elif n >= 10:
        words.append(TEENS[n - 10])
        n = 0
    if n > 0:
        words.append(ONES[n])
    return " ".join(words).strip()


def _integer_to_words(n: int) -> str:
    words = []
    for scale, name in SCALES:
        if n >= scale:
            count = n // scale
            # Only the billions count can exceed a single group
            count_words = _integer_to_words(count) if count >= 1000 else _group_to_words(count)
            words.append(f"{count_words} {name}")
            n %= scale
    if n > 0:
        words.append(_group_to_words(n))
    return " ".join(words)


def number_to_english(amount: Amount) -> str:
    """Spell out a dollar amount for cheques and receipts.

    Examples:
        0          -> "Zero Dollars Only"
        1000000    -> "One Million Dollars Only"
        12.05      -> "Twelve Dollars And Five Cents"
        "abc"      -> "Zero Dollars Only"
    """
    num = parse_amount(amount)
    if num is None:
        logger.debug(f"[NUMWORDS] Unparseable amount for English: {amount!r}")
        return ENGLISH_FALLBACK

    int_str, dec_str = _split_fixed(num)
    integer, cents = int(int_str), int(dec_str)
    if integer == 0 and cents == 0:
        return ENGLISH_FALLBACK

    words = []
    if num < 0:
        words.append("Negative")
    if integer:
        words.append(_integer_to_words(integer))
    words.append("Dollars")
    if cents > 0:
        words += ["And", _group_to_words(cents), "Cents"]
    else:
        words.append("Only")
    return " ".join(words)


# =============================================================================
# Traditional Chinese (financial numerals)
# =============================================================================


def _chunk_to_chinese(chunk: str) -> str:
    """Render one 1-4 digit chunk with 拾/佰/仟 units.

    A single 零 goes before any nonzero digit that follows zero digits;
    trailing zeros emit nothing.
    """
    out = []
    after_zero = False
    for pos, ch in enumerate(chunk):
        digit = int(ch)
        if digit == 0:
            after_zero = True
            continue
        if after_zero:
            out.append(CH_ZERO)
            after_zero = False
        out.append(CH_DIGITS[digit] + CH_UNITS[len(chunk) - 1 - pos])
    return "".join(out)


def _integer_to_chinese(int_str: str) -> str:
    """Render integer digits most-significant chunk first ("" for zero)."""
    head = len(int_str) % 4 or 4
    chunks = [int_str[:head]] + [int_str[i : i + 4] for i in range(head, len(int_str), 4)]

    out = []
    bridge = False
    for idx, chunk in enumerate(chunks):
        if int(chunk) == 0:
            # An empty chunk between output and a later nonzero chunk needs one 零
            bridge = bool(out)
            continue
        if bridge:
            out.append(CH_ZERO)
            bridge = False
        out.append(_chunk_to_chinese(chunk) + CH_GROUPS[len(chunks) - 1 - idx])
    return "".join(out)


def number_to_chinese(amount: Amount) -> str:
    """Write an amount in Traditional Chinese financial numerals.

    Examples:
        0           -> "零圓整"
        10001       -> "壹萬零壹圓整"
        100000001   -> "壹億零壹圓整"
        0.05        -> "零圓零伍分"
        1234.56     -> "壹仟貳佰參拾肆圓伍角陸分"
    """
    num = parse_amount(amount)
    if num is None:
        logger.debug(f"[NUMWORDS] Unparseable amount for Chinese: {amount!r}")
        return CHINESE_FALLBACK

    int_str, dec_str = _split_fixed(num)
    if (len(int_str) + 3) // 4 > len(CH_GROUPS):
        logger.warning(f"[NUMWORDS] Amount too large for Chinese rendering: {amount!r}")
        return CHINESE_FALLBACK

    integer = _integer_to_chinese(int_str) or CH_ZERO
    result = integer + "圓"

    jiao, fen = int(dec_str[0]), int(dec_str[1])
    if jiao == 0 and fen == 0:
        result += "整"
    elif jiao == 0:
        result += CH_ZERO + CH_DIGITS[fen] + "分"
    else:
        result += CH_DIGITS[jiao] + "角"
        if fen:
            result += CH_DIGITS[fen] + "分"

    result = CH_REPEATED_ZERO.sub(CH_ZERO, result)
    if num < 0 and result != CHINESE_FALLBACK:
        result = "負" + result
    return result


# =============================================================================
# Numerals
# =============================================================================


def format_currency(amount: Amount) -> str:
    """Format with thousands separators and two decimals.

    Unparseable input is returned unchanged:
        1234.5  -> "1,234.50"
        "abc"   -> "abc"
    """
    num = parse_amount(amount)
    if num is None:
        return str(amount)
    return f"{num:,.2f}"
