"""Input codecs for the TIN and money fields

Input widgets keep a human-typed string and its canonical value in sync
with these functions. They hold no state and never raise on bad input.
"""

import re
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, Callable, NamedTuple

from .record import to_decimal


TIN_PATTERN = re.compile(r"^\d{3}-\d{3}-\d{3}$")
TIN_DIGITS = 9

_NUMBER_PREFIX = re.compile(r"\d+(?:\.\d*)?|\.\d+")
_MONEY_PRECISION = Decimal('0.001')


class FieldCodec(NamedTuple):
    """encode: canonical value -> display text, decode: display text -> canonical value"""
    encode: Callable[[Any], str]
    decode: Callable[[Any], Any]


# ============================================================================
# TIN
# ============================================================================

def parse_tin(text: Any) -> str:
    """Digits of a typed TIN, capped at 9"""
    return re.sub(r"\D", "", str(text or ""))[:TIN_DIGITS]


def format_tin(text: Any) -> str:
    """Group the digits in threes separated by dashes

    Partial input stays partial: "12" -> "12", "12345" -> "123-45".
    """
    digits = parse_tin(text)
    return "-".join(digits[i:i + 3] for i in range(0, len(digits), 3))


def is_canonical_tin(text: Any) -> bool:
    """True only for the complete NNN-NNN-NNN form"""
    return isinstance(text, str) and bool(TIN_PATTERN.match(text))


# ============================================================================
# Money
# ============================================================================

def parse_money(text: Any) -> Decimal:
    """Read a number out of separator-formatted text

    Everything except digits and the decimal point is dropped first, then
    the leading number is read; unparsable text gives 0.
    """
    cleaned = re.sub(r"[^0-9.]", "", str(text if text is not None else ""))
    match = _NUMBER_PREFIX.match(cleaned)
    if not match:
        return Decimal('0')
    return Decimal(match.group(0))


def format_money(value: Any) -> str:
    """Thousands-separated display text, at most 3 fraction digits

    Blank or unparsable values give "".
    """
    if isinstance(value, str):
        value = value.replace(",", "")
    amount = to_decimal(value)
    if amount is None:
        return ""

    with localcontext() as ctx:
        # room for every integer digit plus the 3 fraction digits
        ctx.prec = max(ctx.prec, amount.adjusted() + 5)
        amount = amount.quantize(_MONEY_PRECISION, rounding=ROUND_HALF_UP)
    text = f"{amount:,f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_currency(value: Any) -> str:
    """Peso display with two decimals, e.g. ₱1,234.50"""
    amount = to_decimal(value) or Decimal('0')
    return f"₱{amount:,.2f}"


TIN_CODEC = FieldCodec(encode=format_tin, decode=format_tin)
MONEY_CODEC = FieldCodec(encode=format_money, decode=parse_money)
