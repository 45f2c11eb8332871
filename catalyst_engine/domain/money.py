"""Money and percent codec - exact integer cents and basis points"""

import math
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

BPS_SCALE = 10_000

# Monthly accrual denominator: 12 months * 10,000 bps
MONTHLY_RATE_DENOMINATOR = 12 * BPS_SCALE

_NUMERIC_CHARS = re.compile(r"[^0-9.()\-]")


def round_half_up(numerator: int, denominator: int) -> int:
    """
    Integer division rounded to nearest, halves away from zero.

    Every rounding step in the engine goes through here so the
    same inputs always produce the same integer on every platform.
    """
    assert denominator != 0, "denominator must be non-zero"
    if denominator < 0:
        numerator, denominator = -numerator, -denominator
    if numerator < 0:
        return -((-2 * numerator + denominator) // (2 * denominator))
    return (2 * numerator + denominator) // (2 * denominator)


def _parse_hundredths(raw: str) -> int:
    """Parse user text into hundredths (cents or bps)."""
    text = raw.strip()
    if not text:
        return 0

    negative = text.startswith("-") or (text.startswith("(") and text.endswith(")"))

    stripped = _NUMERIC_CHARS.sub("", text)
    stripped = stripped.replace("(", "").replace(")", "").replace("-", "")
    if stripped.startswith("."):
        stripped = "0" + stripped
    if not stripped:
        return 0

    int_part, _, frac_part = stripped.partition(".")
    frac_part = frac_part.replace(".", "")

    int_value = int(int_part) if int_part else 0
    frac_value = int((frac_part + "00")[:2])

    value = int_value * 100 + frac_value
    return -value if negative else value


def _numeric_hundredths(value: Any) -> int:
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    try:
        scaled = Decimal(str(value)) * 100
    except InvalidOperation:
        return 0
    if not scaled.is_finite():
        return 0
    return int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _to_hundredths(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float, Decimal)):
        return _numeric_hundredths(value)
    if isinstance(value, str):
        return _parse_hundredths(value)
    return 0


def to_cents(value: Any) -> int:
    """
    Convert a user-entered amount to integer cents.

    Accepts numbers or arbitrary strings with currency symbols, thousands
    separators and accounting parentheses. Malformed input yields 0.

    Example:
        "($1,234.56)" -> -123456
        "12.5"        -> 1250
        4.005         -> 401
    """
    return _to_hundredths(value)


def to_bps(value: Any) -> int:
    """
    Convert a percentage to integer basis points.

    The input is the number in front of the percent sign: "24.99%" -> 2499.
    """
    return _to_hundredths(value)


def from_cents(cents: int) -> Decimal:
    """Integer cents to decimal dollars with exactly two places"""
    if not isinstance(cents, int) or isinstance(cents, bool):
        return Decimal("0.00")
    return Decimal(cents).scaleb(-2)


def from_bps(bps: int) -> Decimal:
    """Integer basis points to decimal percent with exactly two places"""
    return from_cents(bps)


def pct_to_bps(value: Any, fallback_bps: int) -> int:
    """
    Normalize a percentage assumption to basis points.

    Values below 1 in magnitude are read as fractions (0.04 = 4%),
    anything else as whole percentages (4 = 4%). Missing, unparseable
    or zero values use the fallback.
    """
    if value is None or isinstance(value, bool):
        return fallback_bps
    if isinstance(value, str):
        text = value.strip().rstrip("%").strip()
        if not text:
            return fallback_bps
        try:
            number = Decimal(text)
        except InvalidOperation:
            return fallback_bps
    elif isinstance(value, (int, float, Decimal)):
        if isinstance(value, float) and not math.isfinite(value):
            return fallback_bps
        number = Decimal(str(value))
    else:
        return fallback_bps

    if not number.is_finite() or number == 0:
        return fallback_bps
    if abs(number) < 1:
        return int((number * BPS_SCALE).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    return int((number * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def monthly_interest_cents(balance_cents: int, apr_bps: int) -> int:
    """One month of interest on a balance: round(balance * apr / 120000)"""
    if balance_cents <= 0 or apr_bps <= 0:
        return 0
    return round_half_up(balance_cents * apr_bps, MONTHLY_RATE_DENOMINATOR)
