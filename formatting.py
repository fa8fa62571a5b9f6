"""Helper utilities for parsing and formatting numeric outputs."""
from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

# French typography: narrow no-break space between thousands.
THOUSANDS_SEPARATOR = "\u202f"


def to_decimal(value: object) -> Decimal:
    """Convert *value* to :class:`Decimal`, falling back to zero on invalid input."""

    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal("0")
    if value is None or isinstance(value, bool):
        return Decimal("0")
    text = str(value).strip()
    for separator in (" ", "\u00a0", THOUSANDS_SEPARATOR):
        text = text.replace(separator, "")
    text = text.replace(",", ".")
    if not text:
        return Decimal("0")
    try:
        amount = Decimal(text)
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not amount.is_finite():
        return Decimal("0")
    return amount


def to_int(value: object) -> int:
    """Convert *value* to an integer (truncated), zero on invalid input."""

    return int(to_decimal(value))


def round_half_up(value: Decimal, places: int = 0) -> Decimal:
    quant = Decimal(1).scaleb(-places)
    return value.quantize(quant, rounding=ROUND_HALF_UP)


def clamp_percentage(value: object) -> float:
    """Clamp a percentage for progress indicators to ``[0, 100]``."""

    amount = to_decimal(value)
    return float(min(Decimal("100"), max(Decimal("0"), amount)))


def format_euro(value: object, decimals: int = 0) -> str:
    rounded = round_half_up(to_decimal(value), decimals)
    formatted = f"{rounded:,.{decimals}f}".replace(",", THOUSANDS_SEPARATOR).replace(".", ",")
    return f"{formatted} €"


def format_percent(value: object, decimals: int = 1) -> str:
    if value is None:
        return "—"
    amount = round_half_up(to_decimal(value), decimals)
    return f"{amount:.{decimals}f}".replace(".", ",") + " %"


def format_number(value: object, decimals: int = 0) -> str:
    amount = round_half_up(to_decimal(value), decimals)
    return f"{amount:,.{decimals}f}".replace(",", THOUSANDS_SEPARATOR).replace(".", ",")


__all__ = [
    "THOUSANDS_SEPARATOR",
    "clamp_percentage",
    "format_euro",
    "format_number",
    "format_percent",
    "round_half_up",
    "to_decimal",
    "to_int",
]
