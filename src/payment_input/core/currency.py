"""
Currency helpers: zero-decimal classification, amount scaling and labels.
"""

from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal, DecimalException, InvalidOperation
from typing import Union

from babel.numbers import format_currency

__all__ = [
    "EURO_LOCALE",
    "ZERO_DECIMAL_CURRENCIES",
    "format_amount_label",
    "is_zero_decimal_currency",
    "parse_amount",
    "to_minor_units",
]

# https://stripe.com/docs/currencies#zero-decimal
ZERO_DECIMAL_CURRENCIES = frozenset(
    {
        "BIF",
        "CLP",
        "DJF",
        "GNF",
        "JPY",
        "KMF",
        "KRW",
        "MGA",
        "PYG",
        "RWF",
        "UGX",
        "VND",
        "VUV",
        "XAF",
        "XOF",
        "XPF",
    }
)

EURO_LOCALE = "fr_FR"

_HALF = Decimal("0.5")
_MAX_MINOR_UNITS = 2**63 - 1
_MAX_AMOUNT_DIGITS = 18


def is_zero_decimal_currency(currency: str) -> bool:
    return currency.upper() in ZERO_DECIMAL_CURRENCIES


def _minor_unit_factor(currency: str) -> int:
    return 1 if is_zero_decimal_currency(currency) else 100


def parse_amount(raw: str) -> Decimal:
    """
    Parse a rendered amount template into a finite :class:`Decimal`.

    Raises :class:`ValueError` for blank input, non-numeric text and
    infinities or NaN.
    """
    text = raw.strip()
    if not text or "_" in text:
        raise ValueError(f"Amount '{raw}' is not a number")
    try:
        value = Decimal(text)
    except InvalidOperation as exc:
        raise ValueError(f"Amount '{raw}' is not a number") from exc
    if not value.is_finite():
        raise ValueError(f"Amount '{raw}' is not a finite number")
    return value


def to_minor_units(amount: Union[Decimal, str], currency: str) -> int:
    """
    Scale ``amount`` to the provider's smallest currency unit.

    Non zero-decimal currencies are multiplied by 100. The result is rounded
    to the nearest integer with halves going up, so ``-2.5 JPY`` is ``-2``.
    Rounding works on the exact decimal value: ``10.005 USD`` is ``1001``,
    whereas float arithmetic (``Math.round(10.005 * 100)``) gives ``1000``.

    Raises :class:`ValueError` when the amount is not a number or does not
    fit a signed 64-bit amount in minor units.
    """
    value = parse_amount(amount) if isinstance(amount, str) else amount
    if not value.is_finite() or value.adjusted() > _MAX_AMOUNT_DIGITS:
        raise ValueError(f"Amount '{amount}' is out of range")
    try:
        scaled = value * _minor_unit_factor(currency)
        rounded = int((scaled + _HALF).to_integral_value(rounding=ROUND_FLOOR))
    except DecimalException as exc:
        raise ValueError(f"Amount '{amount}' is out of range") from exc
    if abs(rounded) > _MAX_MINOR_UNITS:
        raise ValueError(f"Amount '{amount}' is out of range")
    return rounded


def format_amount_label(amount: int, currency: str, *, default_locale: str = "en_US") -> str:
    """
    Render an amount expressed in minor units for display, e.g. ``$1,500.00``.

    Euro amounts are always rendered with the French locale.
    """
    locale = EURO_LOCALE if currency.upper() == "EUR" else default_locale
    value = Decimal(amount) / _minor_unit_factor(currency)
    return format_currency(value, currency.upper(), locale=locale)
