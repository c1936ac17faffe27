"""
Currency and Number Formatting

Locale-aware formatting helpers shared by the calculators and the API.
Locale data comes from Babel (CLDR), so grouping follows each locale's
rules, e.g. en-IN groups as 1,00,000.
"""

import math
import re

from babel.core import Locale, UnknownLocaleError
from babel.numbers import UnknownCurrencyError, format_currency as babel_format_currency
from babel.numbers import format_decimal

from fincalc.currencies import Currency

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000

_FRACTION_PATTERN = re.compile(r"\.[0#]+")


def round_currency(value: float) -> int:
    """
    Round to the nearest whole currency unit.

    Halves round away from zero (2.5 -> 3, -2.5 -> -3) rather than
    Python's banker's rounding.
    """
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


def format_number(value: float) -> str:
    """Format a number rounded to an integer with en-US grouping."""
    return format_decimal(round_currency(value), locale="en_US")


def _babel_locale(tag: str) -> Locale:
    return Locale.parse(tag.replace("-", "_"))


def format_currency(amount: float, currency: Currency) -> str:
    """
    Format an amount in the currency's locale with no fraction digits.

    Falls back to ``symbol + format_number(amount)`` when Babel has no
    data for the locale or currency code.
    """
    try:
        locale = _babel_locale(currency.locale)
        pattern = _FRACTION_PATTERN.sub("", locale.currency_formats["standard"].pattern)
        return babel_format_currency(
            round_currency(amount),
            currency.code,
            format=pattern,
            locale=locale,
            currency_digits=False,
        )
    except (UnknownLocaleError, UnknownCurrencyError, ValueError):
        return f"{currency.symbol}{format_number(amount)}"


def format_currency_compact(amount: float, currency: Currency) -> str:
    """
    Abbreviate large amounts with Cr / L / K suffixes.

    The crore/lakh convention is applied to every currency.
    """
    if amount >= CRORE:
        return f"{currency.symbol}{amount / CRORE:.1f}Cr"
    if amount >= LAKH:
        return f"{currency.symbol}{amount / LAKH:.1f}L"
    if amount >= THOUSAND:
        return f"{currency.symbol}{amount / THOUSAND:.1f}K"
    return f"{currency.symbol}{round_currency(amount)}"


def format_exchange_rate(rate: float) -> str:
    """Show 4 decimals for rates >= 1, otherwise 6."""
    if rate >= 1:
        return f"{rate:.4f}"
    return f"{rate:.6f}"
