"""
Supported currencies.

Each currency carries the locale used to format its amounts.
"""

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class Currency:
    """A display currency."""

    code: str  # ISO 4217 code
    name: str
    symbol: str
    locale: str  # BCP 47 tag, e.g. "en-IN"


SUPPORTED_CURRENCIES: List[Currency] = [
    Currency(code="INR", name="Indian Rupee", symbol="₹", locale="en-IN"),
    Currency(code="USD", name="US Dollar", symbol="$", locale="en-US"),
    Currency(code="EUR", name="Euro", symbol="€", locale="en-EU"),
    Currency(code="GBP", name="British Pound", symbol="£", locale="en-GB"),
    Currency(code="JPY", name="Japanese Yen", symbol="¥", locale="ja-JP"),
    Currency(code="CAD", name="Canadian Dollar", symbol="C$", locale="en-CA"),
    Currency(code="AUD", name="Australian Dollar", symbol="A$", locale="en-AU"),
    Currency(code="CHF", name="Swiss Franc", symbol="CHF", locale="de-CH"),
    Currency(code="CNY", name="Chinese Yuan", symbol="¥", locale="zh-CN"),
    Currency(code="SGD", name="Singapore Dollar", symbol="S$", locale="en-SG"),
]

# INR is the default selection
DEFAULT_CURRENCY = SUPPORTED_CURRENCIES[0]

_BY_CODE: Dict[str, Currency] = {c.code: c for c in SUPPORTED_CURRENCIES}


def get_currency(code: str) -> Currency:
    """Look up a supported currency by code (case-insensitive)."""
    try:
        return _BY_CODE[code.upper()]
    except KeyError:
        raise KeyError(f"Unsupported currency: {code}") from None


def is_supported(code: str) -> bool:
    return code.upper() in _BY_CODE
