"""
Application services module.
"""

from fincalc.services.exchange_rates import (
    CurrencyConversionError,
    ExchangeRateService,
    get_exchange_rate_service,
)

__all__ = ["CurrencyConversionError", "ExchangeRateService", "get_exchange_rate_service"]
