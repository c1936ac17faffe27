"""
Exchange rate service.

Fetches latest rates per base currency from exchangerate-api.com (no key
required) and converts amounts between currencies. Rates are cached per
base currency for a few minutes.
"""

import logging
import random
import time
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional, Tuple

import httpx

from fincalc.config import get_settings

logger = logging.getLogger(__name__)

# Historical series fluctuates up to this fraction either side of the current rate
HISTORICAL_FLUCTUATION = 0.05


class CurrencyConversionError(Exception):
    """Exchange rates could not be fetched or a rate is missing."""


class UnsupportedCurrencyError(CurrencyConversionError):
    """The provider has no rate for the requested currency pair."""


@dataclass(frozen=True)
class ExchangeRates:
    base: str
    date: str
    rates: Dict[str, float]


@dataclass(frozen=True)
class ConversionResult:
    from_currency: str
    to_currency: str
    amount: float
    converted_amount: float
    rate: float
    inverse_rate: float
    last_updated: str


@dataclass(frozen=True)
class HistoricalRate:
    date: date
    rate: float


def parse_exchange_rates(payload: Dict) -> ExchangeRates:
    """
    Parse a ``{"base", "date", "rates"}`` response body.

    Raises:
        CurrencyConversionError: If the body does not have that shape
    """
    try:
        rates = {code: float(rate) for code, rate in payload["rates"].items()}
        return ExchangeRates(base=payload["base"], date=str(payload["date"]), rates=rates)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise CurrencyConversionError(f"Malformed exchange rate response: {e}") from e


class ExchangeRateService:
    """Exchange rate lookups with a per-base-currency TTL cache."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        cache_minutes: Optional[int] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.exchange_rate_base_url).rstrip("/")
        if cache_minutes is None:
            cache_minutes = settings.exchange_rate_cache_minutes
        self.cache_seconds = cache_minutes * 60
        self.timeout = timeout if timeout is not None else settings.exchange_rate_timeout_seconds
        self.transport = transport
        self.clock = clock
        self._cache: Dict[str, Tuple[ExchangeRates, float]] = {}

    async def _fetch(self, base: str) -> ExchangeRates:
        url = f"{self.base_url}/{base}"
        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
                response = await client.get(url)
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error fetching exchange rates for {base}: {str(e)}")
            raise CurrencyConversionError(
                "Failed to fetch exchange rates. Please try again later."
            ) from e

        return parse_exchange_rates(payload)

    async def get_exchange_rates(self, base_currency: str = "USD") -> ExchangeRates:
        """Latest rates for a base currency, served from cache when fresh."""
        base = base_currency.upper()
        cached = self._cache.get(base)
        if cached and self.clock() - cached[1] < self.cache_seconds:
            return cached[0]

        rates = await self._fetch(base)
        self._cache[base] = (rates, self.clock())
        logger.info(f"Fetched {len(rates.rates)} exchange rates for {base}")
        return rates

    async def convert(
        self, amount: float, from_currency: str, to_currency: str
    ) -> ConversionResult:
        """
        Convert an amount between currencies.

        Converting a currency to itself returns rate 1 without a lookup.

        Raises:
            CurrencyConversionError: If rates cannot be fetched
            UnsupportedCurrencyError: If the target currency has no rate
        """
        from_currency = from_currency.upper()
        to_currency = to_currency.upper()

        if from_currency == to_currency:
            return ConversionResult(
                from_currency=from_currency,
                to_currency=to_currency,
                amount=amount,
                converted_amount=amount,
                rate=1.0,
                inverse_rate=1.0,
                last_updated=datetime.now(timezone.utc).isoformat(),
            )

        rates = await self.get_exchange_rates(from_currency)
        rate = rates.rates.get(to_currency)
        if not rate:
            raise UnsupportedCurrencyError(
                f"Exchange rate not found for {from_currency} to {to_currency}"
            )

        return ConversionResult(
            from_currency=from_currency,
            to_currency=to_currency,
            amount=amount,
            converted_amount=amount * rate,
            rate=rate,
            inverse_rate=1 / rate,
            last_updated=rates.date,
        )

    def clear_cache(self) -> None:
        self._cache.clear()


def generate_historical_rates(
    current_rate: float,
    days: int = 30,
    today: Optional[date] = None,
    rng: Optional[random.Random] = None,
) -> List[HistoricalRate]:
    """
    Synthesize a trailing daily series around the current rate.

    This is placeholder data (random +/-5% moves), not provider history.
    Pass ``rng`` for a reproducible series.
    """
    rng = rng or random.Random()
    today = today or date.today()

    series = []
    for offset in range(days - 1, -1, -1):
        fluctuation = (rng.random() - 0.5) * 2 * HISTORICAL_FLUCTUATION
        series.append(
            HistoricalRate(
                date=today - timedelta(days=offset),
                rate=round(current_rate * (1 + fluctuation), 6),
            )
        )
    return series


_exchange_rate_service: Optional[ExchangeRateService] = None


def get_exchange_rate_service() -> ExchangeRateService:
    """Get the exchange rate service singleton."""
    global _exchange_rate_service
    if _exchange_rate_service is None:
        _exchange_rate_service = ExchangeRateService()
    return _exchange_rate_service
