"""
Currency API endpoints: conversion and display formatting.
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from fincalc.config import get_settings
from fincalc.currencies import SUPPORTED_CURRENCIES, get_currency
from fincalc.formatting import format_currency, format_currency_compact, format_exchange_rate
from fincalc.services.exchange_rates import (
    CurrencyConversionError,
    ExchangeRateService,
    UnsupportedCurrencyError,
    generate_historical_rates,
    get_exchange_rate_service,
)

router = APIRouter()


class FormatInput(BaseModel):
    """Input for amount formatting."""

    amount: float
    currency: str
    compact: bool = False


@router.get("/supported")
async def list_currencies():
    """List supported display currencies."""
    return [asdict(c) for c in SUPPORTED_CURRENCIES]


@router.get("/convert")
async def convert(
    amount: float = Query(ge=0),
    from_currency: str = Query(alias="from", min_length=3, max_length=3),
    to_currency: str = Query(alias="to", min_length=3, max_length=3),
    service: ExchangeRateService = Depends(get_exchange_rate_service),
):
    """Convert an amount and return a trailing rate series for charting."""
    try:
        result = await service.convert(amount, from_currency, to_currency)
    except UnsupportedCurrencyError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CurrencyConversionError as e:
        raise HTTPException(status_code=502, detail=str(e))

    history = generate_historical_rates(result.rate, days=get_settings().historical_rate_days)

    return {
        **asdict(result),
        "display_rate": format_exchange_rate(result.rate),
        "display_inverse_rate": format_exchange_rate(result.inverse_rate),
        "historical_rates": [asdict(point) for point in history],
    }


@router.post("/format")
async def format_amount(inputs: FormatInput):
    """Format an amount in a supported currency."""
    try:
        currency = get_currency(inputs.currency)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=e.args[0])

    if inputs.compact:
        formatted = format_currency_compact(inputs.amount, currency)
    else:
        formatted = format_currency(inputs.amount, currency)

    return {"amount": inputs.amount, "currency": currency.code, "formatted": formatted}
