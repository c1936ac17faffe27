"""
Financial calculation API endpoints.

These endpoints accept inputs and return calculated results. Input
ranges are enforced here; the calculation engine assumes valid input.
"""

import datetime
from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from fincalc.api.dependencies import get_calculation_cache
from fincalc.calculations import amortization, growth, xirr
from fincalc.calculations.cache import CalculationCache

router = APIRouter()


class SIPInput(BaseModel):
    """Input for SIP calculation."""

    monthly_investment: float = Field(gt=0)
    annual_return: float = Field(ge=0, le=100)
    years: int = Field(gt=0, le=100)
    inflation_rate: Optional[float] = Field(default=None, ge=0, le=100)


class LumpSumInput(BaseModel):
    """Input for lump sum calculation."""

    principal: float = Field(gt=0)
    annual_return: float = Field(ge=0, le=100)
    years: int = Field(gt=0, le=100)
    inflation_rate: Optional[float] = Field(default=None, ge=0, le=100)


class EMIInput(BaseModel):
    """Input for EMI calculation."""

    loan_amount: float = Field(gt=0)
    interest_rate: float = Field(ge=0, le=100)
    tenure: int = Field(gt=0, le=50)
    inflation_rate: Optional[float] = Field(default=None, ge=0, le=100)
    start_date: Optional[datetime.date] = None


class CAGRInput(BaseModel):
    """Input for CAGR calculation."""

    initial_value: float = Field(gt=0)
    final_value: float = Field(gt=0)
    years: int = Field(gt=0, le=100)
    inflation_rate: Optional[float] = Field(default=None, ge=0, le=100)


class CashFlowInput(BaseModel):
    """A single dated cash flow."""

    date: datetime.date
    amount: float
    description: Optional[str] = None


class XIRRInput(BaseModel):
    """Input for XIRR calculation."""

    cash_flows: List[CashFlowInput]


@router.post("/sip")
async def calculate_sip(
    inputs: SIPInput, cache: CalculationCache = Depends(get_calculation_cache)
):
    """Calculate SIP maturity and monthly projection."""
    args = (inputs.monthly_investment, inputs.annual_return, inputs.years, inputs.inflation_rate)
    result = cache.get_or_compute("sip", args, lambda: growth.calculate_sip(*args))
    return asdict(result)


@router.post("/lumpsum")
async def calculate_lump_sum(
    inputs: LumpSumInput, cache: CalculationCache = Depends(get_calculation_cache)
):
    """Calculate lump sum maturity and yearly projection."""
    args = (inputs.principal, inputs.annual_return, inputs.years, inputs.inflation_rate)
    result = cache.get_or_compute("lumpsum", args, lambda: growth.calculate_lump_sum(*args))
    return asdict(result)


@router.post("/emi")
async def calculate_emi(
    inputs: EMIInput, cache: CalculationCache = Depends(get_calculation_cache)
):
    """Calculate EMI, totals and the amortization schedule."""
    args = (
        inputs.loan_amount,
        inputs.interest_rate,
        inputs.tenure,
        inputs.inflation_rate,
        inputs.start_date,
    )
    result = cache.get_or_compute("emi", args, lambda: amortization.calculate_emi(*args))
    return asdict(result)


@router.post("/cagr")
async def calculate_cagr(
    inputs: CAGRInput, cache: CalculationCache = Depends(get_calculation_cache)
):
    """Calculate CAGR and yearly projection."""
    args = (inputs.initial_value, inputs.final_value, inputs.years, inputs.inflation_rate)
    result = cache.get_or_compute("cagr", args, lambda: growth.calculate_cagr(*args))
    return asdict(result)


@router.post("/xirr")
async def calculate_xirr(
    inputs: XIRRInput, cache: CalculationCache = Depends(get_calculation_cache)
):
    """Calculate XIRR for dated cash flows."""
    cash_flows = tuple(
        xirr.CashFlow(date=cf.date, amount=cf.amount, description=cf.description)
        for cf in inputs.cash_flows
    )

    try:
        result = cache.get_or_compute(
            "xirr", cash_flows, lambda: xirr.calculate_xirr(cash_flows)
        )
    except xirr.InvalidCashFlowsError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except xirr.NonConvergentError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return asdict(result)
