"""
Compound Growth Calculations

SIP, lump sum and CAGR projections, each with an optional
inflation-adjusted ("real") variant and a chart series.

Rates are passed as percentages (e.g., 12 for 12%). Results are left at
full precision; rounding is a display concern.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

# Upper bound on the number of points in the SIP monthly series
MAX_SIP_POINTS = 50


@dataclass(frozen=True)
class SIPPoint:
    """One sampled month of a SIP projection."""

    month: int
    invested: float
    value: float
    real_value: Optional[float] = None


@dataclass(frozen=True)
class YearlyPoint:
    """Year-end value of a lump sum projection."""

    year: int
    value: float
    real_value: Optional[float] = None


@dataclass(frozen=True)
class CAGRPoint:
    """Year-end value of a CAGR projection."""

    year: int
    value: float
    annual_returns: float
    real_value: Optional[float] = None


@dataclass(frozen=True)
class SIPResult:
    monthly_investment: float
    annual_return: float
    years: int
    total_invested: float
    expected_returns: float
    maturity_value: float
    inflation_rate: Optional[float] = None
    real_total_invested: Optional[float] = None
    real_expected_returns: Optional[float] = None
    real_maturity_value: Optional[float] = None
    monthly_data: Tuple[SIPPoint, ...] = ()


@dataclass(frozen=True)
class LumpSumResult:
    principal: float
    annual_return: float
    years: int
    maturity_value: float
    total_returns: float
    inflation_rate: Optional[float] = None
    real_principal: Optional[float] = None
    real_maturity_value: Optional[float] = None
    real_total_returns: Optional[float] = None
    yearly_data: Tuple[YearlyPoint, ...] = ()


@dataclass(frozen=True)
class CAGRResult:
    initial_value: float
    final_value: float
    years: int
    cagr: float
    total_growth_percent: float
    absolute_returns: float
    inflation_rate: Optional[float] = None
    real_cagr: Optional[float] = None
    real_final_value: Optional[float] = None
    yearly_projection: Tuple[CAGRPoint, ...] = ()


def adjusts_for_inflation(inflation_rate: Optional[float]) -> bool:
    """Inflation variants are only produced for a positive inflation rate."""
    return inflation_rate is not None and inflation_rate > 0


def real_rate_of_return(nominal_rate: float, inflation_rate: float) -> float:
    """
    Fisher real rate of return.

    Args:
        nominal_rate: Nominal annual rate as decimal
        inflation_rate: Annual inflation as decimal

    Returns:
        Real annual rate as decimal
    """
    return (1 + nominal_rate) / (1 + inflation_rate) - 1


def sip_future_value(
    monthly_investment: float, monthly_rate: float, months: float
) -> float:
    """
    Future value of an annuity-due of monthly contributions.

    FV = M * [((1 + r)^n - 1) / r] * (1 + r), or M * n when r is zero.
    """
    if monthly_rate == 0:
        return monthly_investment * months

    growth_less_one = math.expm1(months * math.log1p(monthly_rate))
    return monthly_investment * (growth_less_one / monthly_rate) * (1 + monthly_rate)


def calculate_sip(
    monthly_investment: float,
    annual_return: float,
    years: int,
    inflation_rate: Optional[float] = None,
) -> SIPResult:
    """
    Calculate the maturity of a systematic investment plan.

    Args:
        monthly_investment: Amount invested at the start of every month
        annual_return: Expected annual return in percent
        years: Investment horizon in years
        inflation_rate: Annual inflation in percent (optional)

    Returns:
        SIPResult with nominal (and, if requested, real) figures and a
        monthly series sampled to at most MAX_SIP_POINTS points
    """
    monthly_rate = annual_return / 100 / 12
    total_months = int(years * 12)

    maturity_value = sip_future_value(monthly_investment, monthly_rate, total_months)
    total_invested = monthly_investment * total_months
    expected_returns = maturity_value - total_invested

    real_monthly_rate = None
    real_total_invested = None
    real_expected_returns = None
    real_maturity_value = None

    if adjusts_for_inflation(inflation_rate):
        inflation = inflation_rate / 100
        real_monthly_rate = real_rate_of_return(annual_return / 100, inflation) / 12

        real_maturity_value = sip_future_value(
            monthly_investment, real_monthly_rate, total_months
        )
        # Present value of the contributions in today's money
        real_total_invested = total_invested / (1 + inflation) ** years
        real_expected_returns = real_maturity_value - total_invested

    step = max(1, math.ceil(total_months / MAX_SIP_POINTS))
    monthly_data = []
    for month in range(1, total_months + 1, step):
        real_value = None
        if real_monthly_rate is not None:
            real_value = sip_future_value(monthly_investment, real_monthly_rate, month)

        monthly_data.append(
            SIPPoint(
                month=month,
                invested=monthly_investment * month,
                value=sip_future_value(monthly_investment, monthly_rate, month),
                real_value=real_value,
            )
        )

    return SIPResult(
        monthly_investment=monthly_investment,
        annual_return=annual_return,
        years=years,
        total_invested=total_invested,
        expected_returns=expected_returns,
        maturity_value=maturity_value,
        inflation_rate=inflation_rate,
        real_total_invested=real_total_invested,
        real_expected_returns=real_expected_returns,
        real_maturity_value=real_maturity_value,
        monthly_data=tuple(monthly_data),
    )


def calculate_lump_sum(
    principal: float,
    annual_return: float,
    years: int,
    inflation_rate: Optional[float] = None,
) -> LumpSumResult:
    """
    Calculate the maturity of a one-time investment compounded annually.

    Args:
        principal: Amount invested at year 0
        annual_return: Expected annual return in percent
        years: Holding period in years
        inflation_rate: Annual inflation in percent (optional)

    Returns:
        LumpSumResult with a year-by-year series for years 0..years
    """
    rate = annual_return / 100
    maturity_value = principal * (1 + rate) ** years
    total_returns = maturity_value - principal

    real_rate = None
    real_principal = None
    real_maturity_value = None
    real_total_returns = None

    if adjusts_for_inflation(inflation_rate):
        real_rate = real_rate_of_return(rate, inflation_rate / 100)
        real_principal = principal
        real_maturity_value = principal * (1 + real_rate) ** years
        real_total_returns = real_maturity_value - principal

    yearly_data = []
    for year in range(int(years) + 1):
        yearly_data.append(
            YearlyPoint(
                year=year,
                value=principal * (1 + rate) ** year,
                real_value=(
                    principal * (1 + real_rate) ** year if real_rate is not None else None
                ),
            )
        )

    return LumpSumResult(
        principal=principal,
        annual_return=annual_return,
        years=years,
        maturity_value=maturity_value,
        total_returns=total_returns,
        inflation_rate=inflation_rate,
        real_principal=real_principal,
        real_maturity_value=real_maturity_value,
        real_total_returns=real_total_returns,
        yearly_data=tuple(yearly_data),
    )


def calculate_cagr(
    initial_value: float,
    final_value: float,
    years: int,
    inflation_rate: Optional[float] = None,
) -> CAGRResult:
    """
    Calculate the compound annual growth rate between two values.

    CAGR = (final / initial)^(1 / years) - 1, reported in percent.
    """
    cagr = ((final_value / initial_value) ** (1 / years) - 1) * 100
    total_growth_percent = (final_value - initial_value) / initial_value * 100
    absolute_returns = final_value - initial_value

    real_cagr = None
    real_final_value = None

    if adjusts_for_inflation(inflation_rate):
        inflation = inflation_rate / 100
        real_cagr = real_rate_of_return(cagr / 100, inflation) * 100
        # Final value in today's purchasing power
        real_final_value = final_value / (1 + inflation) ** years

    growth = 1 + cagr / 100
    yearly_projection = []
    for year in range(int(years) + 1):
        value = initial_value * growth ** year
        previous = initial_value * growth ** (year - 1) if year > 0 else initial_value
        yearly_projection.append(
            CAGRPoint(
                year=year,
                value=value,
                annual_returns=value - previous if year > 0 else 0.0,
                real_value=(
                    initial_value * (1 + real_cagr / 100) ** year
                    if real_cagr is not None
                    else None
                ),
            )
        )

    return CAGRResult(
        initial_value=initial_value,
        final_value=final_value,
        years=years,
        cagr=cagr,
        total_growth_percent=total_growth_percent,
        absolute_returns=absolute_returns,
        inflation_rate=inflation_rate,
        real_cagr=real_cagr,
        real_final_value=real_final_value,
        yearly_projection=tuple(yearly_projection),
    )
