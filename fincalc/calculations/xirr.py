"""
XIRR Calculations

Implements XIRR using Newton-Raphson over irregular dated cash flows,
matching Excel's XIRR function but with a 365.25-day year.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 100
TOLERANCE = 1e-6
DEFAULT_GUESS = 0.1
DAYS_PER_YEAR = 365.25

# Admissible band for the rate during iteration (decimal)
MIN_RATE = -0.99
MAX_RATE = 10.0


class XIRRError(ValueError):
    """Base class for XIRR failures."""


class InvalidCashFlowsError(XIRRError):
    """The cash flow set cannot have an internal rate of return."""


class NonConvergentError(XIRRError):
    """Newton-Raphson failed to find a rate."""


@dataclass(frozen=True)
class CashFlow:
    """A dated cash flow (negative = investment, positive = return)."""

    date: date
    amount: float
    description: Optional[str] = None


@dataclass(frozen=True)
class CumulativePoint:
    date: date
    cumulative_investment: float
    cumulative_returns: float
    net_position: float


@dataclass(frozen=True)
class XIRRResult:
    cash_flows: Tuple[CashFlow, ...]
    xirr: float  # percent
    total_invested: float
    total_returned: float
    net_gain: float
    net_gain_percent: float
    duration: float  # years
    annualized_return: float
    cumulative_data: Tuple[CumulativePoint, ...] = ()


def year_fractions(cash_flows: Sequence[CashFlow]) -> np.ndarray:
    """Years elapsed since the first cash flow (365.25-day year)."""
    base_date = cash_flows[0].date
    days = [(cf.date - base_date).days for cf in cash_flows]
    return np.asarray(days, dtype=float) / DAYS_PER_YEAR


def xnpv(cash_flows: Sequence[CashFlow], rate: float) -> float:
    """
    Calculate XNPV (NPV with specific dates).

    Args:
        cash_flows: Cash flows sorted by date; the first date is the origin
        rate: Annual discount rate as decimal

    Returns:
        Net present value at the origin date
    """
    years = year_fractions(cash_flows)
    amounts = np.asarray([cf.amount for cf in cash_flows], dtype=float)
    return float(np.sum(amounts / (1 + rate) ** years))


def xnpv_derivative(cash_flows: Sequence[CashFlow], rate: float) -> float:
    """Calculate derivative of XNPV with respect to rate."""
    years = year_fractions(cash_flows)
    amounts = np.asarray([cf.amount for cf in cash_flows], dtype=float)
    return float(np.sum(-years * amounts / (1 + rate) ** (years + 1)))


def _validate(cash_flows: List[CashFlow]) -> None:
    if len(cash_flows) < 2:
        raise InvalidCashFlowsError("At least 2 cash flows are required for XIRR calculation")

    has_positive = any(cf.amount > 0 for cf in cash_flows)
    has_negative = any(cf.amount < 0 for cf in cash_flows)

    if not has_positive or not has_negative:
        raise InvalidCashFlowsError("XIRR requires both positive and negative cash flows")


def solve_rate(cash_flows: Sequence[CashFlow], guess: float = DEFAULT_GUESS) -> float:
    """
    Find the annual rate at which XNPV is zero.

    Args:
        cash_flows: Validated cash flows sorted by date
        guess: Initial guess for rate (default 0.1 = 10%)

    Returns:
        Annual rate as decimal

    Raises:
        NonConvergentError: If the derivative flattens, the rate leaves
            the admissible band, or iterations run out
    """
    rate = guess

    for iteration in range(MAX_ITERATIONS):
        npv = xnpv(cash_flows, rate)
        if abs(npv) < TOLERANCE:
            return rate

        dnpv = xnpv_derivative(cash_flows, rate)
        if abs(dnpv) < TOLERANCE:
            raise NonConvergentError("Unable to calculate XIRR - derivative too small")

        new_rate = rate - npv / dnpv

        if not MIN_RATE < new_rate < MAX_RATE:
            raise NonConvergentError("XIRR calculation did not converge to a reasonable value")

        if abs(new_rate - rate) < TOLERANCE:
            logger.debug(f"XIRR converged after {iteration + 1} iterations")
            return new_rate

        rate = new_rate

    raise NonConvergentError(f"XIRR calculation did not converge in {MAX_ITERATIONS} iterations")


def _cumulative(cash_flows: Iterable[CashFlow]) -> List[CumulativePoint]:
    points = []
    invested = 0.0
    returned = 0.0

    for cf in cash_flows:
        if cf.amount < 0:
            invested += abs(cf.amount)
        else:
            returned += cf.amount

        points.append(
            CumulativePoint(
                date=cf.date,
                cumulative_investment=invested,
                cumulative_returns=returned,
                net_position=returned - invested,
            )
        )

    return points


def calculate_xirr(
    cash_flows: Iterable[CashFlow], guess: float = DEFAULT_GUESS
) -> XIRRResult:
    """
    Calculate XIRR and summary statistics for dated cash flows.

    Args:
        cash_flows: Cash flows in any order
        guess: Initial guess for rate as decimal

    Returns:
        XIRRResult with the rate in percent

    Raises:
        InvalidCashFlowsError: Fewer than 2 flows, or no positive/negative mix
        NonConvergentError: The solver failed
    """
    ordered = sorted(cash_flows, key=lambda cf: cf.date)
    _validate(ordered)

    try:
        rate = solve_rate(ordered, guess)
    except NonConvergentError as e:
        logger.warning(f"XIRR failed for {len(ordered)} cash flows: {e}")
        raise

    xirr = rate * 100

    total_invested = sum(abs(cf.amount) for cf in ordered if cf.amount < 0)
    total_returned = sum(cf.amount for cf in ordered if cf.amount > 0)
    net_gain = total_returned - total_invested

    duration = (ordered[-1].date - ordered[0].date).days / DAYS_PER_YEAR

    return XIRRResult(
        cash_flows=tuple(ordered),
        xirr=xirr,
        total_invested=total_invested,
        total_returned=total_returned,
        net_gain=net_gain,
        net_gain_percent=net_gain / total_invested * 100,
        duration=duration,
        annualized_return=xirr,
        cumulative_data=tuple(_cumulative(ordered)),
    )
