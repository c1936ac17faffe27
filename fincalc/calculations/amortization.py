"""
Loan EMI and Amortization Calculations

Implements equated monthly installment (EMI) and amortization schedule
calculations, matching Excel's PMT function for the installment.
"""

import math
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple

from dateutil.relativedelta import relativedelta

from fincalc.formatting import round_currency

# Months of detail kept in the amortization schedule (first 5 years)
MAX_SCHEDULE_MONTHS = 60


@dataclass(frozen=True)
class AmortizationRow:
    """A single month of the amortization schedule, in whole currency units."""

    month: int
    emi: int
    principal: int
    interest: int
    balance: int
    real_emi: Optional[int] = None
    real_balance: Optional[int] = None
    payment_date: Optional[date] = None


@dataclass(frozen=True)
class EMIResult:
    loan_amount: float
    interest_rate: float
    tenure: int
    emi: int
    total_payable: int
    total_interest: int
    inflation_rate: Optional[float] = None
    real_emi: Optional[int] = None
    real_total_payable: Optional[int] = None
    breakdown: Tuple[AmortizationRow, ...] = ()


def calculate_payment(principal: float, monthly_rate: float, months: int) -> float:
    """
    Calculate the monthly installment.

    Matches Excel's PMT() function.

    Args:
        principal: Loan principal amount
        monthly_rate: Monthly interest rate as decimal (e.g., 0.0075)
        months: Number of monthly installments

    Returns:
        Monthly payment amount (positive number)
    """
    if principal <= 0 or months <= 0:
        return 0.0

    if monthly_rate == 0:
        return principal / months

    # (1 + r)^n - 1, accurate for rates too small to change 1 + r
    growth_less_one = math.expm1(months * math.log1p(monthly_rate))
    return principal * monthly_rate * (growth_less_one + 1) / growth_less_one


def generate_amortization_schedule(
    principal: float,
    monthly_rate: float,
    payment: float,
    months: int,
    monthly_inflation: Optional[float] = None,
    start_date: Optional[date] = None,
) -> List[AmortizationRow]:
    """
    Generate the amortization schedule for a fixed installment.

    Args:
        principal: Loan principal amount
        monthly_rate: Monthly interest rate as decimal
        payment: Unrounded monthly installment
        months: Number of months to generate
        monthly_inflation: Monthly inflation as decimal; when set, each row
            carries the installment and balance discounted to today's money
        start_date: Date of the first installment

    Returns:
        List of amortization rows
    """
    schedule = []
    balance = principal

    for month in range(1, months + 1):
        interest = balance * monthly_rate
        principal_pmt = payment - interest
        balance = max(0.0, balance - principal_pmt)

        real_emi = None
        real_balance = None
        if monthly_inflation is not None:
            discount = (1 + monthly_inflation) ** month
            real_emi = round_currency(payment / discount)
            real_balance = round_currency(balance / discount)

        schedule.append(
            AmortizationRow(
                month=month,
                emi=round_currency(payment),
                principal=round_currency(principal_pmt),
                interest=round_currency(interest),
                balance=round_currency(balance),
                real_emi=real_emi,
                real_balance=real_balance,
                payment_date=start_date + relativedelta(months=month - 1) if start_date else None,
            )
        )

    return schedule


def calculate_emi(
    loan_amount: float,
    interest_rate: float,
    tenure: int,
    inflation_rate: Optional[float] = None,
    start_date: Optional[date] = None,
) -> EMIResult:
    """
    Calculate the EMI, totals and the first years of amortization.

    Args:
        loan_amount: Loan principal
        interest_rate: Annual interest rate in percent
        tenure: Loan tenure in years
        inflation_rate: Annual inflation in percent (optional)
        start_date: Date of the first installment (optional)

    Returns:
        EMIResult with headline figures rounded to whole currency units
    """
    monthly_rate = interest_rate / 100 / 12
    total_months = int(tenure * 12)

    emi = calculate_payment(loan_amount, monthly_rate, total_months)
    total_payable = emi * total_months
    total_interest = total_payable - loan_amount

    real_emi = None
    real_total_payable = None
    monthly_inflation = None

    if inflation_rate is not None and inflation_rate > 0:
        # Headline figures are discounted once, to the end of the tenure
        tenure_discount = (1 + inflation_rate / 100) ** tenure
        real_emi = round_currency(emi / tenure_discount)
        real_total_payable = round_currency(total_payable / tenure_discount)
        monthly_inflation = inflation_rate / 100 / 12

    breakdown = generate_amortization_schedule(
        principal=loan_amount,
        monthly_rate=monthly_rate,
        payment=emi,
        months=min(total_months, MAX_SCHEDULE_MONTHS),
        monthly_inflation=monthly_inflation,
        start_date=start_date,
    )

    return EMIResult(
        loan_amount=loan_amount,
        interest_rate=interest_rate,
        tenure=tenure,
        emi=round_currency(emi),
        total_payable=round_currency(total_payable),
        total_interest=round_currency(total_interest),
        inflation_rate=inflation_rate,
        real_emi=real_emi,
        real_total_payable=real_total_payable,
        breakdown=tuple(breakdown),
    )

