"""
Income Tax Calculations

Progressive slab taxation with capped deductions, parameterized by a
per-country table (see ``fincalc.calculations.jurisdictions``).
"""

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from fincalc.currencies import Currency


@dataclass(frozen=True)
class TaxSlab:
    """Income band [lower, upper) taxed at ``rate`` percent. upper=None is unbounded."""

    lower: float
    upper: Optional[float]
    rate: float


@dataclass(frozen=True)
class TaxDeduction:
    key: str
    name: str
    description: Optional[str] = None
    max_limit: Optional[float] = None
    default_value: Optional[float] = None

    def allowed(self, claimed: float) -> float:
        """Clamp a claimed amount to [0, max_limit]."""
        amount = max(0.0, claimed)
        if self.max_limit is not None:
            amount = min(amount, self.max_limit)
        return amount


@dataclass(frozen=True)
class TaxCountry:
    code: str
    name: str
    flag: str
    currency: Currency
    tax_year: str
    income_description: str
    slabs: Tuple[TaxSlab, ...]
    deductions: Tuple[TaxDeduction, ...]


@dataclass(frozen=True)
class TaxBreakdown:
    lower: float
    upper: Optional[float]
    rate: float
    taxable_amount: float
    tax_on_slab: float


@dataclass(frozen=True)
class TaxResult:
    gross_income: float
    total_deductions: float
    taxable_income: float
    total_tax: float
    net_income: float
    effective_tax_rate: float
    deductions_used: Dict[str, float]
    tax_breakdown: Tuple[TaxBreakdown, ...]


def validate_slabs(slabs: Tuple[TaxSlab, ...]) -> None:
    """
    Check that slabs start at zero, are contiguous and ascending, and
    that only the last one is unbounded.

    Raises:
        ValueError: If the table is malformed
    """
    if not slabs:
        raise ValueError("At least one tax slab is required")
    if slabs[0].lower != 0:
        raise ValueError("First tax slab must start at 0")

    for current, following in zip(slabs, slabs[1:]):
        if current.upper is None:
            raise ValueError("Only the last tax slab may be unbounded")
        if current.upper <= current.lower:
            raise ValueError(f"Empty tax slab starting at {current.lower}")
        if following.lower != current.upper:
            raise ValueError(
                f"Tax slabs are not contiguous at {current.upper} / {following.lower}"
            )

    if slabs[-1].upper is not None:
        raise ValueError("Last tax slab must be unbounded")


def default_deductions(country: TaxCountry) -> Dict[str, float]:
    """Default claimed amount for each of the country's deductions."""
    return {d.key: d.default_value or 0.0 for d in country.deductions}


def calculate_slab_tax(taxable_income: float, slabs: Tuple[TaxSlab, ...]) -> List[TaxBreakdown]:
    """
    Tax each slab's share of the taxable income.

    Every slab produces a row; slabs above the taxable income have zero
    taxable amount and zero tax.
    """
    breakdown = []

    for slab in slabs:
        slab_end = taxable_income if slab.upper is None else min(slab.upper, taxable_income)

        if taxable_income > slab.lower:
            amount = max(0.0, slab_end - slab.lower)
            tax = amount * slab.rate / 100
        else:
            amount = 0.0
            tax = 0.0

        breakdown.append(
            TaxBreakdown(
                lower=slab.lower,
                upper=slab.upper,
                rate=slab.rate,
                taxable_amount=amount,
                tax_on_slab=tax,
            )
        )

    return breakdown


def calculate_income_tax(
    country: TaxCountry,
    gross_income: float,
    deductions: Mapping[str, float],
) -> TaxResult:
    """
    Calculate income tax for a country.

    Args:
        country: Jurisdiction with its slabs and deductions
        gross_income: Annual gross income (negative values count as 0)
        deductions: Claimed amount per deduction key; missing keys are 0,
            keys the country does not define are ignored

    Returns:
        TaxResult including a row for every slab and the allowed amount
        of every deduction
    """
    gross_income = max(0.0, gross_income)

    deductions_used = {}
    for deduction in country.deductions:
        deductions_used[deduction.key] = deduction.allowed(deductions.get(deduction.key, 0.0))
    total_deductions = sum(deductions_used.values())

    taxable_income = max(0.0, gross_income - total_deductions)

    breakdown = calculate_slab_tax(taxable_income, country.slabs)
    total_tax = sum(row.tax_on_slab for row in breakdown)

    net_income = gross_income - total_tax
    effective_tax_rate = total_tax / gross_income * 100 if gross_income > 0 else 0.0

    return TaxResult(
        gross_income=gross_income,
        total_deductions=total_deductions,
        taxable_income=taxable_income,
        total_tax=total_tax,
        net_income=net_income,
        effective_tax_rate=effective_tax_rate,
        deductions_used=deductions_used,
        tax_breakdown=tuple(breakdown),
    )
