"""
Tax tables per country.

Rates are percentages; amounts are in each country's currency.
"""

from typing import Dict, List

from fincalc.calculations.tax import TaxCountry, TaxDeduction, TaxSlab, validate_slabs
from fincalc.currencies import get_currency

INDIA = TaxCountry(
    code="IN",
    name="India",
    flag="🇮🇳",
    currency=get_currency("INR"),
    tax_year="2024-25",
    income_description="Annual gross salary including basic pay, allowances, and perquisites",
    slabs=(
        TaxSlab(0, 300_000, 0),
        TaxSlab(300_000, 700_000, 5),
        TaxSlab(700_000, 1_000_000, 10),
        TaxSlab(1_000_000, 1_200_000, 15),
        TaxSlab(1_200_000, 1_500_000, 20),
        TaxSlab(1_500_000, None, 30),
    ),
    deductions=(
        TaxDeduction(
            key="section80C",
            name="Section 80C (PPF, ELSS, Life Insurance)",
            description="Investments in PPF, ELSS, life insurance premiums, etc.",
            max_limit=150_000,
            default_value=150_000,
        ),
        TaxDeduction(
            key="section80D",
            name="Section 80D (Health Insurance)",
            description="Health insurance premiums for self and family",
            max_limit=75_000,
            default_value=25_000,
        ),
        TaxDeduction(
            key="hra",
            name="HRA (House Rent Allowance)",
            description="House rent allowance exemption",
            default_value=100_000,
        ),
        TaxDeduction(
            key="standardDeduction",
            name="Standard Deduction",
            description="Standard deduction for salaried individuals",
            max_limit=50_000,
            default_value=50_000,
        ),
        TaxDeduction(
            key="section80E",
            name="Section 80E (Education Loan Interest)",
            description="Interest paid on education loan",
            default_value=0,
        ),
    ),
)

UNITED_STATES = TaxCountry(
    code="US",
    name="United States",
    flag="🇺🇸",
    currency=get_currency("USD"),
    tax_year="2024",
    income_description="Annual gross income including wages, salary, tips, and other compensation",
    slabs=(
        TaxSlab(0, 11_000, 10),
        TaxSlab(11_000, 44_725, 12),
        TaxSlab(44_725, 95_375, 22),
        TaxSlab(95_375, 182_050, 24),
        TaxSlab(182_050, 231_250, 32),
        TaxSlab(231_250, 578_125, 35),
        TaxSlab(578_125, None, 37),
    ),
    deductions=(
        TaxDeduction(
            key="standardDeduction",
            name="Standard Deduction (Single)",
            description="Standard deduction for single filers",
            max_limit=13_850,
            default_value=13_850,
        ),
        TaxDeduction(
            key="retirement401k",
            name="401(k) Contributions",
            description="Pre-tax contributions to 401(k) retirement plan",
            max_limit=22_500,
            default_value=10_000,
        ),
        TaxDeduction(
            key="healthInsurance",
            name="Health Insurance Premiums",
            description="Pre-tax health insurance premiums",
            default_value=3_000,
        ),
        TaxDeduction(
            key="studentLoanInterest",
            name="Student Loan Interest",
            description="Interest paid on qualified student loans",
            max_limit=2_500,
            default_value=0,
        ),
    ),
)

UNITED_KINGDOM = TaxCountry(
    code="UK",
    name="United Kingdom",
    flag="🇬🇧",
    currency=get_currency("GBP"),
    tax_year="2024-25",
    income_description="Annual gross income including salary, wages, and taxable benefits",
    slabs=(
        TaxSlab(0, 12_570, 0),
        TaxSlab(12_570, 50_270, 20),
        TaxSlab(50_270, 125_140, 40),
        TaxSlab(125_140, None, 45),
    ),
    deductions=(
        TaxDeduction(
            key="personalAllowance",
            name="Personal Allowance",
            description="Tax-free personal allowance",
            max_limit=12_570,
            default_value=12_570,
        ),
        TaxDeduction(
            key="pensionContributions",
            name="Pension Contributions",
            description="Contributions to registered pension schemes",
            default_value=5_000,
        ),
        TaxDeduction(
            key="nationalInsurance",
            name="National Insurance",
            description="National Insurance contributions (calculated separately)",
            default_value=0,
        ),
    ),
)

CANADA = TaxCountry(
    code="CA",
    name="Canada",
    flag="🇨🇦",
    currency=get_currency("CAD"),
    tax_year="2024",
    income_description="Annual gross income including employment income and taxable benefits",
    slabs=(
        TaxSlab(0, 53_359, 15),
        TaxSlab(53_359, 106_717, 20.5),
        TaxSlab(106_717, 165_430, 26),
        TaxSlab(165_430, 235_675, 29),
        TaxSlab(235_675, None, 33),
    ),
    deductions=(
        TaxDeduction(
            key="basicPersonalAmount",
            name="Basic Personal Amount",
            description="Basic personal tax credit amount",
            max_limit=15_000,
            default_value=15_000,
        ),
        TaxDeduction(
            key="rrspContributions",
            name="RRSP Contributions",
            description="Registered Retirement Savings Plan contributions",
            default_value=8_000,
        ),
        TaxDeduction(
            key="employmentExpenses",
            name="Employment Expenses",
            description="Deductible employment-related expenses",
            default_value=2_000,
        ),
    ),
)

AUSTRALIA = TaxCountry(
    code="AU",
    name="Australia",
    flag="🇦🇺",
    currency=get_currency("AUD"),
    tax_year="2024-25",
    income_description="Annual gross income including salary, wages, and fringe benefits",
    slabs=(
        TaxSlab(0, 18_200, 0),
        TaxSlab(18_200, 45_000, 19),
        TaxSlab(45_000, 120_000, 32.5),
        TaxSlab(120_000, 180_000, 37),
        TaxSlab(180_000, None, 45),
    ),
    deductions=(
        TaxDeduction(
            key="taxFreeThreshold",
            name="Tax-Free Threshold",
            description="Tax-free threshold for residents",
            max_limit=18_200,
            default_value=18_200,
        ),
        TaxDeduction(
            key="superContributions",
            name="Superannuation Contributions",
            description="Concessional superannuation contributions",
            max_limit=27_500,
            default_value=10_000,
        ),
        TaxDeduction(
            key="workRelatedExpenses",
            name="Work-Related Expenses",
            description="Deductible work-related expenses",
            default_value=3_000,
        ),
    ),
)

TAX_COUNTRIES: List[TaxCountry] = [INDIA, UNITED_STATES, UNITED_KINGDOM, CANADA, AUSTRALIA]

for _country in TAX_COUNTRIES:
    validate_slabs(_country.slabs)

_BY_CODE: Dict[str, TaxCountry] = {c.code: c for c in TAX_COUNTRIES}


def get_tax_country(code: str) -> TaxCountry:
    """Look up a country's tax table by code (e.g. "IN")."""
    try:
        return _BY_CODE[code.upper()]
    except KeyError:
        raise KeyError(f"No tax table for country: {code}") from None
