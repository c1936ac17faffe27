"""
Tests for income tax calculation.
"""

import pytest

from fincalc.calculations.jurisdictions import (
    INDIA,
    TAX_COUNTRIES,
    UNITED_KINGDOM,
    UNITED_STATES,
    get_tax_country,
)
from fincalc.calculations.tax import (
    TaxDeduction,
    TaxSlab,
    calculate_income_tax,
    default_deductions,
    validate_slabs,
)

INDIA_CLAIMS = {
    "section80C": 150000,
    "section80D": 25000,
    "hra": 75000,
    "standardDeduction": 50000,
}


class TestIndiaTax:
    """Test the India slab table."""

    def test_taxable_900k(self):
        """Test 12 lakh gross with 3 lakh deductions."""
        result = calculate_income_tax(INDIA, 1_200_000, INDIA_CLAIMS)

        assert result.total_deductions == 300_000
        assert result.taxable_income == 900_000
        assert result.total_tax == pytest.approx(40_000)
        assert result.net_income == pytest.approx(1_160_000)
        assert result.effective_tax_rate == pytest.approx(40_000 / 1_200_000 * 100)
        assert round(result.effective_tax_rate, 2) == 3.33

    def test_breakdown_rows(self):
        """Test every slab emits a row, including zero rows."""
        result = calculate_income_tax(INDIA, 1_200_000, INDIA_CLAIMS)
        rows = result.tax_breakdown

        assert len(rows) == len(INDIA.slabs)
        assert [(r.taxable_amount, r.tax_on_slab) for r in rows] == [
            (300_000, 0),
            (400_000, 20_000),
            (200_000, 20_000),
            (0, 0),
            (0, 0),
            (0, 0),
        ]
        assert rows[-1].upper is None
        assert rows[1].rate == 5

    def test_deductions_used(self):
        """Test every defined deduction appears in the resolved map."""
        result = calculate_income_tax(INDIA, 1_200_000, INDIA_CLAIMS)
        assert result.deductions_used == {
            "section80C": 150000,
            "section80D": 25000,
            "hra": 75000,
            "standardDeduction": 50000,
            "section80E": 0,
        }

    def test_deduction_caps(self):
        """Test claims above the limit are capped and negatives floored."""
        claims = {"section80C": 400000, "section80D": -5000, "hra": 250000}
        result = calculate_income_tax(INDIA, 2_000_000, claims)
        assert result.deductions_used["section80C"] == 150000
        assert result.deductions_used["section80D"] == 0
        # HRA has no cap
        assert result.deductions_used["hra"] == 250000

    def test_unknown_deductions_ignored(self):
        """Test keys the country does not define are not deducted."""
        result = calculate_income_tax(INDIA, 1_000_000, {"mortgage": 500000})
        assert result.total_deductions == 0
        assert "mortgage" not in result.deductions_used

    def test_top_slab(self):
        """Test income in the unbounded slab."""
        result = calculate_income_tax(INDIA, 2_000_000, {})
        # 20k + 30k + 30k + 60k + 150k
        assert result.total_tax == pytest.approx(290_000)
        assert result.tax_breakdown[-1].taxable_amount == 500_000

    def test_deductions_exceed_income(self):
        """Test taxable income never goes negative."""
        result = calculate_income_tax(INDIA, 100_000, INDIA_CLAIMS)
        assert result.taxable_income == 0
        assert result.total_tax == 0
        assert result.net_income == 100_000

    def test_zero_income(self):
        """Test zero income has a zero effective rate."""
        result = calculate_income_tax(INDIA, 0, {})
        assert result.effective_tax_rate == 0
        assert result.total_tax == 0

    def test_negative_income_floored(self):
        """Test negative income is treated as zero."""
        result = calculate_income_tax(INDIA, -50_000, {})
        assert result.gross_income == 0
        assert result.net_income == 0


class TestOtherCountries:
    """Test the remaining tables."""

    def test_us_first_brackets(self):
        """Test US 10% and 12% brackets."""
        result = calculate_income_tax(UNITED_STATES, 33_850, {"standardDeduction": 13_850})
        assert result.taxable_income == 20_000
        assert result.total_tax == pytest.approx(1_100 + 9_000 * 0.12)

    def test_uk_allowance_capped(self):
        """Test UK personal allowance cap."""
        result = calculate_income_tax(UNITED_KINGDOM, 60_000, {"personalAllowance": 20_000})
        assert result.deductions_used["personalAllowance"] == 12_570

    def test_default_deductions(self):
        """Test defaults map every key, using 0 where unset."""
        defaults = default_deductions(INDIA)
        assert defaults["section80C"] == 150_000
        assert defaults["section80E"] == 0
        assert set(defaults) == {d.key for d in INDIA.deductions}

    def test_lookup(self):
        """Test country lookup is case-insensitive and strict."""
        assert get_tax_country("in") is INDIA
        with pytest.raises(KeyError):
            get_tax_country("FR")

    def test_tables_are_valid(self):
        """Test every shipped slab table is contiguous."""
        assert {c.code for c in TAX_COUNTRIES} == {"IN", "US", "UK", "CA", "AU"}
        for country in TAX_COUNTRIES:
            validate_slabs(country.slabs)


class TestSlabValidation:
    """Test slab table validation."""

    def test_gap_rejected(self):
        with pytest.raises(ValueError):
            validate_slabs((TaxSlab(0, 100, 0), TaxSlab(150, None, 10)))

    def test_bounded_last_rejected(self):
        with pytest.raises(ValueError):
            validate_slabs((TaxSlab(0, 100, 0), TaxSlab(100, 200, 10)))

    def test_nonzero_start_rejected(self):
        with pytest.raises(ValueError):
            validate_slabs((TaxSlab(10, None, 5),))

    def test_unbounded_middle_rejected(self):
        with pytest.raises(ValueError):
            validate_slabs((TaxSlab(0, None, 0), TaxSlab(100, None, 10)))

    def test_deduction_clamp(self):
        deduction = TaxDeduction(key="k", name="K", max_limit=1000)
        assert deduction.allowed(1500) == 1000
        assert deduction.allowed(-1) == 0
        assert TaxDeduction(key="u", name="U").allowed(5000) == 5000
