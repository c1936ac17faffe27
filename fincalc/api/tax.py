"""
Income tax API endpoints.
"""

from dataclasses import asdict
from typing import Dict, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from fincalc.calculations.jurisdictions import TAX_COUNTRIES, get_tax_country
from fincalc.calculations.tax import calculate_income_tax, default_deductions
from fincalc.formatting import format_currency

router = APIRouter()


class TaxInput(BaseModel):
    """Input for income tax calculation."""

    country_code: str
    gross_income: float = Field(ge=0)
    # Omitted -> the country's default claims
    deductions: Optional[Dict[str, float]] = None


@router.get("/countries")
async def list_countries():
    """List supported countries with their slabs and deductions."""
    return [asdict(country) for country in TAX_COUNTRIES]


@router.post("/calculate")
async def calculate_tax(inputs: TaxInput):
    """Calculate income tax with a per-slab breakdown."""
    try:
        country = get_tax_country(inputs.country_code)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=e.args[0])

    claimed = inputs.deductions
    if claimed is None:
        claimed = default_deductions(country)

    result = calculate_income_tax(country, inputs.gross_income, claimed)

    return {
        **asdict(result),
        "currency": asdict(country.currency),
        "formatted": {
            "total_tax": format_currency(result.total_tax, country.currency),
            "net_income": format_currency(result.net_income, country.currency),
            "taxable_income": format_currency(result.taxable_income, country.currency),
        },
    }
