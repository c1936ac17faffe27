"""
API routes for the finance calculators.
"""

from fastapi import APIRouter

from fincalc.api import calculations, currency, tax

router = APIRouter()

# Include sub-routers
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
router.include_router(tax.router, prefix="/tax", tags=["tax"])
router.include_router(currency.router, prefix="/currency", tags=["currency"])
