"""
Shared FastAPI dependencies.
"""

from functools import lru_cache

from fincalc.calculations.cache import CalculationCache
from fincalc.config import get_settings


@lru_cache()
def get_calculation_cache() -> CalculationCache:
    """Application-wide result cache; override in tests for isolation."""
    return CalculationCache(maxsize=get_settings().calculation_cache_size)
