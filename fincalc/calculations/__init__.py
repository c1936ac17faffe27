"""
Financial Calculation Engine

Core calculation modules for the personal finance calculators.
All functions are pure; results are immutable dataclasses.
"""

from fincalc.calculations import amortization, growth, tax, xirr

__all__ = ["amortization", "growth", "tax", "xirr"]
