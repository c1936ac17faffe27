"""
Finance calculators: growth, loan, XIRR, tax and currency tools.
"""

__version__ = "0.1.0"
