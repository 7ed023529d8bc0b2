"""
Pocket Ledger - Source Package

A personal ledger of income and expense entries with a deterministic
aggregation and reporting engine.

DESIGN PRINCIPLES:
1. The engine is pure: snapshot in, derived view out
2. Bad records degrade gracefully, they never crash a dashboard
3. Sums are Decimal; stored amounts are plain JSON numbers read through str()
4. Every mutation is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Pocket Ledger Team"
