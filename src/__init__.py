"""
Insurance Gap Calculator - Source Package

Helps a financial advisor measure a client's protection gap (debt
shortfall, critical-illness shortfall, monthly affordability) and keep
past calculations as client history.

DESIGN PRINCIPLES:
1. Input is normalized at the boundary; the record is always valid
2. Metrics are a pure function of the record, recomputed on every read
3. History is append-only; deletes need explicit confirmation
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Gap Calculator Team"
