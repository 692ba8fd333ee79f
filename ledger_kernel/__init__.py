"""
Ledger Kernel

A double-entry bookkeeping core with:
- Balanced transactions (debits equal credits within a fixed tolerance)
- Account registry with typed accounts
- Decimal money throughout
- Typed, code-carrying exceptions
"""

__version__ = "0.1.0"
