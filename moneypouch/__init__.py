"""
MoneyPouch - Ledger Engine

Expense tracking, a monthly budget with a daily spending allowance,
savings goals and a shared savings pool.

DESIGN PRINCIPLES:
1. Validate before any mutation
2. Fail visibly: refused operations raise, failed saves leave state as it was
3. Money moving between pool and goals is never duplicated
4. Every mutation is logged
5. Storage backend is swappable
"""

__version__ = "1.0.0"
__author__ = "MoneyPouch Team"
