"""Ledger — учёт балансов, allowances и total_supply."""

from .ledger import Emit, Ledger

__all__ = [
    "Emit",
    "Ledger",
]
