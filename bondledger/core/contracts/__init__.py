"""
Contract Validation Module

Модуль для валидации JSON контрактов уведомлений и снапшотов.
"""

from .validators import (
    ApprovalValidator,
    BoughtValidator,
    ContractValidator,
    LedgerSnapshotValidator,
    SchemaLoader,
    SoldValidator,
    TransferValidator,
    validate_ledger_snapshot,
    validate_notification,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "TransferValidator",
    "ApprovalValidator",
    "BoughtValidator",
    "SoldValidator",
    "LedgerSnapshotValidator",
    # Functions
    "validate_notification",
    "validate_ledger_snapshot",
]
