"""
Domain models and value objects.

Contains identities, unit conversion, notifications and ledger state.
"""

from bondledger.core.domain.identity import (
    NULL_ADDRESS,
    Address,
    is_null_address,
    is_valid_address,
    normalize_address,
)
from bondledger.core.domain.ledger_state import LedgerSnapshot, LedgerState
from bondledger.core.domain.notifications import (
    Approval,
    Bought,
    Notification,
    Sold,
    Transfer,
)
from bondledger.core.domain.units import (
    PositiveUint256,
    Uint256,
    format_units,
    to_base_units,
    to_whole_units,
)

__all__ = [
    # Identity
    "Address",
    "NULL_ADDRESS",
    "is_null_address",
    "is_valid_address",
    "normalize_address",
    # Units
    "Uint256",
    "PositiveUint256",
    "format_units",
    "to_base_units",
    "to_whole_units",
    # State
    "LedgerState",
    "LedgerSnapshot",
    # Notifications
    "Notification",
    "Transfer",
    "Approval",
    "Bought",
    "Sold",
]
