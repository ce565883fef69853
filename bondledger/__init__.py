"""
bondledger — fungible-unit ledger с bonding curve market-maker.

Участники обменивают reserve-валюту на единицы учёта и обратно по цене,
которая монотонно растёт с накопленным объёмом торгов.
"""

from bondledger.config import CurveConfig, TokenMetadata
from bondledger.exchange import BondingCurveExchange
from bondledger.host import HostRuntime, InMemoryHost

__all__ = [
    "BondingCurveExchange",
    "CurveConfig",
    "TokenMetadata",
    "HostRuntime",
    "InMemoryHost",
]
