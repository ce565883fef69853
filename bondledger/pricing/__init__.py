"""Pricing — bonding curve market-maker (buy / sell_all / quotes)."""

from .engine import PricingEngine, SendReserve, TradePreview

__all__ = [
    "PricingEngine",
    "SendReserve",
    "TradePreview",
]
