"""
Core math modules для bondledger

Checked uint256 арифметика и чистые функции bonding curve.
"""

# Fixed point (checked uint256)
from bondledger.core.math.fixed_point import (
    DECIMALS,
    UINT256_MAX,
    WAD,
    checked_add,
    checked_mul,
    checked_sub,
    floor_div,
    is_uint256,
    mul_div,
    validate_positive_int,
    validate_uint256,
)

# Bonding curve
from bondledger.core.math.bonding_curve import (
    DEFAULT_BASE_PRICE,
    DEFAULT_SLOPE_DENOMINATOR,
    min_reserve_for_one_unit,
    price_at_volume,
    reserve_for_units,
    units_for_reserve,
)

__all__ = [
    # Fixed point — Constants
    "DECIMALS",
    "UINT256_MAX",
    "WAD",
    # Fixed point — Arithmetic
    "checked_add",
    "checked_mul",
    "checked_sub",
    "floor_div",
    "mul_div",
    # Fixed point — Validation
    "is_uint256",
    "validate_positive_int",
    "validate_uint256",
    # Bonding curve — Constants
    "DEFAULT_BASE_PRICE",
    "DEFAULT_SLOPE_DENOMINATOR",
    # Bonding curve — Functions
    "min_reserve_for_one_unit",
    "price_at_volume",
    "reserve_for_units",
    "units_for_reserve",
]
