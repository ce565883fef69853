"""
Units — Конверсия целых и минимальных единиц

Единственный допустимый способ преобразований между:
- whole units (целые единицы, как их видит человек, например 1.5)
- base units (минимальные единицы, int, масштаб 10**decimals)

Внутри ledger хранятся ТОЛЬКО base units. Decimal используется лишь на
границе (ввод и отображение), float не используется нигде.
"""

from decimal import Decimal, ROUND_DOWN, localcontext
from typing import Annotated, Final

from pydantic import AfterValidator

from bondledger.core.math.fixed_point import DECIMALS, UINT256_MAX, validate_uint256

# Точность Decimal с запасом для 78-значных uint256
_PRECISION: Final[int] = 100


def to_base_units(whole: int | str | Decimal, decimals: int = DECIMALS) -> int:
    """
    Конверсия: целые единицы → минимальные единицы.

    Дробная часть сверх decimals разрядов отбрасывается (округление вниз).

    Args:
        whole: Количество целых единиц (int, строка "1.5" или Decimal)
        decimals: Число дробных разрядов

    Returns:
        Количество минимальных единиц

    Raises:
        InvalidAmount: Если результат отрицательный или вне uint256

    Examples:
        >>> to_base_units(1)
        1000000000000000000
        >>> to_base_units("0.5")
        500000000000000000
    """
    if isinstance(whole, float):
        raise TypeError("float amounts are not accepted, use str or Decimal")

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        scaled = (Decimal(whole) * (Decimal(10) ** decimals)).to_integral_value(
            rounding=ROUND_DOWN
        )
    return validate_uint256(int(scaled), "amount")


def to_whole_units(base: int, decimals: int = DECIMALS) -> Decimal:
    """
    Конверсия: минимальные единицы → целые единицы (точный Decimal).

    Examples:
        >>> to_whole_units(1500000000000000000)
        Decimal('1.5')
    """
    validate_uint256(base, "amount")
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return (Decimal(base) / (Decimal(10) ** decimals)).normalize()


def format_units(base: int, decimals: int = DECIMALS) -> str:
    """
    Отображение минимальных единиц в виде десятичной строки без экспоненты.

    Examples:
        >>> format_units(10**18)
        '1'
        >>> format_units(1)
        '0.000000000000000001'
    """
    return format(to_whole_units(base, decimals), "f")


# =============================================================================
# PYDANTIC TYPE
# =============================================================================


def _check_uint256(value: int) -> int:
    if value < 0:
        raise ValueError(f"value must be non-negative: {value}")
    if value > UINT256_MAX:
        raise ValueError(f"value exceeds uint256 range: {value}")
    return value


def _check_positive(value: int) -> int:
    if value == 0:
        raise ValueError("value must be positive")
    return value


# Целое без знака, не больше UINT256_MAX (для полей Pydantic моделей)
Uint256 = Annotated[int, AfterValidator(_check_uint256)]

# То же, строго больше нуля
PositiveUint256 = Annotated[Uint256, AfterValidator(_check_positive)]
