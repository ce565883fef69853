"""
Bonding Curve — Детерминированная функция цены

Цена одной целой единицы (в минимальных единицах reserve-валюты) зависит
только от накопленного объёма торгов:

    price = base_price + (cumulative_volume * base_price) // slope_denominator

Объём увеличивается и при покупке, и при продаже, поэтому цена
не убывает на любой последовательности сделок.

Все функции модуля чистые: одинаковый вход → одинаковый выход,
без побочных эффектов.
"""

from typing import Final

from bondledger.core.math.fixed_point import DECIMALS, checked_add, floor_div, mul_div

# =============================================================================
# ПАРАМЕТРЫ КРИВОЙ ПО УМОЛЧАНИЮ
# =============================================================================

# 0.001 reserve-единицы (1e15 wei) за целую единицу при нулевом объёме
DEFAULT_BASE_PRICE: Final[int] = 10**15

# Рост цены на base_price за каждые 1e24 единиц объёма (1e6 целых единиц)
DEFAULT_SLOPE_DENOMINATOR: Final[int] = 10**24


# =============================================================================
# ЦЕНА
# =============================================================================


def price_at_volume(
    cumulative_volume: int,
    base_price: int = DEFAULT_BASE_PRICE,
    slope_denominator: int = DEFAULT_SLOPE_DENOMINATOR,
) -> int:
    """
    Цена за целую единицу при заданном накопленном объёме.

    Args:
        cumulative_volume: Накопленный объём (минимальные единицы)
        base_price: Базовая цена при нулевом объёме
        slope_denominator: Знаменатель наклона (чем больше, тем медленнее рост)

    Returns:
        base_price + floor(cumulative_volume * base_price / slope_denominator)

    Raises:
        ArithmeticOverflow: Если промежуточные значения выходят за uint256

    Examples:
        >>> price_at_volume(0)
        1000000000000000
        >>> price_at_volume(10**18)
        1000000001000000
    """
    growth = mul_div(cumulative_volume, base_price, slope_denominator)
    return checked_add(base_price, growth)


# =============================================================================
# КОТИРОВКИ
# =============================================================================


def units_for_reserve(reserve_amount: int, price: int, decimals: int = DECIMALS) -> int:
    """
    Количество минимальных единиц, покупаемых за reserve_amount по цене price.

    floor(reserve_amount * 10**decimals / price). При price == 0 возвращает 0
    (недостижимо при base_price > 0).
    """
    if price == 0:
        return 0
    return mul_div(reserve_amount, 10**decimals, price)


def reserve_for_units(unit_amount: int, price: int, decimals: int = DECIMALS) -> int:
    """
    Выплата в reserve-валюте за unit_amount минимальных единиц по цене price.

    floor(unit_amount * price / 10**decimals). Округление всегда вниз:
    обратная конверсия никогда не даёт больше, чем было уплачено.
    """
    return mul_div(unit_amount, price, 10**decimals)


def min_reserve_for_one_unit(price: int, decimals: int = DECIMALS) -> int:
    """
    Минимальный платёж, дающий хотя бы одну минимальную единицу.

    ceil(price / 10**decimals): наименьшее r, для которого
    floor(r * 10**decimals / price) >= 1.
    """
    scale = 10**decimals
    return floor_div(price + scale - 1, scale)
