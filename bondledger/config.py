"""Конфигурация bondledger.

Константы кривой фиксируются при создании exchange и не меняются во время
работы: конфигурации frozen, setter'ов и admin-функций нет.
"""

from dataclasses import dataclass

from bondledger.core.math.bonding_curve import DEFAULT_BASE_PRICE, DEFAULT_SLOPE_DENOMINATOR
from bondledger.core.math.fixed_point import DECIMALS, validate_positive_int


@dataclass(frozen=True)
class CurveConfig:
    """Параметры bonding curve и test-mode.

    - decimals: число дробных разрядов единицы (18)
    - base_price: цена целой единицы при нулевом объёме (wei)
    - slope_denominator: знаменатель наклона кривой
    - seed_mint_units: сколько целых единиц выдаёт seed_mint()
    - test_mode: разрешает seed_mint(); в production всегда False
    """
    decimals: int = DECIMALS
    base_price: int = DEFAULT_BASE_PRICE
    slope_denominator: int = DEFAULT_SLOPE_DENOMINATOR
    seed_mint_units: int = 1000
    test_mode: bool = False

    def __post_init__(self):
        if not isinstance(self.decimals, int) or not 0 <= self.decimals <= 77:
            raise ValueError(f"decimals must be an integer in [0, 77], got {self.decimals}")
        validate_positive_int(self.base_price, "base_price")
        validate_positive_int(self.slope_denominator, "slope_denominator")
        validate_positive_int(self.seed_mint_units, "seed_mint_units")

    @property
    def unit_scale(self) -> int:
        """10**decimals — base units в одной целой единице."""
        return 10**self.decimals

    @property
    def seed_mint_amount(self) -> int:
        """Сумма seed_mint() в base units."""
        return self.seed_mint_units * self.unit_scale


@dataclass(frozen=True)
class TokenMetadata:
    """Метаданные единицы учёта."""
    name: str = "Bonding Curve Token"
    symbol: str = "BCT"

    def __post_init__(self):
        if not self.name:
            raise ValueError("name must be non-empty")
        if not self.symbol:
            raise ValueError("symbol must be non-empty")
