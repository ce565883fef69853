"""
LedgerState — Состояние ledger и pricing engine

LedgerState — единственный владелец изменяемого состояния. Один экземпляр
передаётся и в Ledger, и в PricingEngine (явная передача, без синглтонов).

LedgerSnapshot — immutable Pydantic снапшот для аудита и JSON Schema
контракта ledger_snapshot.json.

ИНВАРИАНТЫ:
1. sum(balances.values()) == total_supply
2. Все значения >= 0
3. cumulative_volume не убывает
"""

from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from bondledger.core.domain.identity import Address
from bondledger.core.domain.units import PositiveUint256, Uint256


# =============================================================================
# MUTABLE STATE
# =============================================================================


@dataclass
class LedgerState:
    """
    Изменяемое состояние системы.

    Счета с нулевым балансом и нулевые allowances не хранятся.
    """

    total_supply: int = 0
    balances: dict[Address, int] = field(default_factory=dict)
    allowances: dict[tuple[Address, Address], int] = field(default_factory=dict)
    cumulative_volume: int = 0
    reserve_pool: int = 0

    def copy(self) -> "LedgerState":
        """Независимая копия (для отката транзакции)."""
        return LedgerState(
            total_supply=self.total_supply,
            balances=dict(self.balances),
            allowances=dict(self.allowances),
            cumulative_volume=self.cumulative_volume,
            reserve_pool=self.reserve_pool,
        )

    def restore(self, saved: "LedgerState") -> None:
        """
        Восстановление из копии на месте.

        Экземпляр не заменяется: ссылки, переданные в компоненты, остаются
        действительными.
        """
        self.total_supply = saved.total_supply
        self.balances = dict(saved.balances)
        self.allowances = dict(saved.allowances)
        self.cumulative_volume = saved.cumulative_volume
        self.reserve_pool = saved.reserve_pool

    def sum_of_balances(self) -> int:
        return sum(self.balances.values())


# =============================================================================
# SNAPSHOT MODEL
# =============================================================================


class LedgerSnapshot(BaseModel):
    """
    Снапшот состояния ledger.

    Immutable модель (frozen=True).
    """

    total_supply: Uint256 = Field(..., description="Общее предложение (base units)")
    cumulative_volume: Uint256 = Field(
        ..., description="Накопленный объём buy + sell (base units)"
    )
    reserve_pool: Uint256 = Field(..., description="Reserve-валюта в пуле (wei)")
    current_price: PositiveUint256 = Field(..., description="Текущая цена за целую единицу (wei)")
    decimals: int = Field(..., ge=0, description="Число дробных разрядов")
    holder_count: int = Field(..., ge=0, description="Число счетов с ненулевым балансом")
    balances: dict[Address, Uint256] = Field(
        default_factory=dict, description="Ненулевые балансы по адресам"
    )

    model_config = {"frozen": True}

    @classmethod
    def from_state(cls, state: LedgerState, current_price: int, decimals: int) -> "LedgerSnapshot":
        return cls(
            total_supply=state.total_supply,
            cumulative_volume=state.cumulative_volume,
            reserve_pool=state.reserve_pool,
            current_price=current_price,
            decimals=decimals,
            holder_count=len(state.balances),
            balances=dict(state.balances),
        )

    def is_balanced(self) -> bool:
        """Инвариант: сумма балансов равна total_supply."""
        return sum(self.balances.values()) == self.total_supply
