"""Pricing Engine — bonding curve и атомарные переходы buy / sell_all.

Порядок шагов (фиксирован):
- buy:      price → units → volume += units → mint → pool += reserve → Bought
- sell_all: units → price → owed → volume += units → burn → pool -= owed
            → исходящий перевод → Sold

Все эффекты sell_all применяются ДО исходящего перевода
(checks-effects-interactions): получатель, исполняющий произвольный код во
время перевода, видит состояние уже после продажи.

Объём растёт и при покупке, и при продаже, поэтому цена не убывает.

Откат при отказе на поздних шагах (mint/burn, исходящий перевод) выполняет
транзакционная область BondingCurveExchange, а не сам engine.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from bondledger.config import CurveConfig
from bondledger.core.domain.identity import Address, normalize_address
from bondledger.core.domain.ledger_state import LedgerState
from bondledger.core.domain.notifications import Bought, Sold
from bondledger.core.errors import (
    BelowMinimumTrade,
    NoHoldings,
    ReserveInsufficient,
    TransferFailed,
    ZeroPayment,
)
from bondledger.core.math.bonding_curve import price_at_volume, reserve_for_units, units_for_reserve
from bondledger.core.math.fixed_point import checked_add, checked_sub, validate_uint256
from bondledger.ledger.ledger import Emit, Ledger

logger = logging.getLogger(__name__)

SendReserve = Callable[[Address, int], bool]


@dataclass(frozen=True)
class TradePreview:
    """Результат предварительной проверки сделки (без мутаций)."""

    allowed: bool
    block_reason: str

    # Цена, по которой прошла бы сделка, и цена после неё
    price: int
    price_after: int

    # Base units и reserve (wei), которые перешли бы из рук в руки
    units: int
    reserve: int

    # Детали
    details: str


class PricingEngine:
    """Автоматический market-maker над общим LedgerState.

    Зависит только от Ledger (mint/burn/balance) и от функции исходящего
    перевода reserve, которую предоставляет host runtime.
    """

    def __init__(
        self,
        state: LedgerState,
        ledger: Ledger,
        config: CurveConfig,
        emit: Emit,
        send_reserve: SendReserve,
    ):
        self._state = state
        self._ledger = ledger
        self._config = config
        self._emit = emit
        self._send_reserve = send_reserve

    @property
    def config(self) -> CurveConfig:
        return self._config

    # ------------------------------------------------------------------
    # Pure queries
    # ------------------------------------------------------------------

    def current_price(self) -> int:
        """base + (volume * base) // slope; без побочных эффектов."""
        return price_at_volume(
            self._state.cumulative_volume,
            self._config.base_price,
            self._config.slope_denominator,
        )

    def price_after_volume(self, extra_volume: int) -> int:
        """Цена после ещё extra_volume единиц объёма."""
        validate_uint256(extra_volume, "extra_volume")
        return price_at_volume(
            checked_add(self._state.cumulative_volume, extra_volume),
            self._config.base_price,
            self._config.slope_denominator,
        )

    def quote_units_for_reserve(self, reserve_amount: int) -> int:
        validate_uint256(reserve_amount, "reserve_amount")
        return units_for_reserve(reserve_amount, self.current_price(), self._config.decimals)

    def quote_reserve_for_units(self, unit_amount: int) -> int:
        validate_uint256(unit_amount, "unit_amount")
        return reserve_for_units(unit_amount, self.current_price(), self._config.decimals)

    # ------------------------------------------------------------------
    # Previews
    # ------------------------------------------------------------------

    def preview_buy(self, reserve_amount: int) -> TradePreview:
        """Проверки buy() без исполнения."""
        validate_uint256(reserve_amount, "reserve_amount")
        price = self.current_price()
        units = units_for_reserve(reserve_amount, price, self._config.decimals)

        if reserve_amount == 0:
            return self._blocked(ZeroPayment.reason, price, units, reserve_amount,
                                 "No reserve attached")
        if units == 0:
            return self._blocked(BelowMinimumTrade.reason, price, units, reserve_amount,
                                 f"Payment {reserve_amount} buys 0 units at price {price}")

        return TradePreview(
            allowed=True,
            block_reason="",
            price=price,
            price_after=self.price_after_volume(units),
            units=units,
            reserve=reserve_amount,
            details=f"Buy {units} units for {reserve_amount} at price {price}",
        )

    def preview_sell(self, holder: Address) -> TradePreview:
        """Проверки sell_all() без исполнения."""
        units = self._ledger.balance_of(holder)
        price = self.current_price()
        owed = reserve_for_units(units, price, self._config.decimals)

        if units == 0:
            return self._blocked(NoHoldings.reason, price, units, owed,
                                 f"{holder} holds no units")
        if self._state.reserve_pool < owed:
            return self._blocked(ReserveInsufficient.reason, price, units, owed,
                                 f"Reserve pool {self._state.reserve_pool} < owed {owed}")

        return TradePreview(
            allowed=True,
            block_reason="",
            price=price,
            price_after=self.price_after_volume(units),
            units=units,
            reserve=owed,
            details=f"Sell {units} units for {owed} at price {price}",
        )

    def _blocked(self, reason: str, price: int, units: int, reserve: int, details: str) -> TradePreview:
        return TradePreview(
            allowed=False,
            block_reason=reason,
            price=price,
            price_after=price,
            units=units,
            reserve=reserve,
            details=details,
        )

    # ------------------------------------------------------------------
    # Trades
    # ------------------------------------------------------------------

    def buy(self, caller: Address, reserve_attached: int) -> int:
        """Покупка единиц за приложенную reserve-валюту.

        Returns:
            Количество выпущенных base units

        Raises:
            ZeroPayment: reserve_attached == 0
            BelowMinimumTrade: платёж не покупает ни одной минимальной единицы
        """
        caller = normalize_address(caller, "caller")
        validate_uint256(reserve_attached, "reserve_attached")

        if reserve_attached == 0:
            raise ZeroPayment("buy requires attached reserve currency")

        # 1. Цена читается один раз и используется для всей сделки
        price = self.current_price()
        units = units_for_reserve(reserve_attached, price, self._config.decimals)
        if units == 0:
            raise BelowMinimumTrade(
                f"payment {reserve_attached} is below the price of one base unit at {price}"
            )

        # 2. Эффекты
        new_volume = checked_add(self._state.cumulative_volume, units)
        new_pool = checked_add(self._state.reserve_pool, reserve_attached)

        self._state.cumulative_volume = new_volume
        self._ledger.mint(caller, units)
        self._state.reserve_pool = new_pool

        logger.debug(
            "buy caller=%s reserve=%d units=%d price=%d volume=%d",
            caller, reserve_attached, units, price, new_volume,
        )
        self._emit(Bought(
            buyer=caller,
            reserve_spent=reserve_attached,
            units_received=units,
            price=price,
        ))
        return units

    def sell_all(self, caller: Address) -> int:
        """Продажа всего баланса caller.

        Частичной продажи нет: ликвидируется весь баланс.

        Returns:
            Выплаченная reserve-валюта (wei)

        Raises:
            NoHoldings: баланс caller равен 0
            ReserveInsufficient: пул не покрывает выплату
            TransferFailed: host отклонил исходящий перевод
        """
        caller = normalize_address(caller, "caller")

        # 1. Проверки
        units = self._ledger.balance_of(caller)
        if units == 0:
            raise NoHoldings(f"{caller} holds no units")

        price = self.current_price()
        owed = reserve_for_units(units, price, self._config.decimals)

        if self._state.reserve_pool < owed:
            raise ReserveInsufficient(
                f"reserve pool {self._state.reserve_pool} cannot cover {owed}"
            )

        # 2. Эффекты (до любого внешнего взаимодействия)
        new_volume = checked_add(self._state.cumulative_volume, units)
        new_pool = checked_sub(self._state.reserve_pool, owed)

        self._state.cumulative_volume = new_volume
        self._ledger.burn(caller, units)
        self._state.reserve_pool = new_pool

        # 3. Взаимодействие с host runtime
        if not self._send_reserve(caller, owed):
            raise TransferFailed(f"reserve transfer of {owed} to {caller} was rejected")

        logger.debug(
            "sell caller=%s units=%d reserve=%d price=%d volume=%d",
            caller, units, owed, price, new_volume,
        )
        self._emit(Sold(
            seller=caller,
            units_sold=units,
            reserve_received=owed,
            price=price,
        ))
        return owed
