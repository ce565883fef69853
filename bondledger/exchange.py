"""BondingCurveExchange — публичная поверхность системы.

Связывает Ledger и PricingEngine с host runtime:
- каждая мутирующая операция выполняется в транзакционной области:
  снапшот LedgerState + буфер уведомлений; при любом отказе состояние
  восстанавливается точно, буфер отбрасывается; при успехе вызов
  фиксируется и уведомления публикуются в host в порядке эмиссии (сбой
  публикации логируется и уже не откатывает зафиксированный вызов)
- reentrancy guard: мутирующий вызов во время другого мутирующего вызова
  (например, из host во время исходящего перевода в sell_all) отклоняется
- чтение разрешено всегда и видит состояние после эффектов

Операции:
- мутирующие: buy, sell_all, transfer, approve, transfer_from, seed_mint,
  receive (пополнение пула без инструкции)
- чтение: current_price_per_token, quote_tokens_for_wei, quote_wei_for_tokens,
  balance_of, allowance, total_supply, name, symbol, decimals,
  reserve_balance, cumulative_volume, snapshot
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from bondledger.config import CurveConfig, TokenMetadata
from bondledger.core.domain.identity import Address, normalize_address
from bondledger.core.domain.ledger_state import LedgerSnapshot, LedgerState
from bondledger.core.domain.notifications import Notification
from bondledger.core.errors import LedgerError, ReentrantCall, SeedMintDisabled
from bondledger.core.math.fixed_point import checked_add, validate_uint256
from bondledger.host import HostRuntime
from bondledger.ledger.ledger import Ledger
from bondledger.pricing.engine import PricingEngine, TradePreview

logger = logging.getLogger(__name__)


class BondingCurveExchange:
    """Ledger + bonding curve market-maker, привязанные к host runtime.

    Конфигурация фиксируется при создании и дальше не меняется.
    """

    def __init__(
        self,
        host: HostRuntime,
        config: Optional[CurveConfig] = None,
        metadata: Optional[TokenMetadata] = None,
        state: Optional[LedgerState] = None,
    ):
        """
        Args:
            host: host runtime (исходящие переводы, уведомления)
            config: параметры кривой (default CurveConfig())
            metadata: имя и символ (default TokenMetadata())
            state: начальное состояние (default — пустое)
        """
        self._host = host
        self._config = config or CurveConfig()
        self._metadata = metadata or TokenMetadata()
        self._state = state if state is not None else LedgerState()

        # Уведомления текущей транзакции (до commit)
        self._pending: list[Notification] = []
        self._entered = False

        self._ledger = Ledger(self._state, self._pending.append)
        self._engine = PricingEngine(
            self._state,
            self._ledger,
            self._config,
            self._pending.append,
            host.send_reserve,
        )

    # ------------------------------------------------------------------
    # Transaction scope
    # ------------------------------------------------------------------

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[None]:
        if self._entered:
            logger.warning("%s rejected: reentrant call", operation)
            raise ReentrantCall(f"{operation} called while another operation is in progress")

        self._entered = True
        saved = self._state.copy()
        self._pending.clear()
        try:
            yield
        except LedgerError as e:
            self._state.restore(saved)
            logger.warning("%s rejected: %s (%s)", operation, e.reason, e)
            raise
        except Exception:
            self._state.restore(saved)
            logger.exception("%s aborted", operation)
            raise
        else:
            # Вызов зафиксирован: исходящий перевод уже мог состояться,
            # поэтому сбой публикации состояние не откатывает
            self._publish(operation)
        finally:
            self._pending.clear()
            self._entered = False

    def _publish(self, operation: str) -> None:
        for notification in self._pending:
            try:
                self._host.publish(notification)
            except Exception:
                logger.exception(
                    "%s committed but %s notification was not published",
                    operation, notification.event,
                )

    # ------------------------------------------------------------------
    # Stateful operations
    # ------------------------------------------------------------------

    def buy(self, sender: Address, value: int) -> int:
        """Покупка за приложенную сумму value (wei). Возвращает base units."""
        with self._transaction("buy"):
            return self._engine.buy(sender, value)

    def sell_all(self, sender: Address) -> int:
        """Продажа всего баланса sender. Возвращает выплату (wei)."""
        with self._transaction("sell_all"):
            return self._engine.sell_all(sender)

    def transfer(self, sender: Address, to: Address, amount: int) -> bool:
        with self._transaction("transfer"):
            return self._ledger.transfer(sender, to, amount)

    def approve(self, sender: Address, spender: Address, amount: int) -> bool:
        with self._transaction("approve"):
            return self._ledger.approve(sender, spender, amount)

    def transfer_from(self, sender: Address, from_: Address, to: Address, amount: int) -> bool:
        with self._transaction("transfer_from"):
            return self._ledger.transfer_from(sender, from_, to, amount)

    def seed_mint(self, sender: Address) -> int:
        """Выпуск seed_mint_units целых единиц на счёт sender.

        Только для тестовых окружений: объём и пул не меняются, поэтому
        выпущенные единицы не обеспечены reserve-валютой.

        Raises:
            SeedMintDisabled: test_mode выключен
        """
        with self._transaction("seed_mint"):
            if not self._config.test_mode:
                raise SeedMintDisabled("seed_mint is only available in test mode")
            amount = self._config.seed_mint_amount
            self._ledger.mint(sender, amount)
            logger.info("seed_mint to=%s amount=%d", sender, amount)
            return amount

    def receive(self, sender: Address, value: int) -> None:
        """Входящий перевод reserve без инструкции: пополнение пула.

        Предложение, объём и цена не меняются; уведомление не публикуется.
        """
        with self._transaction("receive"):
            sender = normalize_address(sender, "sender")
            validate_uint256(value, "value")
            self._state.reserve_pool = checked_add(self._state.reserve_pool, value)
            logger.info("reserve deposit from=%s value=%d pool=%d", sender, value, self._state.reserve_pool)

    # ------------------------------------------------------------------
    # Read-only operations
    # ------------------------------------------------------------------

    def current_price_per_token(self) -> int:
        return self._engine.current_price()

    def quote_tokens_for_wei(self, reserve_amount: int) -> int:
        return self._engine.quote_units_for_reserve(reserve_amount)

    def quote_wei_for_tokens(self, unit_amount: int) -> int:
        return self._engine.quote_reserve_for_units(unit_amount)

    def preview_buy(self, value: int) -> TradePreview:
        return self._engine.preview_buy(value)

    def preview_sell(self, holder: Address) -> TradePreview:
        return self._engine.preview_sell(holder)

    def balance_of(self, account: Address) -> int:
        return self._ledger.balance_of(account)

    def allowance(self, owner: Address, spender: Address) -> int:
        return self._ledger.allowance(owner, spender)

    def total_supply(self) -> int:
        return self._ledger.total_supply()

    def name(self) -> str:
        return self._metadata.name

    def symbol(self) -> str:
        return self._metadata.symbol

    def decimals(self) -> int:
        return self._config.decimals

    def reserve_balance(self) -> int:
        return self._state.reserve_pool

    def cumulative_volume(self) -> int:
        return self._state.cumulative_volume

    @property
    def config(self) -> CurveConfig:
        return self._config

    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot.from_state(
            self._state,
            current_price=self._engine.current_price(),
            decimals=self._config.decimals,
        )
