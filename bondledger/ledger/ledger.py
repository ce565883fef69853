"""Ledger — учёт балансов, allowances и total_supply.

Операции:
- mint / burn: только через PricingEngine и seed_mint (total_supply меняется
  только здесь)
- transfer / approve / transfer_from: стандартный fungible-token набор

Порядок проверок каждой операции фиксирован; все проверки выполняются до
первой мутации, поэтому отказ никогда не оставляет частично изменённое
состояние. Атомарность на уровне публичного вызова (включая откат при
отказе на более поздних шагах) обеспечивает exchange.
"""

import logging
from typing import Callable

from bondledger.core.domain.identity import NULL_ADDRESS, Address, is_null_address, normalize_address
from bondledger.core.domain.ledger_state import LedgerState
from bondledger.core.domain.notifications import Approval, Notification, Transfer
from bondledger.core.errors import (
    AllowanceExceeded,
    InsufficientBalance,
    InvalidRecipient,
    InvalidSender,
)
from bondledger.core.math.fixed_point import checked_add, checked_sub, validate_uint256

logger = logging.getLogger(__name__)

Emit = Callable[[Notification], None]


class Ledger:
    """Книга счетов над общим LedgerState.

    Адреса нормализуются (нижний регистр) на входе каждой операции.
    """

    def __init__(self, state: LedgerState, emit: Emit):
        """
        Args:
            state: общее состояние (то же, что у PricingEngine)
            emit: приёмник уведомлений
        """
        self._state = state
        self._emit = emit

    # ------------------------------------------------------------------
    # Readers
    # ------------------------------------------------------------------

    def total_supply(self) -> int:
        return self._state.total_supply

    def balance_of(self, account: Address) -> int:
        return self._state.balances.get(normalize_address(account, "account"), 0)

    def allowance(self, owner: Address, spender: Address) -> int:
        key = (normalize_address(owner, "owner"), normalize_address(spender, "spender"))
        return self._state.allowances.get(key, 0)

    # ------------------------------------------------------------------
    # Supply
    # ------------------------------------------------------------------

    def mint(self, to: Address, amount: int) -> None:
        """Выпуск amount единиц на счёт to.

        Raises:
            InvalidRecipient: to — null identity
            ArithmeticOverflow: total_supply или баланс выходят за uint256
        """
        to = normalize_address(to, "to")
        validate_uint256(amount, "amount")

        if is_null_address(to):
            raise InvalidRecipient("mint to the null address")

        new_supply = checked_add(self._state.total_supply, amount)
        new_balance = checked_add(self._balance(to), amount)

        self._state.total_supply = new_supply
        self._set_balance(to, new_balance)

        logger.debug("mint to=%s amount=%d supply=%d", to, amount, new_supply)
        self._emit(Transfer(from_=NULL_ADDRESS, to=to, amount=amount))

    def burn(self, from_: Address, amount: int) -> None:
        """Погашение amount единиц со счёта from_.

        Raises:
            InvalidSender: from_ — null identity
            InsufficientBalance: баланс меньше amount
        """
        from_ = normalize_address(from_, "from")
        validate_uint256(amount, "amount")

        if is_null_address(from_):
            raise InvalidSender("burn from the null address")

        balance = self._balance(from_)
        if balance < amount:
            raise InsufficientBalance(
                f"burn amount {amount} exceeds balance {balance} of {from_}"
            )

        new_supply = checked_sub(self._state.total_supply, amount)

        self._set_balance(from_, balance - amount)
        self._state.total_supply = new_supply

        logger.debug("burn from=%s amount=%d supply=%d", from_, amount, new_supply)
        self._emit(Transfer(from_=from_, to=NULL_ADDRESS, amount=amount))

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------

    def transfer(self, caller: Address, to: Address, amount: int) -> bool:
        """Перевод amount единиц со счёта caller на счёт to.

        Raises:
            InvalidRecipient: to — null identity
            InsufficientBalance: баланс caller меньше amount
        """
        caller = normalize_address(caller, "caller")
        to = normalize_address(to, "to")
        validate_uint256(amount, "amount")

        if is_null_address(to):
            raise InvalidRecipient("transfer to the null address")

        self._move(caller, to, amount)
        self._emit(Transfer(from_=caller, to=to, amount=amount))
        return True

    def approve(self, caller: Address, spender: Address, amount: int) -> bool:
        """Установка allowance(caller, spender) = amount.

        Значение перезаписывается, а не суммируется, даже если текущее
        allowance ненулевое.
        """
        caller = normalize_address(caller, "caller")
        spender = normalize_address(spender, "spender")
        validate_uint256(amount, "amount")

        key = (caller, spender)
        if amount == 0:
            self._state.allowances.pop(key, None)
        else:
            self._state.allowances[key] = amount

        logger.debug("approve owner=%s spender=%s amount=%d", caller, spender, amount)
        self._emit(Approval(owner=caller, spender=spender, amount=amount))
        return True

    def transfer_from(self, caller: Address, from_: Address, to: Address, amount: int) -> bool:
        """Перевод amount единиц со счёта from_ на счёт to от имени caller.

        Порядок проверок: получатель, баланс from_, allowance(from_, caller).

        Raises:
            InvalidRecipient: to — null identity
            InsufficientBalance: баланс from_ меньше amount
            AllowanceExceeded: allowance(from_, caller) меньше amount
        """
        caller = normalize_address(caller, "caller")
        from_ = normalize_address(from_, "from")
        to = normalize_address(to, "to")
        validate_uint256(amount, "amount")

        if is_null_address(to):
            raise InvalidRecipient("transfer to the null address")

        balance = self._balance(from_)
        if balance < amount:
            raise InsufficientBalance(
                f"transfer amount {amount} exceeds balance {balance} of {from_}"
            )

        key = (from_, caller)
        allowed = self._state.allowances.get(key, 0)
        if allowed < amount:
            raise AllowanceExceeded(
                f"transfer amount {amount} exceeds allowance {allowed} "
                f"granted by {from_} to {caller}"
            )

        remaining = allowed - amount
        if remaining == 0:
            self._state.allowances.pop(key, None)
        else:
            self._state.allowances[key] = remaining

        self._move(from_, to, amount)
        self._emit(Transfer(from_=from_, to=to, amount=amount))
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _balance(self, account: Address) -> int:
        return self._state.balances.get(account, 0)

    def _set_balance(self, account: Address, value: int) -> None:
        if value == 0:
            self._state.balances.pop(account, None)
        else:
            self._state.balances[account] = value

    def _move(self, from_: Address, to: Address, amount: int) -> None:
        balance = self._balance(from_)
        if balance < amount:
            raise InsufficientBalance(
                f"transfer amount {amount} exceeds balance {balance} of {from_}"
            )

        # Перевод самому себе не меняет балансы
        if from_ == to:
            return

        new_to_balance = checked_add(self._balance(to), amount)
        self._set_balance(from_, balance - amount)
        self._set_balance(to, new_to_balance)

        logger.debug("transfer from=%s to=%s amount=%d", from_, to, amount)
