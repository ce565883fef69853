"""
Errors — Таксономия отказов операций

Каждая ошибка означает отказ ВСЕЙ операции: состояние (балансы, allowances,
total_supply, cumulative_volume, reserve_pool) откатывается к состоянию до
вызова. Частичного применения и автоматических повторов нет.

У каждого класса есть стабильный код `reason`, который получает вызывающий.
"""


class LedgerError(Exception):
    """Базовый класс отказа операции."""

    reason: str = "ledger_error"


# =============================================================================
# IDENTITY
# =============================================================================


class InvalidAddress(LedgerError, ValueError):
    """Идентификатор не является 0x-адресом из 20 байт."""

    reason = "invalid_address"


class InvalidRecipient(LedgerError):
    """Получатель — null identity."""

    reason = "invalid_recipient"


class InvalidSender(LedgerError):
    """Отправитель (источник burn) — null identity."""

    reason = "invalid_sender"


# =============================================================================
# LEDGER
# =============================================================================


class InsufficientBalance(LedgerError):
    """Баланс меньше запрошенной суммы."""

    reason = "insufficient_balance"


class AllowanceExceeded(LedgerError):
    """Разрешение (allowance) меньше запрошенной суммы."""

    reason = "allowance_exceeded"


class InvalidAmount(LedgerError, ValueError):
    """
    Сумма не является uint256.

    Отрицательные, нецелые и выходящие за 2**256 - 1 значения отклоняются
    до любой мутации.
    """

    reason = "invalid_amount"


# =============================================================================
# PRICING
# =============================================================================


class ZeroPayment(LedgerError):
    """buy() вызван без приложенной reserve-валюты."""

    reason = "zero_payment"


class BelowMinimumTrade(LedgerError):
    """Платёж слишком мал для покупки хотя бы одной минимальной единицы."""

    reason = "below_minimum_trade"


class NoHoldings(LedgerError):
    """sell_all() при нулевом балансе."""

    reason = "no_holdings"


class ReserveInsufficient(LedgerError):
    """
    Reserve pool не покрывает выплату по продаже.

    Проверка выполняется только для текущего вызова: покрытие ВСЕХ
    балансов одновременно не гарантируется (bank-run сценарий допустим).
    """

    reason = "reserve_insufficient"


class TransferFailed(LedgerError):
    """Host runtime отклонил исходящий перевод reserve-валюты."""

    reason = "transfer_failed"


# =============================================================================
# ARITHMETIC
# =============================================================================


class ArithmeticFault(LedgerError):
    """Результат вышел за пределы uint256 (фатальный abort вызова)."""

    reason = "arithmetic_fault"


class ArithmeticOverflow(ArithmeticFault):
    reason = "arithmetic_overflow"


class ArithmeticUnderflow(ArithmeticFault):
    reason = "arithmetic_underflow"


# =============================================================================
# EXECUTION
# =============================================================================


class ReentrantCall(LedgerError):
    """
    Мутирующий вызов поступил, пока другой мутирующий вызов не завершён.

    Типичный случай: получатель исходящего перевода в sell_all() пытается
    повторно войти в buy/sell/transfer.
    """

    reason = "reentrant_call"


class SeedMintDisabled(LedgerError):
    """seed_mint() вызван при выключенном test_mode."""

    reason = "seed_mint_disabled"
