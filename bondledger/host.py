"""Host runtime — внешний коллаборатор ядра.

Ядро взаимодействует с host только через:
- отправителя и приложенную сумму входящего вызова (аргументы exchange)
- исходящий перевод reserve-валюты с наблюдаемым успехом/отказом
- публикацию структурированных уведомлений

InMemoryHost — реализация для тестов и симуляций: хранит внешние
reserve-балансы участников и журнал уведомлений.
"""

import logging
from typing import Callable, Optional, Protocol

from bondledger.core.contracts import validate_notification
from bondledger.core.domain.identity import Address, normalize_address
from bondledger.core.domain.notifications import Notification
from bondledger.core.math.fixed_point import checked_add

logger = logging.getLogger(__name__)


class HostRuntime(Protocol):
    def send_reserve(self, to: Address, amount: int) -> bool:
        """Исходящий перевод reserve; False — перевод отклонён."""
        ...

    def publish(self, notification: Notification) -> None:
        """Публикация уведомления о завершённой операции."""
        ...


class InMemoryHost:
    """Host runtime в памяти.

    Args:
        validate_contracts: проверять каждое уведомление JSON Schema контрактом
    """

    def __init__(self, validate_contracts: bool = True):
        self.validate_contracts = validate_contracts

        # Reserve-валюта, полученная участниками от системы
        self.reserve_balances: dict[Address, int] = {}

        # Журнал уведомлений (только добавление)
        self.notifications: list[Notification] = []

        # Отклонять все исходящие переводы
        self.reject_transfers = False

        # Вызывается во время исходящего перевода, до его завершения
        # (получатель исполняет произвольный код)
        self.on_send: Optional[Callable[[Address, int], None]] = None

    def send_reserve(self, to: Address, amount: int) -> bool:
        to = normalize_address(to, "to")

        if self.reject_transfers:
            return False

        if self.on_send is not None:
            self.on_send(to, amount)

        self.reserve_balances[to] = checked_add(self.reserve_balances.get(to, 0), amount)
        return True

    def publish(self, notification: Notification) -> None:
        if self.validate_contracts:
            validate_notification(notification.to_json_dict())
        self.notifications.append(notification)

    def received(self, account: Address) -> int:
        """Reserve-валюта, полученная account от системы."""
        return self.reserve_balances.get(normalize_address(account, "account"), 0)

    def events(self, event: str) -> list[Notification]:
        """Уведомления одного типа в порядке публикации."""
        return [n for n in self.notifications if n.event == event]
