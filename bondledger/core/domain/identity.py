"""
Identity — Идентификаторы участников

Участник идентифицируется 20-байтовым адресом в hex-записи с префиксом 0x.
Null identity (все нули) обозначает "никто": источник при mint и
получатель при burn.

Адреса нормализуются к нижнему регистру, поэтому записи с разным
регистром букв указывают на один и тот же счёт.
"""

import re
from typing import Final

from bondledger.core.errors import InvalidAddress

Address = str

NULL_ADDRESS: Final[Address] = "0x" + "00" * 20

_ADDRESS_RE: Final[re.Pattern[str]] = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_valid_address(value: object) -> bool:
    """Проверка формата адреса (0x + 40 hex символов)."""
    return isinstance(value, str) and _ADDRESS_RE.match(value) is not None


def normalize_address(value: object, name: str = "address") -> Address:
    """
    Валидация и нормализация адреса.

    Args:
        value: Адрес участника
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        Адрес в нижнем регистре

    Raises:
        InvalidAddress: Если формат адреса неверный (подкласс ValueError)
    """
    if not is_valid_address(value):
        raise InvalidAddress(f"{name} must be a 0x-prefixed 20-byte hex address, got {value!r}")
    return value.lower()  # type: ignore[union-attr]


def is_null_address(address: Address) -> bool:
    return address == NULL_ADDRESS
