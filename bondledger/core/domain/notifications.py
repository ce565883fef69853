"""
Notifications — Модели уведомлений о завершённых операциях

Immutable Pydantic модели. Уведомления только добавляются в журнал host
runtime и никогда не читаются ядром обратно.

JSON-представление (by_alias=True) соответствует схемам
bondledger/core/contracts/schema/{transfer,approval,bought,sold}.json.
"""

from typing import Literal, Union

from pydantic import BaseModel, Field, field_validator

from bondledger.core.domain.identity import Address, normalize_address
from bondledger.core.domain.units import PositiveUint256, Uint256


class _Notification(BaseModel):
    """Базовая модель: адреса нормализуются, суммы — uint256."""

    model_config = {"frozen": True, "populate_by_name": True}

    def to_json_dict(self) -> dict:
        """JSON-совместимый dict с публичными (camelCase) именами полей."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# LEDGER
# =============================================================================


class Transfer(_Notification):
    """
    Перемещение единиц между счетами.

    from_ == NULL_ADDRESS для mint, to == NULL_ADDRESS для burn.
    """

    event: Literal["Transfer"] = "Transfer"
    from_: Address = Field(..., alias="from", description="Источник (null для mint)")
    to: Address = Field(..., description="Получатель (null для burn)")
    amount: Uint256 = Field(..., description="Количество (base units)")

    @field_validator("from_", "to")
    @classmethod
    def validate_address(cls, v: str) -> str:
        return normalize_address(v)


class Approval(_Notification):
    """Установка allowance(owner, spender) = amount (перезапись)."""

    event: Literal["Approval"] = "Approval"
    owner: Address = Field(..., description="Владелец баланса")
    spender: Address = Field(..., description="Уполномоченный")
    amount: Uint256 = Field(..., description="Новое значение allowance")

    @field_validator("owner", "spender")
    @classmethod
    def validate_address(cls, v: str) -> str:
        return normalize_address(v)


# =============================================================================
# PRICING
# =============================================================================


class Bought(_Notification):
    """Покупка единиц за reserve-валюту."""

    event: Literal["Bought"] = "Bought"
    buyer: Address = Field(..., description="Покупатель")
    reserve_spent: PositiveUint256 = Field(
        ..., alias="reserveSpent", description="Уплачено reserve (wei)"
    )
    units_received: PositiveUint256 = Field(
        ..., alias="unitsReceived", description="Получено base units"
    )
    price: PositiveUint256 = Field(..., description="Цена за целую единицу на момент сделки")

    @field_validator("buyer")
    @classmethod
    def validate_address(cls, v: str) -> str:
        return normalize_address(v)


class Sold(_Notification):
    """Продажа всего баланса за reserve-валюту."""

    event: Literal["Sold"] = "Sold"
    seller: Address = Field(..., description="Продавец")
    units_sold: PositiveUint256 = Field(
        ..., alias="unitsSold", description="Продано base units"
    )
    reserve_received: Uint256 = Field(
        ...,
        alias="reserveReceived",
        description="Выплачено reserve (wei), может быть 0 из-за округления",
    )
    price: PositiveUint256 = Field(..., description="Цена за целую единицу на момент сделки")

    @field_validator("seller")
    @classmethod
    def validate_address(cls, v: str) -> str:
        return normalize_address(v)


Notification = Union[Transfer, Approval, Bought, Sold]
