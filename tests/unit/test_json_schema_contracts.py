"""
Tests for JSON Schema Contract Validators and notification models

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных (из Pydantic моделей)
- Детекция нарушений required полей, типов и constraints
- Публикация уведомлений через InMemoryHost с проверкой контракта
"""

import pytest
from jsonschema import ValidationError
from pydantic import ValidationError as PydanticValidationError

from bondledger import BondingCurveExchange, InMemoryHost
from bondledger.core.contracts import (
    ApprovalValidator,
    BoughtValidator,
    ContractValidator,
    LedgerSnapshotValidator,
    SchemaLoader,
    SoldValidator,
    TransferValidator,
    validate_ledger_snapshot,
    validate_notification,
)
from bondledger.core.domain import NULL_ADDRESS, Approval, Bought, Sold, Transfer
from bondledger.core.math.fixed_point import UINT256_MAX

ALICE = "0x" + "a1" * 20
BOB = "0x" + "b2" * 20


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def transfer_data():
    return Transfer(from_=ALICE, to=BOB, amount=10**18).to_json_dict()


@pytest.fixture
def bought_data():
    return Bought(
        buyer=ALICE, reserve_spent=10**15, units_received=10**18, price=10**15
    ).to_json_dict()


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузчика схем."""

    @pytest.mark.parametrize(
        "name", ["transfer", "approval", "bought", "sold", "ledger_snapshot"]
    )
    def test_all_schemas_load(self, name):
        schema = SchemaLoader().load_schema(name)
        assert schema["$schema"] == "https://json-schema.org/draft/2020-12/schema"

    def test_schemas_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("transfer") is loader.load_schema("transfer")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(RuntimeError):
            SchemaLoader(tmp_path / "nope")


# =============================================================================
# MODELS → JSON
# =============================================================================


class TestNotificationModels:
    """JSON-представление Pydantic моделей."""

    def test_transfer_json_uses_public_names(self, transfer_data):
        assert transfer_data == {
            "event": "Transfer",
            "from": ALICE,
            "to": BOB,
            "amount": 10**18,
        }

    def test_bought_json_uses_camel_case(self, bought_data):
        assert set(bought_data) == {"event", "buyer", "reserveSpent", "unitsReceived", "price"}

    def test_construct_by_alias(self):
        t = Transfer(**{"from": NULL_ADDRESS, "to": ALICE, "amount": 1})
        assert t.from_ == NULL_ADDRESS

    def test_addresses_normalized(self):
        t = Transfer(from_="0x" + "A1" * 20, to=BOB, amount=1)
        assert t.from_ == ALICE

    def test_frozen(self):
        t = Transfer(from_=ALICE, to=BOB, amount=1)
        with pytest.raises(PydanticValidationError):
            t.amount = 2  # type: ignore[misc]

    def test_negative_amount_rejected(self):
        with pytest.raises(PydanticValidationError):
            Approval(owner=ALICE, spender=BOB, amount=-1)

    def test_amount_above_uint256_rejected(self):
        with pytest.raises(PydanticValidationError):
            Transfer(from_=ALICE, to=BOB, amount=UINT256_MAX + 1)

    def test_sold_allows_zero_payout(self):
        """Продажа < 1000 base units по цене 1e15 даёт 0 wei"""
        s = Sold(seller=ALICE, units_sold=999, reserve_received=0, price=10**15)
        validate_notification(s.to_json_dict())


# =============================================================================
# VALIDATORS
# =============================================================================


class TestValidators:
    """Тесты валидации против схем."""

    def test_valid_transfer(self, transfer_data):
        TransferValidator().validate(transfer_data)
        validate_notification(transfer_data)

    def test_valid_bought(self, bought_data):
        BoughtValidator().validate(bought_data)

    def test_valid_approval(self):
        ApprovalValidator().validate(Approval(owner=ALICE, spender=BOB, amount=0).to_json_dict())

    def test_valid_sold(self):
        data = Sold(seller=ALICE, units_sold=10**18, reserve_received=10**15, price=10**15).to_json_dict()
        SoldValidator().validate(data)

    def test_uint256_max_accepted(self):
        validate_notification(Transfer(from_=ALICE, to=BOB, amount=UINT256_MAX).to_json_dict())

    def test_missing_required_field(self, transfer_data):
        del transfer_data["amount"]
        with pytest.raises(ValidationError):
            validate_notification(transfer_data)

    def test_wrong_type(self, transfer_data):
        transfer_data["amount"] = "1000"
        with pytest.raises(ValidationError):
            validate_notification(transfer_data)

    def test_uppercase_address_rejected(self, transfer_data):
        transfer_data["to"] = "0x" + "B2" * 20
        assert not TransferValidator().is_valid(transfer_data)

    def test_zero_units_bought_rejected(self, bought_data):
        bought_data["unitsReceived"] = 0
        errors = list(BoughtValidator().iter_errors(bought_data))
        assert len(errors) == 1

    def test_additional_property_rejected(self, bought_data):
        bought_data["extra"] = 1
        with pytest.raises(ValidationError):
            validate_notification(bought_data)

    def test_unknown_event(self):
        with pytest.raises(ValueError, match="Unknown notification event"):
            validate_notification({"event": "Minted"})

    def test_validator_by_contract_name(self, transfer_data):
        validator = ContractValidator("transfer")
        assert validator.schema_name == "transfer"
        assert validator.is_valid(transfer_data)
        assert TransferValidator().schema is validator.schema


class TestSnapshotContract:
    """Контракт ledger_snapshot."""

    def test_exchange_snapshot_is_valid(self):
        exchange = BondingCurveExchange(InMemoryHost())
        exchange.buy(ALICE, 10**15)
        exchange.buy(BOB, 3 * 10**15)

        data = exchange.snapshot().model_dump(mode="json")
        validate_ledger_snapshot(data)
        assert LedgerSnapshotValidator().is_valid(data)

    def test_zero_balance_entry_rejected(self):
        exchange = BondingCurveExchange(InMemoryHost())
        data = exchange.snapshot().model_dump(mode="json")
        data["balances"] = {ALICE: 0}
        with pytest.raises(ValidationError):
            validate_ledger_snapshot(data)


class TestHostPublishing:
    """InMemoryHost проверяет каждое уведомление контрактом."""

    def test_all_published_notifications_valid(self):
        host = InMemoryHost(validate_contracts=True)
        exchange = BondingCurveExchange(host)
        exchange.buy(ALICE, 10**15)
        exchange.approve(ALICE, BOB, 10)
        exchange.transfer_from(BOB, ALICE, BOB, 10)
        exchange.receive(BOB, 10**15)
        exchange.sell_all(ALICE)

        assert [n.event for n in host.notifications] == [
            "Transfer", "Bought", "Approval", "Transfer", "Transfer", "Sold",
        ]
        for n in host.notifications:
            validate_notification(n.to_json_dict())
