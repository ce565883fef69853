"""
Contracts — JSON Schema контракты уведомлений и снапшотов ledger

Уведомления уходят в host runtime как JSON (to_json_dict()); каждый
контракт фиксирует публичные имена полей, формат адресов и границы uint256.

Схемы (bondledger/core/contracts/schema/):
- transfer.json, approval.json — ledger
- bought.json, sold.json — pricing engine
- ledger_snapshot.json — LedgerSnapshot
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import jsonschema
from jsonschema import Draft202012Validator

_DEFAULT_SCHEMA_DIR = Path(__file__).parent / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Читает контракты из schema_dir и держит их в памяти после первой загрузки."""

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or _DEFAULT_SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Contract directory not found: {self._schema_dir}")
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Контракт по имени файла без расширения ('sold', 'ledger_snapshot').

        Raises:
            FileNotFoundError: контракта с таким именем нет
            ValueError: файл не проходит проверку Draft 2020-12
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        path = self._schema_dir / f"{schema_name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"Contract not found: {path}")

        schema = json.loads(path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"{schema_name}.json is not a Draft 2020-12 schema: {e.message}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Проверка JSON-представления против одного контракта."""

    schema_name: str = ""

    def __init__(self, schema_name: Optional[str] = None):
        if schema_name is not None:
            self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(self.schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """Raises jsonschema.ValidationError на первом нарушении."""
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[jsonschema.ValidationError]:
        return self.validator.iter_errors(data)


class TransferValidator(ContractValidator):
    schema_name = "transfer"


class ApprovalValidator(ContractValidator):
    schema_name = "approval"


class BoughtValidator(ContractValidator):
    schema_name = "bought"


class SoldValidator(ContractValidator):
    schema_name = "sold"


class LedgerSnapshotValidator(ContractValidator):
    schema_name = "ledger_snapshot"


_EVENT_VALIDATORS: Dict[str, type[ContractValidator]] = {
    "Transfer": TransferValidator,
    "Approval": ApprovalValidator,
    "Bought": BoughtValidator,
    "Sold": SoldValidator,
}

# Экземпляры по событию: host проверяет каждое опубликованное уведомление
_event_validator_cache: Dict[str, ContractValidator] = {}


def _validator_for_event(event: Any) -> ContractValidator:
    validator = _event_validator_cache.get(event)
    if validator is None:
        validator_cls = _EVENT_VALIDATORS.get(event)
        if validator_cls is None:
            raise ValueError(f"Unknown notification event: {event!r}")
        validator = _event_validator_cache[event] = validator_cls()
    return validator


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_notification(data: Dict[str, Any]) -> None:
    """
    Проверка уведомления по контракту, выбранному полем "event".

    Raises:
        ValueError: event не Transfer/Approval/Bought/Sold
        ValidationError: уведомление нарушает контракт
    """
    _validator_for_event(data.get("event")).validate(data)


def validate_ledger_snapshot(data: Dict[str, Any]) -> None:
    LedgerSnapshotValidator().validate(data)
