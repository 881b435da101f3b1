"""
JSON Schema контракты пула

Схемы лежат в contracts/schema/ в корне проекта:
- asset_metadata.json: ответ asset ledger на fetch_metadata
- contract_info.json: публичное представление ledger пула
- contract_state.json: персистентная запись пула

При нарушении поднимается jsonschema.ValidationError с наиболее
релевантной ошибкой (jsonschema.exceptions.best_match).
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from jsonschema import Draft202012Validator, SchemaError
from jsonschema.exceptions import best_match

SCHEMA_DIR = Path(__file__).resolve().parents[3] / "contracts" / "schema"


class SchemaLoader:
    """Чтение схем из каталога с кэшем и meta-validation."""

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or SCHEMA_DIR
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Raises:
            FileNotFoundError: Нет файла <schema_name>.json
            ValueError: Файл не является валидной Draft 2020-12 схемой
        """
        if schema_name not in self._schemas:
            path = self._schema_dir / f"{schema_name}.json"
            schema = json.loads(path.read_text(encoding="utf-8"))
            try:
                Draft202012Validator.check_schema(schema)
            except SchemaError as e:
                raise ValueError(f"{path.name} is not a valid JSON Schema: {e.message}") from e
            self._schemas[schema_name] = schema
        return self._schemas[schema_name]


_LOADER = SchemaLoader()


@lru_cache(maxsize=None)
def get_validator(schema_name: str) -> Draft202012Validator:
    """Validator для схемы по имени (один экземпляр на схему)."""
    return Draft202012Validator(_LOADER.load_schema(schema_name))


def _check(schema_name: str, data: Dict[str, Any]) -> None:
    error = best_match(get_validator(schema_name).iter_errors(data))
    if error is not None:
        raise error


def validate_asset_metadata(data: Dict[str, Any]) -> None:
    _check("asset_metadata", data)


def validate_contract_info(data: Dict[str, Any]) -> None:
    _check("contract_info", data)


def validate_contract_state(data: Dict[str, Any]) -> None:
    _check("contract_state", data)
