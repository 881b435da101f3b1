"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей
- Детекция нарушений типов и constraints
- Интеграция с Pydantic моделями
"""

import pytest
from jsonschema import ValidationError

from src.core.contracts import (
    SCHEMA_DIR,
    SchemaLoader,
    get_validator,
    validate_asset_metadata,
    validate_contract_info,
    validate_contract_state,
)
from src.core.domain import AssetMetadata, ContractInfo, ContractState, PoolLedger
from src.core.math import U128_MAX


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_asset_metadata():
    """Валидный asset_metadata для тестирования."""
    return {
        "spec": "ft-1.0.0",
        "name": "TokenA",
        "symbol": "TKNA",
        "decimals": 12,
        "icon": None,
        "reference": None,
        "reference_hash": None,
    }


@pytest.fixture
def valid_contract_info():
    """Валидный contract_info для тестирования."""
    return {
        "token_a_id": "token-a.test",
        "token_a_name": "TokenA",
        "token_a_symbol": "TKNA",
        "token_a_supply": "1100",
        "token_a_decimals": 12,
        "token_b_id": "token-b.test",
        "token_b_name": "TokenB",
        "token_b_symbol": "TKNB",
        "token_b_supply": "909",
        "token_b_decimals": 12,
    }


@pytest.fixture
def pool_ledger(valid_asset_metadata) -> PoolLedger:
    metadata = AssetMetadata.model_validate(valid_asset_metadata)
    return PoolLedger.create("token-a.test", metadata, "token-b.test", metadata)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузчика схем"""

    @pytest.mark.parametrize("name", ["asset_metadata", "contract_info", "contract_state"])
    def test_schemas_load_and_are_valid(self, name: str) -> None:
        schema = SchemaLoader().load_schema(name)
        assert schema["title"] == name

    def test_schema_cached(self) -> None:
        loader = SchemaLoader()
        assert loader.load_schema("contract_info") is loader.load_schema("contract_info")

    def test_missing_schema(self) -> None:
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_validator_cached(self) -> None:
        assert get_validator("asset_metadata") is get_validator("asset_metadata")

    def test_invalid_schema_file(self, tmp_path) -> None:
        """Файл, не являющийся JSON Schema, отклоняется meta-validation."""
        (tmp_path / "broken.json").write_text('{"type": 12}', encoding="utf-8")
        with pytest.raises(ValueError, match="broken.json"):
            SchemaLoader(tmp_path).load_schema("broken")

    def test_default_dir(self) -> None:
        assert (SCHEMA_DIR / "contract_state.json").exists()


# =============================================================================
# ASSET METADATA
# =============================================================================


class TestAssetMetadataContract:
    """Тесты asset_metadata контракта"""

    def test_valid(self, valid_asset_metadata) -> None:
        validate_asset_metadata(valid_asset_metadata)
        assert get_validator("asset_metadata").is_valid(valid_asset_metadata)

    def test_optional_fields_may_be_omitted(self, valid_asset_metadata) -> None:
        for key in ("icon", "reference", "reference_hash"):
            del valid_asset_metadata[key]
        validate_asset_metadata(valid_asset_metadata)

    @pytest.mark.parametrize("field", ["spec", "name", "symbol", "decimals"])
    def test_required_fields(self, valid_asset_metadata, field: str) -> None:
        del valid_asset_metadata[field]
        with pytest.raises(ValidationError):
            validate_asset_metadata(valid_asset_metadata)

    def test_decimals_out_of_range(self, valid_asset_metadata) -> None:
        valid_asset_metadata["decimals"] = 256
        with pytest.raises(ValidationError):
            validate_asset_metadata(valid_asset_metadata)

    def test_decimals_wrong_type(self, valid_asset_metadata) -> None:
        valid_asset_metadata["decimals"] = "12"
        with pytest.raises(ValidationError):
            validate_asset_metadata(valid_asset_metadata)

    def test_unknown_field_rejected(self, valid_asset_metadata) -> None:
        valid_asset_metadata["extra"] = 1
        with pytest.raises(ValidationError):
            validate_asset_metadata(valid_asset_metadata)

    def test_pydantic_dump_is_valid(self) -> None:
        """Pydantic модель в json mode соответствует схеме"""
        metadata = AssetMetadata(name="TokenB", symbol="TKNB", decimals=6)
        validate_asset_metadata(metadata.model_dump(mode="json"))


# =============================================================================
# CONTRACT INFO
# =============================================================================


class TestContractInfoContract:
    """Тесты contract_info контракта"""

    def test_valid(self, valid_contract_info) -> None:
        validate_contract_info(valid_contract_info)

    def test_supply_must_be_string(self, valid_contract_info) -> None:
        valid_contract_info["token_a_supply"] = 1100
        with pytest.raises(ValidationError):
            validate_contract_info(valid_contract_info)

    def test_supply_leading_zero_rejected(self, valid_contract_info) -> None:
        valid_contract_info["token_b_supply"] = "0909"
        with pytest.raises(ValidationError):
            validate_contract_info(valid_contract_info)

    def test_supply_max_digits(self, valid_contract_info) -> None:
        valid_contract_info["token_a_supply"] = str(U128_MAX)
        validate_contract_info(valid_contract_info)

    def test_reports_offending_field(self, valid_contract_info) -> None:
        valid_contract_info["token_b_decimals"] = -1
        with pytest.raises(ValidationError) as exc_info:
            validate_contract_info(valid_contract_info)
        assert list(exc_info.value.path) == ["token_b_decimals"]

    def test_pydantic_dump_is_valid(self, pool_ledger: PoolLedger) -> None:
        info = ContractInfo.from_ledger(pool_ledger.with_supplies(1100, 909))
        validate_contract_info(info.model_dump(mode="json"))


# =============================================================================
# CONTRACT STATE
# =============================================================================


class TestContractStateContract:
    """Тесты contract_state контракта"""

    def test_state_without_ledger(self) -> None:
        validate_contract_state({"owner": "owner.test", "ledger": None})

    def test_ledger_key_required(self) -> None:
        with pytest.raises(ValidationError):
            validate_contract_state({"owner": "owner.test"})

    def test_pydantic_dump_is_valid(self, pool_ledger: PoolLedger) -> None:
        state = ContractState(owner="owner.test", ledger=pool_ledger.with_supplies(1000, 2000))
        validate_contract_state(state.model_dump(mode="json"))

    def test_negative_supply_rejected(self, pool_ledger: PoolLedger) -> None:
        data = ContractState(owner="owner.test", ledger=pool_ledger).model_dump(mode="json")
        data["ledger"]["token_a"]["tracked_supply"] = "-5"
        assert not get_validator("contract_state").is_valid(data)
