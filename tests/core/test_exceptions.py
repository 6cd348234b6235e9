"""Tests for domain exceptions."""

import pydantic
import pytest

from src.core.exceptions import (
    AuthorizationError,
    ConfigurationError,
    InsufficientStockError,
    LedgerError,
    MaterialNotFoundError,
    NotFoundError,
    PersistenceError,
    ReferenceInUseError,
    ValidationError,
)


class TestLedgerError:
    def test_default_code_is_class_name(self):
        err = LedgerError("boom")
        assert err.code == "LedgerError"
        assert err.to_dict() == {"error": "LedgerError", "message": "boom", "details": {}}

    def test_all_errors_share_the_base(self):
        for err in (
            ValidationError("name", "required"),
            InsufficientStockError(1, 10, 6),
            NotFoundError("supplier", 3),
            ReferenceInUseError("material", 1, "movement_items"),
            PersistenceError("apply movement", "disk I/O error"),
            AuthorizationError(),
            ConfigurationError("Invalid settings"),
        ):
            assert isinstance(err, LedgerError)


class TestValidationError:
    def test_details(self):
        err = ValidationError("items", "a movement needs at least one item", [])
        assert err.code == "VALIDATION_ERROR"
        assert err.details["field"] == "items"
        assert err.details["value"] == "[]"

    def test_long_values_are_truncated(self):
        err = ValidationError("notes", "too long", "x" * 500)
        assert len(err.details["value"]) == 100

    def test_from_pydantic_uses_first_error(self):
        class Payload(pydantic.BaseModel):
            quantity: int

        with pytest.raises(pydantic.ValidationError) as exc_info:
            Payload.model_validate({"quantity": "many"})

        err = ValidationError.from_pydantic(exc_info.value)
        assert err.details["field"] == "quantity"
        assert err.details["value"] == "many"


class TestInsufficientStockError:
    def test_reports_shortfall(self):
        err = InsufficientStockError(material_id=7, requested=10, available=6)
        assert err.code == "INSUFFICIENT_STOCK"
        assert err.details == {
            "material_id": 7,
            "requested": 10,
            "available": 6,
            "shortfall": 4,
        }
        assert "material 7" in err.message


class TestNotFoundError:
    def test_code_derives_from_entity(self):
        assert NotFoundError("third_party", 9).code == "THIRD_PARTY_NOT_FOUND"
        assert NotFoundError("third_party", 9).message == "Third party not found: 9"

    def test_material_not_found_is_not_found(self):
        err = MaterialNotFoundError(42)
        assert isinstance(err, NotFoundError)
        assert err.code == "MATERIAL_NOT_FOUND"
        assert err.details == {"entity": "material", "id": 42}


class TestOtherErrors:
    def test_reference_in_use(self):
        err = ReferenceInUseError("supplier", 2, "movements")
        assert err.code == "REFERENCE_IN_USE"
        assert err.details["referenced_by"] == "movements"

    def test_persistence_error(self):
        err = PersistenceError("apply movement", "database is locked")
        assert err.code == "PERSISTENCE_ERROR"
        assert "database is locked" in err.message

    def test_authorization_error_default_reason(self):
        err = AuthorizationError()
        assert err.code == "AUTHORIZATION_ERROR"
        assert err.details["reason"] == "No authenticated principal"

    def test_configuration_error(self):
        err = ConfigurationError("Invalid settings: LEDGER_TIMEZONE")
        assert err.code == "CONFIGURATION_ERROR"
        assert err.message == "Invalid settings: LEDGER_TIMEZONE"
