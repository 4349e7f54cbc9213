"""Unit tests for the error hierarchy."""
from __future__ import annotations

import json

import pytest

from ats_search.config import ConfigError, InvalidSettingValueError
from ats_search.kernel.errors import (
    ApplicationError,
    BaseError,
    DomainError,
    InfrastructureError,
    QuerySyntaxError,
    UnsupportedPredicateError,
    ValidationError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls, parent",
        [
            (ValidationError, DomainError),
            (QuerySyntaxError, DomainError),
            (UnsupportedPredicateError, InfrastructureError),
            (ConfigError, ApplicationError),
            (DomainError, BaseError),
        ],
    )
    def test_subclassing(self, cls: type, parent: type) -> None:
        assert issubclass(cls, parent)

    def test_default_codes(self) -> None:
        assert ValidationError("x").code == "validation_error"
        assert QuerySyntaxError("x").code == "query_syntax_error"
        assert UnsupportedPredicateError("x").code == "unsupported_predicate"
        assert BaseError("x").code == "search_error"


class TestBaseError:
    def test_to_dict(self) -> None:
        err = BaseError("boom", code="custom", detail={"k": 1})
        assert err.to_dict() == {"code": "custom", "message": "boom", "detail": {"k": 1}}

    def test_cause_is_chained(self) -> None:
        cause = RuntimeError("db down")
        err = InfrastructureError("storage failed", cause=cause)
        assert err.__cause__ is cause
        assert "cause" in err.to_dict()

    def test_str_is_json(self) -> None:
        payload = json.loads(str(DomainError("bad")))
        assert payload["message"] == "bad"


class TestValidationError:
    def test_errors_serialised(self) -> None:
        err = ValidationError("invalid", errors=[{"field": "page", "message": "must be >= 1"}])
        assert err.to_dict()["errors"] == [{"field": "page", "message": "must be >= 1"}]

    def test_errors_default_empty(self) -> None:
        assert ValidationError("invalid").errors == []


class TestOtherErrors:
    def test_query_syntax_position(self) -> None:
        assert QuerySyntaxError("Unbalanced", position=3).position == 3

    def test_unsupported_predicate_adapter(self) -> None:
        assert UnsupportedPredicateError("nope", adapter="memory").adapter == "memory"

    def test_invalid_setting_value(self) -> None:
        err = InvalidSettingValueError("max_page_size", 0, "must be >= 1")
        assert err.setting_name == "max_page_size"
        assert "max_page_size" in err.message
