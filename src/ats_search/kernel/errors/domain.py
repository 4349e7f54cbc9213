"""Domain errors – rejected search input."""

from __future__ import annotations

from typing import Any

from ats_search.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when search input breaks a rule of the search domain."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Search parameters do not meet validation rules.

    ``errors`` is a list of ``{"field": ..., "message": ...}`` entries, one per
    offending parameter.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


class QuerySyntaxError(DomainError):
    """The raw query string could not be parsed."""

    default_code = "query_syntax_error"

    def __init__(self, message: str, *, position: int | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.position = position


__all__ = ["DomainError", "QuerySyntaxError", "ValidationError"]
