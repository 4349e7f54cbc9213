"""Infrastructure errors – storage adapter misuse."""

from __future__ import annotations

from typing import Any

from ats_search.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class UnsupportedPredicateError(InfrastructureError):
    """A storage adapter was handed a predicate or field it cannot evaluate."""

    default_code = "unsupported_predicate"

    def __init__(self, message: str, *, adapter: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.adapter = adapter


__all__ = ["InfrastructureError", "UnsupportedPredicateError"]
