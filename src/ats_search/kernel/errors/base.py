"""Root error class for the ats-search error hierarchy.

Query-syntax problems never reach callers as errors (the parser degrades to an
invalid ``ParsedQuery``); what does surface is bad request parameters
(:class:`ValidationError`) and storage failures (:class:`InfrastructureError`).
"""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """Base for every error the search engine raises on purpose.

    Args:
        message: Human-readable description, safe to return to the client.
        code: Machine-readable slug for the API response (defaults to ``default_code``).
        detail: Extra context such as the offending field or adapter.
        cause: Driver or library exception being reported.
    """

    default_code: str = "search_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the error body of a search response."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


__all__ = ["BaseError"]
