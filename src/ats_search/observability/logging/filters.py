"""Observability – SensitiveFieldsFilter.

Candidate records and free-text queries routinely carry e-mail addresses and
phone numbers; they are masked before a log line is rendered.
"""
from __future__ import annotations

import re
from typing import Any

DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset({
    "email", "phone", "password", "secret", "token", "api_key", "authorization",
    "database_url",
})

# Keys whose values are free text that may embed contact details.
DEFAULT_TEXT_FIELDS: frozenset[str] = frozenset({"query", "prefix"})

_EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}\b")
_PHONE_RE = re.compile(r"(?:\+?\d[\s\-\.]?){9,14}\d")


class SensitiveFieldsFilter:
    """Replace values of sensitive keys with ``[REDACTED]`` and mask contact
    details embedded in free-text keys."""

    REDACTED = "[REDACTED]"

    def __init__(
        self,
        sensitive_fields: frozenset[str] | None = None,
        text_fields: frozenset[str] | None = None,
    ) -> None:
        self._fields = sensitive_fields or DEFAULT_SENSITIVE_FIELDS
        self._text_fields = text_fields or DEFAULT_TEXT_FIELDS

    @staticmethod
    def mask_text(text: str) -> str:
        text = _EMAIL_RE.sub("[EMAIL]", text)
        return _PHONE_RE.sub("[PHONE]", text)

    def redact_deep(self, data: dict[str, Any]) -> dict[str, Any]:
        """Recursively redact nested dicts."""
        result: dict[str, Any] = {}
        for k, v in data.items():
            key = k.lower()
            if key in self._fields:
                result[k] = self.REDACTED
            elif key in self._text_fields and isinstance(v, str):
                result[k] = self.mask_text(v)
            elif isinstance(v, dict):
                result[k] = self.redact_deep(v)
            else:
                result[k] = v
        return result


__all__ = ["DEFAULT_SENSITIVE_FIELDS", "DEFAULT_TEXT_FIELDS", "SensitiveFieldsFilter"]
