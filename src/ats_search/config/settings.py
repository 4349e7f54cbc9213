"""Config – SearchSettings."""
from __future__ import annotations

import dataclasses

from ats_search.config.errors import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class SearchSettings(Settings):
    """Tunables of the search engine, read from ``ATS_SEARCH_*`` variables."""

    _prefix: dataclasses.ClassVar[str] = "ATS_SEARCH"

    database_url: str = "sqlite+aiosqlite:///./ats_search.db"
    default_page_size: int = 20
    max_page_size: int = 100
    boolean_expressions: bool = False
    sla_threshold_days: int = 30
    sla_at_risk_days: int = 3
    suggestion_limit: int = 5
    suggestion_scan_limit: int = 10
    log_level: str = "INFO"
    log_json: bool = True

    def _validate(self) -> None:
        if self.max_page_size < 1:
            raise InvalidSettingValueError("max_page_size", self.max_page_size, "must be >= 1")
        if not 1 <= self.default_page_size <= self.max_page_size:
            raise InvalidSettingValueError(
                "default_page_size", self.default_page_size, f"must be between 1 and {self.max_page_size}"
            )
        if self.sla_threshold_days < 1:
            raise InvalidSettingValueError("sla_threshold_days", self.sla_threshold_days, "must be >= 1")
        if not 0 <= self.sla_at_risk_days <= self.sla_threshold_days:
            raise InvalidSettingValueError(
                "sla_at_risk_days", self.sla_at_risk_days, "must be between 0 and sla_threshold_days"
            )
        if self.suggestion_limit < 1 or self.suggestion_scan_limit < self.suggestion_limit:
            raise InvalidSettingValueError(
                "suggestion_scan_limit", self.suggestion_scan_limit, "must be >= suggestion_limit >= 1"
            )


__all__ = ["SearchSettings", "Settings"]
