"""Application search – SearchFilters value object.

Every dimension is optional; ``None`` or an empty sequence means "no
constraint from this dimension".  Job-only dimensions (``status``,
``department``, ``priority``, ``sla_status``) are ignored for candidates and
the candidate-only ``stage`` and ``source`` are ignored for jobs.
"""
from __future__ import annotations

import dataclasses
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Mapping


@dataclasses.dataclass(frozen=True)
class DateRange:
    """Closed interval on the creation timestamp."""
    start: datetime
    end: datetime


class SlaStatus(str, Enum):
    ON_TRACK = "on_track"
    AT_RISK = "at_risk"
    BREACHED = "breached"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").capitalize()

    @classmethod
    def parse(cls, raw: str) -> SlaStatus | None:
        """Accept ``"at_risk"`` as well as display labels such as ``"At risk"``."""
        normalized = raw.strip().lower().replace(" ", "_").replace("-", "_")
        try:
            return cls(normalized)
        except ValueError:
            return None


@dataclasses.dataclass(frozen=True)
class SearchFilters:
    stage: tuple[str, ...] | None = None
    date_range: DateRange | None = None
    location: tuple[str, ...] | None = None
    source: tuple[str, ...] | None = None
    experience_min: int | float | None = None
    experience_max: int | float | None = None
    skills: tuple[str, ...] | None = None
    status: tuple[str, ...] | None = None
    department: tuple[str, ...] | None = None
    priority: tuple[str, ...] | None = None
    sla_status: tuple[str, ...] | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> SearchFilters:
        """Build filters from a decoded payload; camelCase or snake_case keys,
        unknown keys ignored."""
        known = {f.name for f in dataclasses.fields(cls)}
        kwargs: dict[str, Any] = {}
        for raw_key, value in data.items():
            key = _ALIASES.get(raw_key, raw_key)
            if key not in known or value is None:
                continue
            if key == "date_range":
                kwargs[key] = value if isinstance(value, DateRange) else DateRange(value["start"], value["end"])
            elif key in ("experience_min", "experience_max"):
                kwargs[key] = value
            else:
                kwargs[key] = _as_tuple(value)
        return cls(**kwargs)

    def count_active(self) -> int:
        """Number of dimensions currently constraining the search.

        The experience bounds count as one dimension.
        """
        count = sum(
            1
            for values in (
                self.stage, self.location, self.source, self.skills,
                self.status, self.department, self.priority, self.sla_status,
            )
            if values
        )
        if self.date_range is not None:
            count += 1
        if self.experience_min is not None or self.experience_max is not None:
            count += 1
        return count

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        for field in dataclasses.fields(self):
            value = getattr(self, field.name)
            if value is None:
                continue
            key = _WIRE_NAMES.get(field.name, field.name)
            if isinstance(value, DateRange):
                payload[key] = {"start": value.start.isoformat(), "end": value.end.isoformat()}
            elif isinstance(value, tuple):
                payload[key] = list(value)
            else:
                payload[key] = value
        return payload


_WIRE_NAMES = {
    "date_range": "dateRange",
    "experience_min": "experienceMin",
    "experience_max": "experienceMax",
    "sla_status": "slaStatus",
}
_ALIASES = {wire: name for name, wire in _WIRE_NAMES.items()}


def _as_tuple(value: str | Iterable[str]) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    return tuple(value)


def count_active_filters(filters: SearchFilters) -> int:
    return filters.count_active()


def clear_all_filters() -> SearchFilters:
    return SearchFilters()


__all__ = [
    "DateRange",
    "SearchFilters",
    "SlaStatus",
    "clear_all_filters",
    "count_active_filters",
]
