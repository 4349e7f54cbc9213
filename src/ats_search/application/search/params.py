"""Application search – decode request parameters into a :class:`SearchQuery`.

Parameters arrive as the web client sends them: camelCase keys, numbers as
strings, and multi-value filters either as a list or as a single string.
Every problem is collected and reported in one :class:`ValidationError`.
"""
from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Mapping

from ats_search.application.pagination import SortDirection
from ats_search.application.search.fields import EntityKind
from ats_search.application.search.filters import DateRange, SearchFilters
from ats_search.application.search.query import SearchQuery
from ats_search.config import SearchSettings
from ats_search.kernel.errors import ValidationError

_CANDIDATE_ARRAYS = ("stage", "location", "source", "skills")
_JOB_ARRAYS = ("status", "department", "location", "priority", "slaStatus")


def _array(value: Any) -> tuple[str, ...] | None:
    if value is None or value == "":
        return None
    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value)
    return (str(value),)


class _Collector:
    def __init__(self) -> None:
        self.errors: list[dict[str, str]] = []

    def fail(self, field: str, message: str) -> None:
        self.errors.append({"field": field, "message": message})

    def integer(self, params: Mapping[str, Any], key: str, *, default: int | None, low: int, high: int | None = None) -> int | None:
        raw = params.get(key)
        if raw is None or raw == "":
            return default
        try:
            value = int(raw)
        except (TypeError, ValueError):
            self.fail(key, "must be an integer")
            return default
        if value < low or (high is not None and value > high):
            bound = f"between {low} and {high}" if high is not None else f">= {low}"
            self.fail(key, f"must be {bound}")
            return default
        return value

    def timestamp(self, params: Mapping[str, Any], key: str) -> datetime | None:
        """Parse an ISO-8601 value; one without an offset is taken as UTC."""
        raw = params.get(key)
        if raw is None or raw == "":
            return None
        if isinstance(raw, datetime):
            value = raw
        else:
            try:
                value = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
            except ValueError:
                self.fail(key, "must be an ISO-8601 datetime")
                return None
        return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def search_query_from_params(
    kind: EntityKind,
    params: Mapping[str, Any],
    settings: SearchSettings | None = None,
) -> SearchQuery:
    """Validate decoded request *params* for a *kind* search.

    Raises:
        ValidationError: with one ``errors`` entry per invalid parameter.
    """
    settings = settings or SearchSettings()
    collector = _Collector()

    query = params.get("query") or ""
    if not isinstance(query, str):
        collector.fail("query", "must be a string")
        query = ""

    page = collector.integer(params, "page", default=1, low=1)
    page_size = collector.integer(
        params, "pageSize", default=settings.default_page_size, low=1, high=settings.max_page_size
    )

    sort_by = params.get("sortBy") or "createdAt"
    raw_order = params.get("sortOrder") or SortDirection.DESC.value
    try:
        sort_order = SortDirection(str(raw_order).lower())
    except ValueError:
        collector.fail("sortOrder", "must be 'asc' or 'desc'")
        sort_order = SortDirection.DESC

    filter_values: dict[str, Any] = {}
    if kind is EntityKind.CANDIDATE:
        for key in _CANDIDATE_ARRAYS:
            filter_values[key] = _array(params.get(key))
        start = collector.timestamp(params, "startDate")
        end = collector.timestamp(params, "endDate")
        if start is not None and end is not None:
            if start > end:
                collector.fail("endDate", "must not be before startDate")
            else:
                filter_values["dateRange"] = DateRange(start, end)
        filter_values["experienceMin"] = collector.integer(params, "experienceMin", default=None, low=0)
        filter_values["experienceMax"] = collector.integer(params, "experienceMax", default=None, low=0)
    else:
        for key in _JOB_ARRAYS:
            filter_values[key] = _array(params.get(key))

    if collector.errors:
        raise ValidationError("Invalid search parameters", errors=collector.errors)

    return SearchQuery(
        query=query,
        filters=SearchFilters.from_mapping(filter_values),
        page=page or 1,
        page_size=page_size or settings.default_page_size,
        sort_by=str(sort_by),
        sort_order=sort_order,
    )


__all__ = ["search_query_from_params"]
