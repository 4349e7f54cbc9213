"""Application search – SearchEngine use case.

Ties the pieces together for one request::

    raw query ─ parse ─┐
    filters ───────────┼─ builder ─ predicate ─┬─ find_page ─┐
    scope ─────────────┘                        └─ count ─────┴─ highlight ─ SearchResult

The engine holds no per-request state; concurrent calls share nothing but the
repository and configuration.
"""
from __future__ import annotations

import asyncio
from typing import Any

from ats_search.application.feature_flags import FeatureFlag, FeatureFlagProvider, InMemoryFeatureFlagProvider
from ats_search.application.pagination import PageRequest, SortDirection
from ats_search.application.search.builders import QueryBuilder, builder_for
from ats_search.application.search.fields import EntityKind
from ats_search.application.search.filters import SlaStatus
from ats_search.application.search.highlight import highlight
from ats_search.application.search.parser import ParsedQuery, parse_boolean_query
from ats_search.application.search.ports import SearchRepository
from ats_search.application.search.query import SearchQuery
from ats_search.application.search.result import SearchResult
from ats_search.config import SearchSettings
from ats_search.kernel.predicate import all_of, resolve_path
from ats_search.kernel.time import Clock, SystemClock
from ats_search.observability.logging import get_logger

BOOLEAN_EXPRESSIONS_FLAG = FeatureFlag(
    key="search.boolean_expressions",
    description="Evaluate AND/OR/NOT and parentheses as an expression instead of requiring every term",
    default_value=False,
)

JOB_STATUSES = ("active", "paused", "closed")

EXPERIENCE_RANGES: tuple[dict[str, Any], ...] = (
    {"label": "0-2 years", "min": 0, "max": 2},
    {"label": "3-5 years", "min": 3, "max": 5},
    {"label": "6-10 years", "min": 6, "max": 10},
    {"label": "10+ years", "min": 10, "max": None},
)

_log = get_logger(__name__)


class SearchEngine:
    """Executes candidate and job searches against a :class:`SearchRepository`."""

    def __init__(
        self,
        repository: SearchRepository,
        *,
        settings: SearchSettings | None = None,
        flags: FeatureFlagProvider | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._repository = repository
        self._settings = settings or SearchSettings()
        self._flags = flags or InMemoryFeatureFlagProvider(
            {BOOLEAN_EXPRESSIONS_FLAG.key: self._settings.boolean_expressions}
        )
        self._clock = clock or SystemClock()

    def builder(self, kind: EntityKind) -> QueryBuilder:
        return builder_for(
            kind,
            clock=self._clock,
            threshold_days=self._settings.sla_threshold_days,
            at_risk_days=self._settings.sla_at_risk_days,
        )

    async def parse(self, raw: str, scope_id: str | None = None) -> ParsedQuery:
        """Parse *raw* with the policy the feature flag selects for *scope_id*."""
        expressions = await self._flags.is_enabled_for_scope(BOOLEAN_EXPRESSIONS_FLAG, scope_id)
        return parse_boolean_query(raw, expressions=expressions)

    async def execute(self, kind: EntityKind, scope_id: str, query: SearchQuery) -> SearchResult[Any]:
        """Run one search.

        The page read and the count read are issued concurrently; if either
        fails the other is cancelled and the storage error propagates unchanged.
        """
        builder = self.builder(kind)
        parsed = await self.parse(query.query, scope_id)
        predicate = builder.build(scope_id, query.filters, parsed)
        page = PageRequest(
            page=query.page,
            size=query.page_size,
            sorts=builder.sort_for(query.sort_by, query.sort_order),
        )
        log = _log.bind(kind=kind.value, scope_id=scope_id)

        page_task = asyncio.ensure_future(self._repository.find_page(kind, predicate, page))
        count_task = asyncio.ensure_future(self._repository.count(kind, predicate))
        try:
            rows, total = await asyncio.gather(page_task, count_task)
        except Exception as exc:
            for task in (page_task, count_task):
                task.cancel()
            # Let the cancelled read release its session before reporting.
            await asyncio.gather(page_task, count_task, return_exceptions=True)
            log.error("search.storage_failed", error=repr(exc), exc_info=True)
            raise

        result: SearchResult[Any] = SearchResult(
            items=list(rows),
            total=total,
            page=query.page,
            page_size=query.page_size,
            highlights=highlight(rows, parsed.positive_terms, builder.descriptor),
            query=query.query,
            parsed_query=parsed,
            filters=query.filters,
        )
        log.debug(
            "search.executed",
            query=query.query,
            terms=len(parsed.terms),
            valid=parsed.is_valid,
            active_filters=query.filters.count_active(),
            total=total,
            page=query.page,
            total_pages=result.total_pages,
        )
        return result

    async def search_candidates(self, scope_id: str, query: SearchQuery) -> SearchResult[Any]:
        return await self.execute(EntityKind.CANDIDATE, scope_id, query)

    async def search_jobs(self, scope_id: str, query: SearchQuery) -> SearchResult[Any]:
        return await self.execute(EntityKind.JOB, scope_id, query)

    async def suggest(self, kind: EntityKind, scope_id: str, prefix: str) -> list[str]:
        """Distinct field values containing *prefix*, for type-ahead.

        Scans a handful of the newest matching rows and returns at most
        ``suggestion_limit`` values.
        """
        if not prefix.strip():
            return []
        builder = self.builder(kind)
        predicate = all_of(builder.scope(scope_id), builder.suggestion_condition(prefix))
        page = PageRequest(
            page=1,
            size=self._settings.suggestion_scan_limit,
            sorts=builder.sort_for("createdAt", SortDirection.DESC),
        )
        rows = await self._repository.find_page(kind, predicate, page)

        needle = prefix.lower()
        suggestions: list[str] = []
        for row in rows:
            for field in builder.descriptor.suggestion_fields:
                value = resolve_path(row, field.attribute)
                if isinstance(value, str) and needle in value.lower() and value not in suggestions:
                    suggestions.append(value)
        return suggestions[: self._settings.suggestion_limit]

    async def filter_options(self, kind: EntityKind, scope_id: str) -> dict[str, Any]:
        """Values a client can offer in its filter pickers for *scope_id*."""
        builder = self.builder(kind)
        scope = builder.scope(scope_id)
        distinct = self._repository.distinct_values

        if kind is EntityKind.CANDIDATE:
            locations, sources, skills = await asyncio.gather(
                distinct(kind, scope, "location"),
                distinct(kind, scope, "source"),
                distinct(kind, scope, "skills"),
            )
            return {
                "locations": locations,
                "sources": sources,
                "skills": skills,
                "experienceRanges": [dict(r) for r in EXPERIENCE_RANGES],
            }

        departments, locations, priorities = await asyncio.gather(
            distinct(kind, scope, "department"),
            distinct(kind, scope, "locations"),
            distinct(kind, scope, "priority"),
        )
        return {
            "statuses": list(JOB_STATUSES),
            "departments": departments,
            "locations": locations,
            "priorities": priorities,
            "slaStatuses": [status.label for status in SlaStatus],
        }


__all__ = ["BOOLEAN_EXPRESSIONS_FLAG", "EXPERIENCE_RANGES", "JOB_STATUSES", "SearchEngine"]
