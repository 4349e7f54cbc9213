"""Application search – per-entity query builders.

:class:`CandidateQueryBuilder` and :class:`JobQueryBuilder` turn a
:class:`SearchFilters` and a :class:`ParsedQuery` into one predicate tree.
Builders are pure: no I/O, no shared state, a fresh tree per call.
"""
from __future__ import annotations

import abc
from datetime import timedelta
from typing import Sequence

from ats_search.application.pagination import Sort, SortDirection
from ats_search.application.search.fields import CANDIDATE, JOB, EntityDescriptor, EntityKind
from ats_search.application.search.filters import SearchFilters, SlaStatus
from ats_search.application.search.parser import AndNode, NotNode, OrNode, ParsedQuery, QueryNode, TermNode
from ats_search.kernel.errors import ValidationError
from ats_search.kernel.predicate import (
    MATCH_ALL,
    CollectionContains,
    Comparison,
    In,
    Not,
    Or,
    Predicate,
    Related,
    TextContains,
    all_of,
    any_of,
)
from ats_search.kernel.time import Clock, SystemClock

ACTIVE_JOB_STATUS = "active"


class QueryBuilder(abc.ABC):
    """Builds scope, filter, search-condition and sort criteria for one entity kind."""

    descriptor: EntityDescriptor

    @property
    def kind(self) -> EntityKind:
        return self.descriptor.kind

    def scope(self, scope_id: str) -> Predicate:
        return Comparison(self.descriptor.scope_attribute, "eq", scope_id)

    @abc.abstractmethod
    def build_filters(self, filters: SearchFilters) -> Predicate:
        """AND of one predicate per constrained dimension; ``MATCH_ALL`` when none is."""

    def build_search_conditions(self, parsed: ParsedQuery) -> Predicate:
        """Turn the parsed terms into field-matching predicates.

        Without an expression tree every term must match at least one
        searchable field, whatever operators were typed.
        """
        if not parsed.is_valid or not parsed.terms:
            return MATCH_ALL
        if parsed.expression is not None:
            return self._compile_expression(parsed.expression)
        return all_of(*(self.term_condition(term) for term in parsed.terms))

    def build(self, scope_id: str, filters: SearchFilters, parsed: ParsedQuery) -> Predicate:
        return all_of(self.scope(scope_id), self.build_filters(filters), self.build_search_conditions(parsed))

    def term_condition(self, term: str) -> Or:
        return any_of(*(field.term_predicate(term) for field in self.descriptor.search_fields))

    def suggestion_condition(self, prefix: str) -> Or:
        return any_of(*(TextContains(field.attribute, prefix) for field in self.descriptor.suggestion_fields))

    def sort_for(self, sort_by: str, sort_order: SortDirection | str) -> tuple[Sort, ...]:
        attribute = self.descriptor.sortable.get(sort_by)
        if attribute is None:
            allowed = ", ".join(sorted(self.descriptor.sortable))
            raise ValidationError(
                f"Cannot sort {self.kind.value}s by '{sort_by}'",
                errors=[{"field": "sortBy", "message": f"must be one of: {allowed}"}],
            )
        direction = SortDirection(sort_order)
        return (Sort(attribute, direction), Sort(self.descriptor.id_attribute, direction))

    def _compile_expression(self, node: QueryNode) -> Predicate:
        match node:
            case TermNode(text=text):
                return self.term_condition(text)
            case AndNode(children=children):
                return all_of(*(self._compile_expression(child) for child in children))
            case OrNode(children=children):
                return any_of(*(self._compile_expression(child) for child in children))
            case NotNode(child=child):
                return Not(self._compile_expression(child))
        raise TypeError(f"Unknown query node {node!r}")


# ---------------------------------------------------------------------------
# Shared filter shapes
# ---------------------------------------------------------------------------


def _member_of(field: str, values: Sequence[str] | None, *, case_insensitive: bool = False) -> Predicate:
    if not values:
        return MATCH_ALL
    if case_insensitive:
        return In(field, tuple(v.lower() for v in values), case_insensitive=True)
    return In(field, tuple(values))


def _contains_all(field: str, values: Sequence[str] | None) -> Predicate:
    if not values:
        return MATCH_ALL
    return all_of(*(CollectionContains(field, value) for value in values))


def _created_between(attribute: str, filters: SearchFilters) -> Predicate:
    if filters.date_range is None:
        return MATCH_ALL
    return all_of(
        Comparison(attribute, "gte", filters.date_range.start),
        Comparison(attribute, "lte", filters.date_range.end),
    )


def _bound(field: str, op: str, value: int | float | None) -> Predicate:
    if value is None:
        return MATCH_ALL
    return Comparison(field, op, value)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Candidates
# ---------------------------------------------------------------------------


class CandidateQueryBuilder(QueryBuilder):
    descriptor = CANDIDATE

    def build_filters(self, filters: SearchFilters) -> Predicate:
        stage = MATCH_ALL
        if filters.stage:
            stage = Related("job_candidates", In("current_stage.name", tuple(filters.stage)))
        return all_of(
            _member_of("location", filters.location, case_insensitive=True),
            _member_of("source", filters.source),
            _bound("experience_years", "gte", filters.experience_min),
            _bound("experience_years", "lte", filters.experience_max),
            _contains_all("skills", filters.skills),
            _created_between(self.descriptor.created_attribute, filters),
            stage,
        )


# ---------------------------------------------------------------------------
# Jobs
# ---------------------------------------------------------------------------


class JobQueryBuilder(QueryBuilder):
    """Job filters, including SLA status derived from how long an active job has been open.

    ``days_open = floor((now - created_at) / 1 day)``; a job is *breached*
    past ``threshold_days``, *at risk* within ``at_risk_days`` of it and *on
    track* otherwise.
    """

    descriptor = JOB

    def __init__(
        self,
        clock: Clock | None = None,
        *,
        threshold_days: int = 30,
        at_risk_days: int = 3,
    ) -> None:
        self._clock = clock or SystemClock()
        self._threshold_days = threshold_days
        self._at_risk_days = at_risk_days

    def build_filters(self, filters: SearchFilters) -> Predicate:
        locations = MATCH_ALL
        if filters.location:
            locations = any_of(*(CollectionContains("locations", loc) for loc in filters.location))
        return all_of(
            _member_of("status", filters.status),
            _member_of("department", filters.department),
            locations,
            _member_of("priority", filters.priority),
            _created_between(self.descriptor.created_attribute, filters),
            _bound("experience_min", "gte", filters.experience_min),
            _bound("experience_max", "lte", filters.experience_max),
            _contains_all("skills", filters.skills),
            self.sla_condition(filters.sla_status),
        )

    def sla_condition(self, labels: Sequence[str] | None) -> Predicate:
        statuses = [s for s in (SlaStatus.parse(label) for label in labels or ()) if s is not None]
        if not statuses:
            return MATCH_ALL
        windows = [self._sla_window(status) for status in dict.fromkeys(statuses)]
        return all_of(Comparison("status", "eq", ACTIVE_JOB_STATUS), any_of(*windows))

    def _sla_window(self, status: SlaStatus) -> Predicate:
        created = self.descriptor.created_attribute
        now = self._clock.now()
        # days_open <= threshold - at_risk  <=>  created_at > now - (threshold - at_risk + 1) days
        at_risk_edge = now - timedelta(days=self._threshold_days - self._at_risk_days + 1)
        # days_open > threshold  <=>  created_at <= now - (threshold + 1) days
        breached_edge = now - timedelta(days=self._threshold_days + 1)
        if status is SlaStatus.ON_TRACK:
            return Comparison(created, "gt", at_risk_edge)
        if status is SlaStatus.AT_RISK:
            return all_of(Comparison(created, "gt", breached_edge), Comparison(created, "lte", at_risk_edge))
        return Comparison(created, "lte", breached_edge)


def builder_for(
    kind: EntityKind,
    *,
    clock: Clock | None = None,
    threshold_days: int = 30,
    at_risk_days: int = 3,
) -> QueryBuilder:
    if kind is EntityKind.CANDIDATE:
        return CandidateQueryBuilder()
    return JobQueryBuilder(clock, threshold_days=threshold_days, at_risk_days=at_risk_days)


__all__ = [
    "ACTIVE_JOB_STATUS",
    "CandidateQueryBuilder",
    "JobQueryBuilder",
    "QueryBuilder",
    "builder_for",
]
