"""Unit tests for the in-memory predicate evaluator and repository."""
from __future__ import annotations

import asyncio
import dataclasses
import datetime

import pytest

from ats_search.adapters.memory import InMemorySearchRepository, evaluate
from ats_search.application.pagination import PageRequest, Sort, SortDirection
from ats_search.application.search import EntityKind
from ats_search.kernel.errors import UnsupportedPredicateError
from ats_search.kernel.predicate import (
    MATCH_ALL,
    And,
    CollectionContains,
    Comparison,
    In,
    Not,
    Or,
    Predicate,
    Related,
    TextContains,
)
from ats_search.testing import CandidateBuilder


class TestEvaluate:
    ROW = {
        "name": "Ada Lovelace",
        "experience_years": 5,
        "skills": ["Go", "rust"],
        "location": "Remote",
        "phone": None,
        "job_candidates": [{"current_stage": {"name": "Offer"}}],
    }

    def test_identity(self) -> None:
        assert evaluate(MATCH_ALL, self.ROW)

    def test_empty_and_or(self) -> None:
        assert evaluate(And(()), self.ROW)
        assert not evaluate(Or(()), self.ROW)

    @pytest.mark.parametrize(
        "op, value, expected",
        [("gte", 5, True), ("gt", 5, False), ("lte", 5, True), ("lt", 6, True), ("eq", 5, True), ("ne", 5, False)],
    )
    def test_comparison_inclusive(self, op: str, value: int, expected: bool) -> None:
        assert evaluate(Comparison("experience_years", op, value), self.ROW) is expected  # type: ignore[arg-type]

    def test_comparison_missing_field(self) -> None:
        assert not evaluate(Comparison("phone", "eq", None), self.ROW)
        assert not evaluate(Comparison("salary", "gte", 1), self.ROW)

    def test_comparison_incomparable_types(self) -> None:
        assert not evaluate(Comparison("name", "gt", 3), self.ROW)

    def test_naive_and_aware_datetimes_raise(self) -> None:
        row = {"created_at": datetime.datetime(2026, 1, 1, tzinfo=datetime.UTC)}
        with pytest.raises(TypeError):
            evaluate(Comparison("created_at", "gte", datetime.datetime(2025, 12, 1)), row)

    def test_in(self) -> None:
        assert evaluate(In("location", ("Remote",)), self.ROW)
        assert not evaluate(In("location", ("remote",)), self.ROW)
        assert evaluate(In("location", ("remote",), case_insensitive=True), self.ROW)

    def test_text_contains_case_insensitive(self) -> None:
        assert evaluate(TextContains("name", "LOVE"), self.ROW)
        assert not evaluate(TextContains("phone", "1"), self.ROW)

    def test_collection_contains(self) -> None:
        assert evaluate(CollectionContains("skills", "Go"), self.ROW)
        assert not evaluate(CollectionContains("skills", "go"), self.ROW)
        assert evaluate(CollectionContains("skills", "go", case_insensitive=True), self.ROW)
        assert not evaluate(CollectionContains("name", "Ada"), self.ROW)

    def test_not(self) -> None:
        assert evaluate(Not(TextContains("name", "grace")), self.ROW)

    def test_related(self) -> None:
        assert evaluate(Related("job_candidates", In("current_stage.name", ("Offer",))), self.ROW)
        assert not evaluate(Related("job_candidates", In("current_stage.name", ("Hired",))), self.ROW)

    def test_objects(self) -> None:
        @dataclasses.dataclass
        class Row:
            name: str

        assert evaluate(TextContains("name", "ada"), Row("Ada"))

    def test_unknown_node(self) -> None:
        @dataclasses.dataclass(frozen=True)
        class Fuzzy(Predicate):
            term: str

        with pytest.raises(UnsupportedPredicateError) as info:
            evaluate(Fuzzy("ada"), self.ROW)
        assert info.value.adapter == "memory"


class TestInMemorySearchRepository:
    def _repo(self) -> InMemorySearchRepository:
        base = CandidateBuilder()
        repo = InMemorySearchRepository()
        repo.add(
            EntityKind.CANDIDATE,
            base(id="c1", name="Carl", experience_years=None, skills=["go"]),
            base(id="c2", name="Ada", experience_years=7, skills=["rust", "go"]),
            base(id="c3", name="Bea", experience_years=3, skills=[]),
        )
        return repo

    def test_find_page_sorted_and_sliced(self) -> None:
        page = PageRequest(page=1, size=2, sorts=(Sort("name"),))
        rows = asyncio.run(self._repo().find_page(EntityKind.CANDIDATE, MATCH_ALL, page))
        assert [r["id"] for r in rows] == ["c2", "c3"]

    def test_missing_values_sort_last(self) -> None:
        for direction in SortDirection:
            page = PageRequest(sorts=(Sort("experience_years", direction),))
            rows = asyncio.run(self._repo().find_page(EntityKind.CANDIDATE, MATCH_ALL, page))
            assert rows[-1]["id"] == "c1"

    def test_count(self) -> None:
        predicate = CollectionContains("skills", "go")
        assert asyncio.run(self._repo().count(EntityKind.CANDIDATE, predicate)) == 2
        assert asyncio.run(self._repo().count(EntityKind.JOB, MATCH_ALL)) == 0

    def test_distinct_values_flattened(self) -> None:
        values = asyncio.run(self._repo().distinct_values(EntityKind.CANDIDATE, MATCH_ALL, "skills"))
        assert values == ["go", "rust"]
