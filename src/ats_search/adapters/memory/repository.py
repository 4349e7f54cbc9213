"""In-memory adapter – InMemorySearchRepository."""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from ats_search.adapters.memory.evaluator import evaluate
from ats_search.application.pagination import PageRequest, SortDirection
from ats_search.application.search.fields import EntityKind
from ats_search.application.search.ports import SearchRepository
from ats_search.kernel.predicate import Predicate, resolve_path


class InMemorySearchRepository(SearchRepository):
    """Holds candidates and jobs in lists and filters them with :func:`evaluate`.

    Suitable for tests and for small, read-mostly datasets.
    """

    def __init__(self, records: Mapping[EntityKind, Iterable[Any]] | None = None) -> None:
        self._records: dict[EntityKind, list[Any]] = {kind: [] for kind in EntityKind}
        for kind, rows in (records or {}).items():
            self._records[kind].extend(rows)

    def add(self, kind: EntityKind, *rows: Any) -> None:
        self._records[kind].extend(rows)

    def _matching(self, kind: EntityKind, predicate: Predicate) -> list[Any]:
        return [row for row in self._records[kind] if evaluate(predicate, row)]

    async def find_page(self, kind: EntityKind, predicate: Predicate, page: PageRequest) -> list[Any]:
        rows = self._matching(kind, predicate)
        # Stable sorts applied last-criterion-first; missing values always sort last.
        for sort in reversed(page.sorts):
            descending = sort.direction is SortDirection.DESC
            present = [row for row in rows if resolve_path(row, sort.field) is not None]
            missing = [row for row in rows if resolve_path(row, sort.field) is None]
            present.sort(key=lambda row: resolve_path(row, sort.field), reverse=descending)
            rows = present + missing
        return rows[page.offset : page.offset + page.size]

    async def count(self, kind: EntityKind, predicate: Predicate) -> int:
        return len(self._matching(kind, predicate))

    async def distinct_values(self, kind: EntityKind, predicate: Predicate, attribute: str) -> list[Any]:
        seen: dict[Any, None] = {}
        for row in self._matching(kind, predicate):
            value = resolve_path(row, attribute)
            values = value if isinstance(value, (list, tuple, set)) else [value]
            for item in values:
                if item is not None and item != "":
                    seen.setdefault(item, None)
        return sorted(seen, key=str)


__all__ = ["InMemorySearchRepository"]
