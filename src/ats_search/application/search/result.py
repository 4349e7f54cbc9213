"""Application search – SearchResult generic container."""
from __future__ import annotations

import dataclasses
from typing import Any, Callable, Generic, TypeVar

from ats_search.application.pagination import total_pages
from ats_search.application.search.filters import SearchFilters
from ats_search.application.search.parser import ParsedQuery

T = TypeVar("T")


@dataclasses.dataclass
class SearchResult(Generic[T]):
    items: list[T]
    total: int
    page: int
    page_size: int
    highlights: dict[Any, list[str]] = dataclasses.field(default_factory=dict)
    query: str = ""
    parsed_query: ParsedQuery | None = None
    filters: SearchFilters | None = None

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.page_size)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def to_dict(self, serialize_item: Callable[[T], Any] | None = None) -> dict[str, Any]:
        """Wire representation.

        ``highlights`` becomes a list of ``{"id", "matches"}`` pairs since
        identifier-keyed maps do not survive every wire format.
        """
        serialize = serialize_item or (lambda item: item)
        payload: dict[str, Any] = {
            "items": [serialize(item) for item in self.items],
            "total": self.total,
            "page": self.page,
            "pageSize": self.page_size,
            "totalPages": self.total_pages,
            "highlights": [{"id": key, "matches": list(matches)} for key, matches in self.highlights.items()],
        }
        if self.parsed_query is not None:
            payload["query"] = {"original": self.query, "parsed": self.parsed_query.to_dict()}
        if self.filters is not None:
            payload["filters"] = self.filters.to_dict()
        return payload


__all__ = ["SearchResult"]
