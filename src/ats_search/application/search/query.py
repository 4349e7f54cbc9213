"""Application search – SearchQuery value object."""
from __future__ import annotations

import dataclasses

from ats_search.application.pagination import PageRequest, SortDirection
from ats_search.application.search.filters import SearchFilters
from ats_search.kernel.errors import ValidationError


@dataclasses.dataclass(frozen=True)
class SearchQuery:
    query: str = ""
    filters: SearchFilters = dataclasses.field(default_factory=SearchFilters)
    page: int = 1
    page_size: int = 20
    sort_by: str = "createdAt"
    sort_order: SortDirection = SortDirection.DESC

    def __post_init__(self) -> None:
        # Validates page/page_size eagerly.
        PageRequest(page=self.page, size=self.page_size)
        if not isinstance(self.sort_order, SortDirection):
            try:
                direction = SortDirection(str(self.sort_order).lower())
            except ValueError:
                raise ValidationError(
                    f"Invalid sort order '{self.sort_order}'",
                    errors=[{"field": "sortOrder", "message": "must be 'asc' or 'desc'"}],
                ) from None
            object.__setattr__(self, "sort_order", direction)


__all__ = ["SearchQuery"]
