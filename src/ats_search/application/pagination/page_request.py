"""Application pagination – PageRequest, Sort, SortDirection."""
from __future__ import annotations

import dataclasses
from enum import Enum

from ats_search.kernel.errors import ValidationError


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclasses.dataclass(frozen=True)
class Sort:
    """Single sort criterion on a storage attribute."""
    field: str
    direction: SortDirection = SortDirection.ASC


@dataclasses.dataclass(frozen=True)
class PageRequest:
    """Offset-based pagination parameters handed to storage adapters."""
    page: int = 1
    size: int = 20
    sorts: tuple[Sort, ...] = ()

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValidationError("page must be >= 1", errors=[{"field": "page", "message": "must be >= 1"}])
        if self.size < 1:
            raise ValidationError("size must be >= 1", errors=[{"field": "pageSize", "message": "must be >= 1"}])

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size


def total_pages(total: int, size: int) -> int:
    """``ceil(total / size)``; zero when there is nothing to page through."""
    if size <= 0 or total <= 0:
        return 0
    return -(-total // size)


__all__ = ["PageRequest", "Sort", "SortDirection", "total_pages"]
