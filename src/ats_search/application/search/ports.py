"""Application search – storage port."""
from __future__ import annotations

import abc
from typing import Any

from ats_search.application.pagination import PageRequest
from ats_search.application.search.fields import EntityKind
from ats_search.kernel.predicate import Predicate


class SearchRepository(abc.ABC):
    """Port: evaluates predicate trees against stored candidates and jobs.

    Implementations must honour case-insensitive substring containment,
    inclusive range bounds and collection membership.  Errors are raised as
    they occur; the engine does not catch them.
    """

    @abc.abstractmethod
    async def find_page(self, kind: EntityKind, predicate: Predicate, page: PageRequest) -> list[Any]:
        """Rows matching *predicate*, ordered by ``page.sorts``, sliced by offset/limit."""

    @abc.abstractmethod
    async def count(self, kind: EntityKind, predicate: Predicate) -> int:
        """Number of rows matching *predicate*, unpaged."""

    @abc.abstractmethod
    async def distinct_values(self, kind: EntityKind, predicate: Predicate, attribute: str) -> list[Any]:
        """Distinct non-empty values of *attribute* over matching rows.

        List-valued attributes are flattened so each element counts once.
        """


__all__ = ["SearchRepository"]
