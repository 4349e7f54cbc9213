"""Testing fakes – FailingSearchRepository."""
from __future__ import annotations

import asyncio
from typing import Any

from ats_search.application.pagination import PageRequest
from ats_search.application.search.fields import EntityKind
from ats_search.application.search.ports import SearchRepository
from ats_search.kernel.errors import InfrastructureError
from ats_search.kernel.predicate import Predicate


class FailingSearchRepository(SearchRepository):
    """Repository whose count read fails while the page read is still pending.

    ``find_page`` waits on an event that is never set, so a search only
    finishes if the engine cancels it.  ``page_cancelled`` records that, and
    ``page_closed`` is set once the read has finished its (async) cleanup.
    """

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error or InfrastructureError("storage unavailable", code="storage_unavailable")
        self.page_cancelled = False
        self.page_closed = False

    async def find_page(self, kind: EntityKind, predicate: Predicate, page: PageRequest) -> list[Any]:
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.page_cancelled = True
            raise
        finally:
            await asyncio.sleep(0)
            self.page_closed = True
        return []  # pragma: no cover

    async def count(self, kind: EntityKind, predicate: Predicate) -> int:
        await asyncio.sleep(0)
        raise self.error

    async def distinct_values(self, kind: EntityKind, predicate: Predicate, attribute: str) -> list[Any]:
        raise self.error


__all__ = ["FailingSearchRepository"]
