"""Application search – highlight markers for a page of results."""
from __future__ import annotations

from typing import Any, Iterable, Sequence

from ats_search.application.search.fields import EntityDescriptor
from ats_search.kernel.predicate import resolve_path


def highlight(rows: Iterable[Any], terms: Sequence[str], descriptor: EntityDescriptor) -> dict[Any, list[str]]:
    """Map each row id to ``"field:term"`` markers for every searchable field containing a term.

    Rows without any marker are left out.  Runs over one page only, so the
    rows x terms x fields scan stays small.
    """
    highlights: dict[Any, list[str]] = {}
    if not terms:
        return highlights
    for row in rows:
        markers = [
            f"{field.name}:{term}"
            for term in terms
            for field in descriptor.search_fields
            if field.contains(row, term)
        ]
        if markers:
            highlights[resolve_path(row, descriptor.id_attribute)] = markers
    return highlights


__all__ = ["highlight"]
