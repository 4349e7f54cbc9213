"""Kernel predicate – field path resolution for record-shaped values."""
from __future__ import annotations

from typing import Any, Mapping


def resolve_path(record: Any, path: str) -> Any:
    """Follow a dotted *path* through mappings and attributes.

    Returns ``None`` as soon as a segment is missing, so ``current_stage.name``
    on a record without a stage is simply ``None``.
    """
    value = record
    for segment in path.split("."):
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(segment)
        else:
            value = getattr(value, segment, None)
    return value


__all__ = ["resolve_path"]
