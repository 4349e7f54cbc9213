"""Kernel predicate – the predicate tree shared by builders and storage adapters."""
from ats_search.kernel.predicate.paths import resolve_path
from ats_search.kernel.predicate.nodes import (
    MATCH_ALL,
    And,
    CollectionContains,
    Comparison,
    ComparisonOp,
    In,
    MatchAll,
    Not,
    Or,
    Predicate,
    Related,
    TextContains,
    all_of,
    any_of,
)

__all__ = [
    "MATCH_ALL",
    "And",
    "CollectionContains",
    "Comparison",
    "ComparisonOp",
    "In",
    "MatchAll",
    "Not",
    "Or",
    "Predicate",
    "Related",
    "TextContains",
    "all_of",
    "any_of",
    "resolve_path",
]
