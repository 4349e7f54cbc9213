"""Predicate tree – composable, storage-agnostic boolean conditions.

Nodes are plain immutable values: they describe *what* must hold for a record,
never *how* to check it.  Storage adapters walk the tree and translate it
(``ats_search.adapters.memory`` evaluates it in Python,
``ats_search.adapters.sqlalchemy`` compiles it to SQL).

Example::

    predicate = TextContains("name", "alice") | CollectionContains("skills", "go")
    predicate = Comparison("company_id", "eq", "acme") & predicate
"""

from __future__ import annotations

import dataclasses
from typing import Any, Literal

ComparisonOp = Literal["eq", "ne", "gt", "gte", "lt", "lte"]


class Predicate:
    """Base for every node – provides the boolean combinators."""

    # Named combinators ------------------------------------------------
    def and_(self, other: Predicate) -> Predicate:
        return all_of(self, other)

    def or_(self, other: Predicate) -> Or:
        return Or((self, other))

    def not_(self) -> Not:
        return Not(self)

    # Operator overloads -----------------------------------------------
    def __and__(self, other: Predicate) -> Predicate:
        return self.and_(other)

    def __or__(self, other: Predicate) -> Or:
        return self.or_(other)

    def __invert__(self) -> Not:
        return self.not_()


@dataclasses.dataclass(frozen=True)
class MatchAll(Predicate):
    """Identity predicate: imposes no constraint."""


MATCH_ALL = MatchAll()


@dataclasses.dataclass(frozen=True)
class And(Predicate):
    """Conjunction.  An empty ``And`` matches everything."""

    operands: tuple[Predicate, ...]


@dataclasses.dataclass(frozen=True)
class Or(Predicate):
    """Disjunction.  An empty ``Or`` matches nothing."""

    operands: tuple[Predicate, ...]


@dataclasses.dataclass(frozen=True)
class Not(Predicate):
    operand: Predicate


@dataclasses.dataclass(frozen=True)
class Comparison(Predicate):
    """``field <op> value``; a missing field never satisfies a comparison."""

    field: str
    op: ComparisonOp
    value: Any


@dataclasses.dataclass(frozen=True)
class In(Predicate):
    """Scalar field is a member of ``values``."""

    field: str
    values: tuple[Any, ...]
    case_insensitive: bool = False


@dataclasses.dataclass(frozen=True)
class TextContains(Predicate):
    """Case-insensitive substring containment on a text field."""

    field: str
    value: str


@dataclasses.dataclass(frozen=True)
class CollectionContains(Predicate):
    """List-valued field holds ``value`` as one of its elements."""

    field: str
    value: Any
    case_insensitive: bool = False


@dataclasses.dataclass(frozen=True)
class Related(Predicate):
    """At least one record reached through the to-many ``relation`` satisfies ``predicate``."""

    relation: str
    predicate: Predicate


def all_of(*predicates: Predicate) -> Predicate:
    """AND the given predicates together.

    Nested ``And`` nodes are flattened and ``MATCH_ALL`` operands dropped, so
    the identity stays the identity: ``all_of() is MATCH_ALL`` and
    ``all_of(MATCH_ALL, p) is p``.
    """
    flat: list[Predicate] = []
    for predicate in predicates:
        if isinstance(predicate, MatchAll):
            continue
        if isinstance(predicate, And):
            flat.extend(op for op in predicate.operands if not isinstance(op, MatchAll))
        else:
            flat.append(predicate)
    if not flat:
        return MATCH_ALL
    if len(flat) == 1:
        return flat[0]
    return And(tuple(flat))


def any_of(*predicates: Predicate) -> Or:
    """OR the given predicates together; with no operands nothing matches."""
    return Or(tuple(predicates))


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
]
