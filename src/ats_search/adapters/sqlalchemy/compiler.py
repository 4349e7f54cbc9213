"""SQLAlchemy adapter – compile a predicate tree into a WHERE clause.

=====================  =================================================
Predicate              SQL
=====================  =================================================
``TextContains``       ``col ILIKE '%term%'`` (wildcards in term escaped)
``In`` (insensitive)   ``lower(col) IN (...)``
``CollectionContains`` ``EXISTS (SELECT value FROM json_each(col) ...)``
``Not``                ``NOT coalesce(operand, false)``
``Related``            ``EXISTS`` via ``relationship.any()``
dotted field           ``relationship.has()`` on the first segment
=====================  =================================================

PostgreSQL uses ``jsonb_array_elements_text`` in place of SQLite's
``json_each``.
"""
from __future__ import annotations

import dataclasses
from typing import Any

from sqlalchemy import and_, false, func, not_, or_, select, true
from sqlalchemy.orm import InstrumentedAttribute, RelationshipProperty
from sqlalchemy.sql.elements import ColumnElement

from ats_search.kernel.errors import UnsupportedPredicateError
from ats_search.kernel.predicate import (
    And,
    CollectionContains,
    Comparison,
    In,
    MatchAll,
    Not,
    Or,
    Predicate,
    Related,
    TextContains,
)

_ELEMENT_FUNCTIONS = {"postgresql": "jsonb_array_elements_text"}


def escape_like(term: str, escape: str = "\\") -> str:
    return term.replace(escape, escape * 2).replace("%", escape + "%").replace("_", escape + "_")


class PredicateCompiler:
    """Translate predicates against an ORM model into SQLAlchemy expressions."""

    def __init__(self, dialect_name: str = "sqlite") -> None:
        self._dialect_name = dialect_name

    def compile(self, predicate: Predicate, model: type[Any]) -> ColumnElement[bool]:
        field = getattr(predicate, "field", None)
        if field is not None and "." in field:
            head, rest = field.split(".", 1)
            return self._through(model, head, dataclasses.replace(predicate, field=rest))  # type: ignore[type-var]

        match predicate:
            case MatchAll():
                return true()
            case And(operands=operands):
                return and_(*(self.compile(op, model) for op in operands)) if operands else true()
            case Or(operands=operands):
                return or_(*(self.compile(op, model) for op in operands)) if operands else false()
            case Not(operand=operand):
                # NULL columns make the operand unknown; collapse it to false first
                return not_(func.coalesce(self.compile(operand, model), false()))
            case Related(relation=relation, predicate=inner):
                return self._through(model, relation, inner)
            case Comparison(field=name, op=op, value=value):
                return self._compare(self._column(model, name), op, value)
            case In(field=name, values=values, case_insensitive=ci):
                column = self._column(model, name)
                if ci:
                    return func.lower(column).in_([str(v).lower() for v in values])
                return column.in_(list(values))
            case TextContains(field=name, value=value):
                return self._column(model, name).ilike(f"%{escape_like(value)}%", escape="\\")
            case CollectionContains(field=name, value=value, case_insensitive=ci):
                return self._collection_contains(self._column(model, name), value, ci)
        raise UnsupportedPredicateError(f"Cannot compile {predicate!r}", adapter="sqlalchemy")

    # ------------------------------------------------------------------

    def _column(self, model: type[Any], name: str) -> InstrumentedAttribute[Any]:
        column = getattr(model, name, None)
        if column is None:
            raise UnsupportedPredicateError(f"{model.__name__} has no attribute '{name}'", adapter="sqlalchemy")
        return column

    def _through(self, model: type[Any], relation: str, inner: Predicate) -> ColumnElement[bool]:
        attribute = self._column(model, relation)
        prop = getattr(attribute, "property", None)
        if not isinstance(prop, RelationshipProperty):
            raise UnsupportedPredicateError(
                f"{model.__name__}.{relation} is not a relationship", adapter="sqlalchemy"
            )
        condition = self.compile(inner, prop.mapper.class_)
        return attribute.any(condition) if prop.uselist else attribute.has(condition)

    @staticmethod
    def _compare(column: Any, op: str, value: Any) -> ColumnElement[bool]:
        if op == "eq":
            return column == value
        if op == "ne":
            return column != value
        if op == "gt":
            return column > value
        if op == "gte":
            return column >= value
        if op == "lt":
            return column < value
        if op == "lte":
            return column <= value
        raise UnsupportedPredicateError(f"Unknown comparison operator '{op}'", adapter="sqlalchemy")

    def _collection_contains(self, column: Any, value: Any, case_insensitive: bool) -> ColumnElement[bool]:
        fn = getattr(func, _ELEMENT_FUNCTIONS.get(self._dialect_name, "json_each"))
        elements = fn(column).table_valued("value").alias()
        element = elements.c.value
        if case_insensitive and isinstance(value, str):
            condition = func.lower(element) == value.lower()
        else:
            condition = element == value
        return select(element).select_from(elements).where(condition).exists()


__all__ = ["PredicateCompiler", "escape_like"]
