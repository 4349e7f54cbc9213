"""In-memory adapter – evaluate a predicate tree against one record.

Records may be mappings or plain objects; see
:func:`ats_search.kernel.predicate.resolve_path`.
"""
from __future__ import annotations

import operator
from datetime import datetime
from typing import Any, Callable

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
    resolve_path,
)

_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "eq": operator.eq,
    "ne": operator.ne,
    "gt": operator.gt,
    "gte": operator.ge,
    "lt": operator.lt,
    "lte": operator.le,
}


def _is_collection(value: Any) -> bool:
    return value is not None and not isinstance(value, (str, bytes)) and hasattr(value, "__iter__")


def evaluate(predicate: Predicate, record: Any) -> bool:
    """Return ``True`` when *record* satisfies *predicate*."""
    match predicate:
        case MatchAll():
            return True
        case And(operands=operands):
            return all(evaluate(op, record) for op in operands)
        case Or(operands=operands):
            return any(evaluate(op, record) for op in operands)
        case Not(operand=operand):
            return not evaluate(operand, record)
        case Comparison(field=field, op=op, value=value):
            actual = resolve_path(record, field)
            if actual is None:
                return False
            try:
                return _OPERATORS[op](actual, value)
            except TypeError:
                # naive vs aware datetimes
                if isinstance(actual, datetime) and isinstance(value, datetime):
                    raise
                return False
        case In(field=field, values=values, case_insensitive=ci):
            actual = resolve_path(record, field)
            if actual is None:
                return False
            if ci:
                return isinstance(actual, str) and actual.lower() in {str(v).lower() for v in values}
            return actual in values
        case TextContains(field=field, value=value):
            actual = resolve_path(record, field)
            return isinstance(actual, str) and value.lower() in actual.lower()
        case CollectionContains(field=field, value=value, case_insensitive=ci):
            actual = resolve_path(record, field)
            if not _is_collection(actual):
                return False
            if ci and isinstance(value, str):
                needle = value.lower()
                return any(isinstance(item, str) and item.lower() == needle for item in actual)
            return value in actual
        case Related(relation=relation, predicate=inner):
            related = resolve_path(record, relation)
            if not _is_collection(related):
                return False
            return any(evaluate(inner, child) for child in related)
    raise UnsupportedPredicateError(f"Cannot evaluate {predicate!r}", adapter="memory")


__all__ = ["evaluate"]
