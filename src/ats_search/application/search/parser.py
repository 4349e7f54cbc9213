"""Application search – boolean query parser.

Two policies are available.

*Legacy* (the default) collects terms and operators in order of appearance and
discards parentheses.  Terms are later combined as "every term must match some
field" no matter which operators were typed.

*Expression* mode additionally builds an operator-precedence tree
(``NOT`` > ``AND`` > ``OR``, parentheses override, adjacent operands joined by
an implicit ``AND``) that the condition builders evaluate instead.  It is
switched on per call through the ``search.boolean_expressions`` feature flag.
"""
from __future__ import annotations

import dataclasses
from typing import Literal, Sequence, Union

from ats_search.application.search.tokenizer import OPERATOR_KINDS, QueryToken, TokenKind, tokenize
from ats_search.kernel.errors import QuerySyntaxError
from ats_search.observability.logging import get_logger

Operator = Literal["AND", "OR", "NOT"]

_log = get_logger(__name__)


# ---------------------------------------------------------------------------
# Expression tree
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class TermNode:
    text: str


@dataclasses.dataclass(frozen=True)
class AndNode:
    children: tuple[QueryNode, ...]


@dataclasses.dataclass(frozen=True)
class OrNode:
    children: tuple[QueryNode, ...]


@dataclasses.dataclass(frozen=True)
class NotNode:
    child: QueryNode


QueryNode = Union[TermNode, AndNode, OrNode, NotNode]


# ---------------------------------------------------------------------------
# ParsedQuery
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class ParsedQuery:
    """Structured form of a raw query string.

    An invalid query never carries terms, operators or an expression; a valid
    one never carries an error.
    """

    terms: tuple[str, ...] = ()
    operators: tuple[Operator, ...] = ()
    is_valid: bool = True
    error: str | None = None
    expression: QueryNode | None = None

    @classmethod
    def invalid(cls, error: str) -> ParsedQuery:
        return cls(is_valid=False, error=error)

    @property
    def is_empty(self) -> bool:
        return not self.terms

    @property
    def positive_terms(self) -> tuple[str, ...]:
        """Terms a matching record is expected to contain (negated terms excluded)."""
        if self.expression is None:
            return self.terms
        found: list[str] = []
        _collect_positive(self.expression, False, found)
        return tuple(found)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "terms": list(self.terms),
            "operators": list(self.operators),
            "isValid": self.is_valid,
        }
        if self.error is not None:
            payload["error"] = self.error
        return payload


def _collect_positive(node: QueryNode, negated: bool, found: list[str]) -> None:
    if isinstance(node, TermNode):
        if not negated:
            found.append(node.text)
    elif isinstance(node, NotNode):
        _collect_positive(node.child, not negated, found)
    else:
        for child in node.children:
            _collect_positive(child, negated, found)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_tokens(tokens: Sequence[QueryToken]) -> tuple[list[str], list[Operator]]:
    """Collect terms and operators in order of appearance; parentheses are dropped."""
    terms: list[str] = []
    operators: list[Operator] = []
    for token in tokens:
        if token.kind is TokenKind.TERM:
            terms.append(token.text)
        elif token.kind in OPERATOR_KINDS:
            operators.append(token.kind.value)  # type: ignore[arg-type]
    return terms, operators


class _ExpressionParser:
    """Recursive-descent parser over a token list.

    Grammar::

        or_expr   := and_expr ( OR and_expr )*
        and_expr  := not_expr ( [AND] not_expr )*
        not_expr  := NOT not_expr | primary
        primary   := TERM | "(" or_expr ")"
    """

    def __init__(self, tokens: Sequence[QueryToken]) -> None:
        self._tokens = tokens
        self._pos = 0

    def parse(self) -> QueryNode | None:
        if not self._tokens:
            return None
        node = self._or_expr()
        if self._pos < len(self._tokens):
            token = self._tokens[self._pos]
            raise QuerySyntaxError(f"Unexpected '{token.text}'", position=self._pos)
        return node

    def _peek(self) -> QueryToken | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _or_expr(self) -> QueryNode:
        children = [self._and_expr()]
        while (token := self._peek()) is not None and token.kind is TokenKind.OR:
            self._pos += 1
            children.append(self._and_expr())
        return children[0] if len(children) == 1 else OrNode(tuple(children))

    def _and_expr(self) -> QueryNode:
        children = [self._not_expr()]
        while (token := self._peek()) is not None:
            if token.kind is TokenKind.AND:
                self._pos += 1
            elif token.kind not in (TokenKind.TERM, TokenKind.NOT, TokenKind.LPAREN):
                break
            children.append(self._not_expr())
        return children[0] if len(children) == 1 else AndNode(tuple(children))

    def _not_expr(self) -> QueryNode:
        token = self._peek()
        if token is not None and token.kind is TokenKind.NOT:
            self._pos += 1
            return NotNode(self._not_expr())
        return self._primary()

    def _primary(self) -> QueryNode:
        token = self._peek()
        if token is None:
            raise QuerySyntaxError("Query ends where a term was expected", position=self._pos)
        if token.kind is TokenKind.TERM:
            self._pos += 1
            return TermNode(token.text)
        if token.kind is TokenKind.LPAREN:
            opened_at = self._pos
            self._pos += 1
            inner = self._or_expr()
            closing = self._peek()
            if closing is None or closing.kind is not TokenKind.RPAREN:
                raise QuerySyntaxError("Unbalanced '(' in query", position=opened_at)
            self._pos += 1
            return inner
        raise QuerySyntaxError(f"Unexpected '{token.text}'", position=self._pos)


def parse_expression(tokens: Sequence[QueryToken]) -> QueryNode | None:
    """Build the precedence tree for *tokens*; ``None`` for an empty query."""
    return _ExpressionParser(tokens).parse()


def parse_boolean_query(raw: str, *, expressions: bool = False) -> ParsedQuery:
    """Parse *raw* into a :class:`ParsedQuery`.  Never raises.

    Any failure while tokenizing or parsing yields an invalid ``ParsedQuery``
    carrying the error message instead.
    """
    try:
        tokens = tokenize(raw)
        terms, operators = parse_tokens(tokens)
        expression = parse_expression(tokens) if expressions else None
    except Exception as exc:  # noqa: BLE001 – any parse failure degrades to an invalid query
        message = exc.message if isinstance(exc, QuerySyntaxError) else (str(exc) or "Invalid query syntax")
        _log.info("query.parse_failed", error=message, expressions=expressions)
        return ParsedQuery.invalid(message)
    return ParsedQuery(
        terms=tuple(terms),
        operators=tuple(operators),
        expression=expression,
    )


__all__ = [
    "AndNode",
    "NotNode",
    "Operator",
    "OrNode",
    "ParsedQuery",
    "QueryNode",
    "TermNode",
    "parse_boolean_query",
    "parse_expression",
    "parse_tokens",
]
