"""Application search – query tokenizer.

Splits a raw query string into typed tokens with a single left-to-right regex
scan.  Alternatives are tried in priority order:

1. ``AND`` / ``OR`` / ``NOT`` as whole words, any case (emitted uppercase)
2. ``(`` and ``)``
3. a double-quoted run, emitted as one TERM with the quotes stripped
4. any maximal run of characters that are neither whitespace nor parentheses

Anything that matches none of them (i.e. whitespace) is skipped, so the
tokenizer never fails.
"""
from __future__ import annotations

import dataclasses
import re
from enum import Enum


class TokenKind(str, Enum):
    AND = "AND"
    OR = "OR"
    NOT = "NOT"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    TERM = "TERM"


@dataclasses.dataclass(frozen=True)
class QueryToken:
    kind: TokenKind
    text: str


OPERATOR_KINDS = frozenset({TokenKind.AND, TokenKind.OR, TokenKind.NOT})

_TOKEN_RE = re.compile(
    r"""
      \b(?P<keyword>AND|OR|NOT)\b
    | (?P<lparen>\()
    | (?P<rparen>\))
    | "(?P<quoted>[^"]*)"
    | (?P<bare>[^\s()]+)
    """,
    re.IGNORECASE | re.VERBOSE,
)


def tokenize(raw: str) -> list[QueryToken]:
    """Return the tokens of *raw* in input order."""
    tokens: list[QueryToken] = []
    for match in _TOKEN_RE.finditer(raw):
        group = match.lastgroup
        if group == "keyword":
            keyword = match.group("keyword").upper()
            tokens.append(QueryToken(TokenKind(keyword), keyword))
        elif group == "lparen":
            tokens.append(QueryToken(TokenKind.LPAREN, "("))
        elif group == "rparen":
            tokens.append(QueryToken(TokenKind.RPAREN, ")"))
        elif group == "quoted":
            tokens.append(QueryToken(TokenKind.TERM, match.group("quoted")))
        else:
            tokens.append(QueryToken(TokenKind.TERM, match.group("bare")))
    return tokens


__all__ = ["OPERATOR_KINDS", "QueryToken", "TokenKind", "tokenize"]
