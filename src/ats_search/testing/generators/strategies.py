"""Testing generators – Hypothesis strategies for raw query strings.

Requires the ``hypothesis`` package:

    pip install "ats-search[test]"
"""
from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from hypothesis.strategies import SearchStrategy  # type: ignore[import-untyped]


def _require_hypothesis() -> Any:
    """Lazy import guard – raises a clear error when hypothesis is absent."""
    try:
        import hypothesis.strategies as st  # type: ignore[import-untyped]
        return st
    except ImportError as exc:
        raise ImportError(
            "Install 'hypothesis' to use property-based testing strategies: "
            "pip install hypothesis"
        ) from exc


_OPERATORS: tuple[str, ...] = ("AND", "OR", "NOT", "and", "or", "not")
_LEADING_OPERATOR = re.compile(r"(AND|OR|NOT)\b", re.IGNORECASE)


def bare_word_strategy() -> "SearchStrategy[str]":
    """Words without whitespace, quotes or parentheses that are not operators."""
    st = _require_hypothesis()
    alphabet = st.characters(
        exclude_categories=("Cs", "Zs", "Zl", "Zp", "Cc"),
        exclude_characters='"()',
    )
    return st.text(alphabet=alphabet, min_size=1, max_size=12).filter(lambda w: not _LEADING_OPERATOR.match(w))


def quoted_phrase_strategy() -> "SearchStrategy[str]":
    """Quoted phrases such as ``"senior engineer"`` (inner text has no quotes)."""
    st = _require_hypothesis()
    inner = st.text(
        alphabet=st.characters(exclude_categories=("Cs", "Cc"), exclude_characters='"'),
        max_size=20,
    )
    return inner.map(lambda text: f'"{text}"')


def raw_query_strategy(max_pieces: int = 8) -> "SearchStrategy[str]":
    """Arbitrary mixes of words, phrases, operators, parentheses and stray quotes."""
    st = _require_hypothesis()
    piece = st.one_of(
        bare_word_strategy(),
        quoted_phrase_strategy(),
        st.sampled_from(_OPERATORS),
        st.sampled_from(("(", ")", '"')),
    )
    separator = st.sampled_from((" ", "  ", "\t"))
    return st.lists(st.tuples(piece, separator), max_size=max_pieces).map(
        lambda parts: "".join(text + sep for text, sep in parts)
    )


__all__ = ["bare_word_strategy", "quoted_phrase_strategy", "raw_query_strategy"]
