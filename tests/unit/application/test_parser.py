"""Unit tests for the boolean query parser (legacy and expression modes)."""
from __future__ import annotations

from unittest import mock

import pytest
from hypothesis import given

from ats_search.application.search import ParsedQuery, parse_boolean_query, tokenize
from ats_search.application.search.parser import (
    AndNode,
    NotNode,
    OrNode,
    TermNode,
    parse_expression,
    parse_tokens,
)
from ats_search.kernel.errors import QuerySyntaxError
from ats_search.testing import raw_query_strategy


class TestLegacyParse:
    def test_empty_query_is_valid(self) -> None:
        parsed = parse_boolean_query("")
        assert parsed.is_valid
        assert parsed.terms == ()
        assert parsed.operators == ()
        assert parsed.error is None
        assert parsed.is_empty

    def test_terms_and_operators_in_order(self) -> None:
        parsed = parse_boolean_query("alice AND (engineer OR manager) NOT intern")
        assert parsed.terms == ("alice", "engineer", "manager", "intern")
        assert parsed.operators == ("AND", "OR", "NOT")

    def test_duplicates_kept(self) -> None:
        assert parse_boolean_query("go go").terms == ("go", "go")

    def test_parentheses_discarded(self) -> None:
        terms, operators = parse_tokens(tokenize("((a) b)"))
        assert terms == ["a", "b"]
        assert operators == []

    def test_unbalanced_input_still_valid(self) -> None:
        parsed = parse_boolean_query("(alice OR")
        assert parsed.is_valid
        assert parsed.terms == ("alice",)

    def test_no_expression_tree(self) -> None:
        assert parse_boolean_query("a OR b").expression is None

    def test_positive_terms_are_all_terms(self) -> None:
        assert parse_boolean_query("a NOT b").positive_terms == ("a", "b")

    def test_internal_failure_becomes_invalid(self) -> None:
        with mock.patch("ats_search.application.search.parser.tokenize", side_effect=RuntimeError("boom")):
            parsed = parse_boolean_query("anything")
        assert not parsed.is_valid
        assert parsed.error == "boom"
        assert parsed.terms == ()
        assert parsed.operators == ()

    @given(raw_query_strategy())
    def test_never_invalid(self, raw: str) -> None:
        assert parse_boolean_query(raw).is_valid


class TestExpressionParse:
    def test_implicit_and(self) -> None:
        parsed = parse_boolean_query("senior backend", expressions=True)
        assert parsed.expression == AndNode((TermNode("senior"), TermNode("backend")))

    def test_precedence_not_and_or(self) -> None:
        parsed = parse_boolean_query("a OR b AND NOT c", expressions=True)
        assert parsed.expression == OrNode((
            TermNode("a"),
            AndNode((TermNode("b"), NotNode(TermNode("c")))),
        ))

    def test_parentheses_override(self) -> None:
        parsed = parse_boolean_query("(a OR b) c", expressions=True)
        assert parsed.expression == AndNode((
            OrNode((TermNode("a"), TermNode("b"))),
            TermNode("c"),
        ))

    def test_double_negation(self) -> None:
        parsed = parse_boolean_query("NOT NOT a", expressions=True)
        assert parsed.expression == NotNode(NotNode(TermNode("a")))

    def test_single_term(self) -> None:
        assert parse_boolean_query("go", expressions=True).expression == TermNode("go")

    def test_empty_query(self) -> None:
        parsed = parse_boolean_query("   ", expressions=True)
        assert parsed.is_valid
        assert parsed.expression is None

    def test_terms_still_collected(self) -> None:
        parsed = parse_boolean_query("a OR b", expressions=True)
        assert parsed.terms == ("a", "b")
        assert parsed.operators == ("OR",)

    def test_positive_terms_exclude_negated(self) -> None:
        parsed = parse_boolean_query("python NOT java", expressions=True)
        assert parsed.positive_terms == ("python",)

    def test_positive_terms_double_negation(self) -> None:
        parsed = parse_boolean_query("NOT (NOT go)", expressions=True)
        assert parsed.positive_terms == ("go",)

    @pytest.mark.parametrize(
        "raw",
        ["(a OR b", "a OR", "AND a", "()", "a )", "NOT", "a OR OR b"],
    )
    def test_malformed_is_invalid(self, raw: str) -> None:
        parsed = parse_boolean_query(raw, expressions=True)
        assert not parsed.is_valid
        assert parsed.error
        assert parsed.terms == ()
        assert parsed.operators == ()
        assert parsed.expression is None

    def test_unbalanced_paren_raises_syntax_error(self) -> None:
        with pytest.raises(QuerySyntaxError) as info:
            parse_expression(tokenize("(a OR b"))
        assert info.value.position == 0

    @given(raw_query_strategy())
    def test_invalid_never_carries_terms(self, raw: str) -> None:
        parsed = parse_boolean_query(raw, expressions=True)
        if parsed.is_valid:
            assert parsed.error is None
        else:
            assert parsed.terms == () and parsed.operators == () and parsed.error


class TestParsedQueryToDict:
    def test_valid(self) -> None:
        assert parse_boolean_query("a OR b").to_dict() == {
            "terms": ["a", "b"],
            "operators": ["OR"],
            "isValid": True,
        }

    def test_invalid(self) -> None:
        assert ParsedQuery.invalid("bad").to_dict() == {
            "terms": [],
            "operators": [],
            "isValid": False,
            "error": "bad",
        }
