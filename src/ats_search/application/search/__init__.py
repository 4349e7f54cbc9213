"""Application search – query parsing, predicate building, execution and highlighting."""
from ats_search.application.search.builders import (
    CandidateQueryBuilder,
    JobQueryBuilder,
    QueryBuilder,
    builder_for,
)
from ats_search.application.search.fields import (
    CANDIDATE,
    DESCRIPTORS,
    JOB,
    EntityDescriptor,
    EntityKind,
    FieldKind,
    SearchField,
)
from ats_search.application.search.filters import (
    DateRange,
    SearchFilters,
    SlaStatus,
    clear_all_filters,
    count_active_filters,
)
from ats_search.application.search.highlight import highlight
from ats_search.application.search.params import search_query_from_params
from ats_search.application.search.parser import ParsedQuery, parse_boolean_query
from ats_search.application.search.ports import SearchRepository
from ats_search.application.search.query import SearchQuery
from ats_search.application.search.result import SearchResult
from ats_search.application.search.service import BOOLEAN_EXPRESSIONS_FLAG, SearchEngine
from ats_search.application.search.tokenizer import QueryToken, TokenKind, tokenize

__all__ = [
    "BOOLEAN_EXPRESSIONS_FLAG",
    "CANDIDATE",
    "DESCRIPTORS",
    "JOB",
    "CandidateQueryBuilder",
    "DateRange",
    "EntityDescriptor",
    "EntityKind",
    "FieldKind",
    "JobQueryBuilder",
    "ParsedQuery",
    "QueryBuilder",
    "QueryToken",
    "SearchEngine",
    "SearchField",
    "SearchFilters",
    "SearchQuery",
    "SearchRepository",
    "SearchResult",
    "SlaStatus",
    "TokenKind",
    "builder_for",
    "clear_all_filters",
    "count_active_filters",
    "highlight",
    "parse_boolean_query",
    "search_query_from_params",
    "tokenize",
]
