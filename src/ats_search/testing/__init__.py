"""Testing support – fakes and generators for search tests."""
from ats_search.testing.fakes import FailingSearchRepository, FakeClock
from ats_search.testing.generators import (
    Builder,
    CandidateBuilder,
    JobBuilder,
    bare_word_strategy,
    quoted_phrase_strategy,
    raw_query_strategy,
)

__all__ = [
    "Builder",
    "CandidateBuilder",
    "FailingSearchRepository",
    "FakeClock",
    "JobBuilder",
    "bare_word_strategy",
    "quoted_phrase_strategy",
    "raw_query_strategy",
]
