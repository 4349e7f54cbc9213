"""Testing generators – row builders and Hypothesis strategies."""
from ats_search.testing.generators.builder import Builder, CandidateBuilder, JobBuilder
from ats_search.testing.generators.strategies import (
    bare_word_strategy,
    quoted_phrase_strategy,
    raw_query_strategy,
)

__all__ = [
    "Builder",
    "CandidateBuilder",
    "JobBuilder",
    "bare_word_strategy",
    "quoted_phrase_strategy",
    "raw_query_strategy",
]
