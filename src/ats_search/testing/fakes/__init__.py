"""Testing fakes – deterministic clock and failing storage."""
from ats_search.testing.fakes.clock import FakeClock
from ats_search.testing.fakes.repository import FailingSearchRepository

__all__ = ["FailingSearchRepository", "FakeClock"]
