"""In-memory adapter – predicate evaluation over plain Python records."""
from ats_search.adapters.memory.evaluator import evaluate
from ats_search.adapters.memory.repository import InMemorySearchRepository

__all__ = ["InMemorySearchRepository", "evaluate"]
