"""SQLAlchemy adapter – ORM models, predicate compiler and search repository."""
from ats_search.adapters.sqlalchemy.compiler import PredicateCompiler, escape_like
from ats_search.adapters.sqlalchemy.models import (
    Base,
    CandidateModel,
    JobCandidateModel,
    JobModel,
    PipelineStageModel,
)
from ats_search.adapters.sqlalchemy.repository import (
    DEFAULT_MODELS,
    SqlAlchemySearchRepository,
    default_load_options,
)
from ats_search.adapters.sqlalchemy.session import SqlAlchemySessionFactory

__all__ = [
    "Base",
    "CandidateModel",
    "DEFAULT_MODELS",
    "JobCandidateModel",
    "JobModel",
    "PipelineStageModel",
    "PredicateCompiler",
    "SqlAlchemySearchRepository",
    "SqlAlchemySessionFactory",
    "default_load_options",
    "escape_like",
]
