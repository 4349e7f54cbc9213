"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError            (domain.py)
    │   ├── ValidationError
    │   └── QuerySyntaxError
    ├── ApplicationError       (application.py)
    │   └── ConfigError        (ats_search.config.errors)
    └── InfrastructureError    (infrastructure.py)
        └── UnsupportedPredicateError
"""

from ats_search.kernel.errors.application import ApplicationError
from ats_search.kernel.errors.base import BaseError
from ats_search.kernel.errors.domain import DomainError, QuerySyntaxError, ValidationError
from ats_search.kernel.errors.infrastructure import InfrastructureError, UnsupportedPredicateError

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "InfrastructureError",
    "QuerySyntaxError",
    "UnsupportedPredicateError",
    "ValidationError",
]
