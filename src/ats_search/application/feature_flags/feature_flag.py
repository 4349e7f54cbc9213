"""Application feature flags – FeatureFlag value object."""
from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True)
class FeatureFlag:
    """A named switch over search behaviour.

    ``key`` is dotted by area (``search.boolean_expressions``); ``default_value``
    applies when a provider has no setting for the key or the request's scope.
    """

    key: str
    description: str = ""
    default_value: bool = False


__all__ = ["FeatureFlag"]
