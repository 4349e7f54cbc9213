"""Application feature flags – FeatureFlagProvider port."""
from __future__ import annotations

import abc
from typing import Any

from ats_search.application.feature_flags.feature_flag import FeatureFlag


class FeatureFlagProvider(abc.ABC):
    """Port: decide whether a search behaviour is on for a request.

    Flags are evaluated per organisation; the context carries the request's
    ``scope_id`` so a provider can roll a behaviour out to one tenant first.
    """

    @abc.abstractmethod
    async def is_enabled(self, flag: FeatureFlag, context: dict[str, Any] | None = None) -> bool: ...

    async def is_enabled_for_scope(self, flag: FeatureFlag, scope_id: str | None) -> bool:
        """Evaluate *flag* for one organisation (``None`` means no scope)."""
        return await self.is_enabled(flag, {"scope_id": scope_id} if scope_id is not None else None)


__all__ = ["FeatureFlagProvider"]
