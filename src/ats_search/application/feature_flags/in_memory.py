"""Application feature flags – InMemoryFeatureFlagProvider."""

from __future__ import annotations

from typing import Any

from ats_search.application.feature_flags.feature_flag import FeatureFlag
from ats_search.application.feature_flags.provider import FeatureFlagProvider


class InMemoryFeatureFlagProvider(FeatureFlagProvider):
    """Provider backed by a ``{key: bool}`` dict, with optional per-scope overrides.

    Scope overrides let a single organisation try a flag before it is rolled
    out everywhere::

        flags = InMemoryFeatureFlagProvider({"search.boolean_expressions": False})
        flags.set("search.boolean_expressions", True, scope_id="org-42")
    """

    def __init__(self, flags: dict[str, bool] | None = None) -> None:
        self._flags: dict[str, bool] = dict(flags or {})
        self._scoped: dict[tuple[str, str], bool] = {}

    def set(self, flag: FeatureFlag | str, enabled: bool, *, scope_id: str | None = None) -> None:
        """Enable or disable a flag globally, or for one scope only."""
        key = flag.key if isinstance(flag, FeatureFlag) else flag
        if scope_id is None:
            self._flags[key] = enabled
        else:
            self._scoped[(key, scope_id)] = enabled

    async def is_enabled(
        self, flag: FeatureFlag, context: dict[str, Any] | None = None
    ) -> bool:
        scope_id = (context or {}).get("scope_id")
        if scope_id is not None and (flag.key, scope_id) in self._scoped:
            return self._scoped[(flag.key, scope_id)]
        return self._flags.get(flag.key, flag.default_value)


__all__ = ["InMemoryFeatureFlagProvider"]
