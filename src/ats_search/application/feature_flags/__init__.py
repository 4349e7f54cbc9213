"""Application feature flags – ports and value objects."""
from ats_search.application.feature_flags.feature_flag import FeatureFlag
from ats_search.application.feature_flags.provider import FeatureFlagProvider
from ats_search.application.feature_flags.in_memory import InMemoryFeatureFlagProvider

__all__ = ["FeatureFlag", "FeatureFlagProvider", "InMemoryFeatureFlagProvider"]
