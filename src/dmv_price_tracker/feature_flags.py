from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = str(raw).strip().lower()
    if v in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if v in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


@dataclass(frozen=True)
class FeatureFlags:
    """Central feature flag registry.

    Defaults MUST preserve current viewer behavior: a price, bedroom or
    bathroom count of 0 shows as "N/A", and records that cannot be placed
    on the map are skipped rather than failing the whole load.
    """

    keep_zero_values: bool
    strict_coordinates: bool

    @classmethod
    def from_env(cls) -> "FeatureFlags":
        return cls(
            keep_zero_values=_env_bool("DMV_FEATURE_KEEP_ZERO_VALUES", False),
            strict_coordinates=_env_bool("DMV_FEATURE_STRICT_COORDINATES", False),
        )


@lru_cache(maxsize=1)
def get_flags() -> FeatureFlags:
    return FeatureFlags.from_env()


def reset_flags_cache() -> None:
    """Test helper to force env re-read."""

    get_flags.cache_clear()
