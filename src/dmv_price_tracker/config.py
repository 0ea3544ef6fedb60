from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

from dotenv import find_dotenv, load_dotenv

from .errors import MissingConfiguration


TOKEN_ENV = "MAPBOX_ACCESS_TOKEN"
TOKEN_PLACEHOLDER = "YOUR_MAPBOX_ACCESS_TOKEN_HERE"

DEFAULT_DATA_PATH = "output/aggregated_data.json"
DEFAULT_MAP_STYLE = "mapbox://styles/mapbox/dark-v11"
# DC
DEFAULT_MAP_CENTER = (-77.0369, 38.9072)
DEFAULT_MAP_ZOOM = 11.0


def _env_str(name: str) -> Optional[str]:
    raw = os.getenv(name)
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None


def _env_float(name: str, default: float) -> float:
    raw = _env_str(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_center(name: str, default: Tuple[float, float]) -> Tuple[float, float]:
    raw = _env_str(name)
    if raw is None:
        return default
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 2:
        return default
    try:
        return float(parts[0]), float(parts[1])
    except ValueError:
        return default


def _env_bool(name: str) -> bool:
    raw = _env_str(name)
    return bool(raw) and raw.lower() in {"1", "true", "t", "yes", "y", "on"}


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, read once from the environment.

    A `.env` file in the working directory is loaded first; real
    environment variables win over it.
    """

    access_token: Optional[str]
    data_path: str
    data_url: Optional[str]
    payload_lines: bool
    map_style: str
    map_center: Tuple[float, float]
    map_zoom: float

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        if load_env_file:
            load_dotenv(find_dotenv(usecwd=True), override=False)
        return cls(
            access_token=_env_str(TOKEN_ENV),
            data_path=_env_str("DMV_DATA_PATH") or DEFAULT_DATA_PATH,
            data_url=_env_str("DMV_DATA_URL"),
            payload_lines=_env_bool("DMV_PAYLOAD_LINES"),
            map_style=_env_str("DMV_MAP_STYLE") or DEFAULT_MAP_STYLE,
            map_center=_env_center("DMV_MAP_CENTER", DEFAULT_MAP_CENTER),
            map_zoom=_env_float("DMV_MAP_ZOOM", DEFAULT_MAP_ZOOM),
        )

    def has_access_token(self) -> bool:
        return bool(self.access_token) and self.access_token != TOKEN_PLACEHOLDER

    def require_access_token(self) -> str:
        token = self.access_token
        if token is None or not self.has_access_token():
            raise MissingConfiguration(TOKEN_ENV)
        return token


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def reset_settings_cache() -> None:
    """Test helper to force env re-read."""

    get_settings.cache_clear()
