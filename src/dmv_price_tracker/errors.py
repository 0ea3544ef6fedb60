from __future__ import annotations

from typing import Optional


class PipelineError(Exception):
    """Base class for failures inside a load cycle."""


class MalformedPayload(PipelineError, ValueError):
    pass


class SourceError(PipelineError, OSError):
    pass


class RenderingFault(PipelineError, RuntimeError):
    pass


MISSING_TOKEN_MESSAGE = (
    "Error: Please set your Mapbox token in .env file\n"
    "1. Copy .env.example to .env\n"
    "2. Add your Mapbox token to .env as MAPBOX_ACCESS_TOKEN\n"
    "3. Restart the server so the new token is picked up"
)


class MissingConfiguration(PipelineError, RuntimeError):
    """Raised when a required credential is absent or still the placeholder."""

    def __init__(self, setting: str, message: Optional[str] = None):
        self.setting = setting
        super().__init__(message or MISSING_TOKEN_MESSAGE)
