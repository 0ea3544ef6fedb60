"""Package initializer for `dmv_price_tracker`."""

from .errors import MalformedPayload, MissingConfiguration, RenderingFault
from .features import project
from .normalize import normalize
from .schema import MISSING, PropertyRecord

__all__ = [
    "MISSING",
    "MalformedPayload",
    "MissingConfiguration",
    "PropertyRecord",
    "RenderingFault",
    "normalize",
    "project",
]
