import logging
import math
from typing import Any, Iterable, List, Optional, Tuple

from .errors import MalformedPayload
from .feature_flags import get_flags
from .schema import MISSING, PropertyRecord


logger = logging.getLogger("dmv.features")

DEFAULT_TITLE = "Property"
NOT_AVAILABLE = "N/A"
DISPLAY_FIELDS = ("price", "bedrooms", "bathrooms")


def _is_blank(value: Any, keep_zero: bool) -> bool:
    # keep_zero=False reproduces the viewer's `value || "N/A"` behavior,
    # where 0, False and NaN are all treated as absent.
    if value is None or value is MISSING:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, float) and math.isnan(value):
        return True
    if keep_zero:
        return False
    return not value


def display_value(value: Any, default: str, keep_zero: bool = False) -> Any:
    if _is_blank(value, keep_zero):
        return default
    return value


def _coordinate(value: Any) -> Optional[float]:
    if value is None or value is MISSING or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def coordinates_for(record: PropertyRecord) -> Optional[Tuple[float, float]]:
    lon = _coordinate(record.longitude)
    lat = _coordinate(record.latitude)
    if lon is None or lat is None:
        return None
    if not (-180.0 <= lon <= 180.0 and -90.0 <= lat <= 90.0):
        return None
    return lon, lat


def project_record(
    record: PropertyRecord, keep_zero: bool = False
) -> Optional[dict]:
    coords = coordinates_for(record)
    if coords is None:
        return None
    properties = {"title": display_value(record.address, DEFAULT_TITLE, keep_zero)}
    for name in DISPLAY_FIELDS:
        properties[name] = display_value(getattr(record, name), NOT_AVAILABLE, keep_zero)
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [coords[0], coords[1]]},
        "properties": properties,
    }


def project(
    records: Iterable[PropertyRecord],
    keep_zero: Optional[bool] = None,
    strict: Optional[bool] = None,
) -> dict:
    """Build a GeoJSON FeatureCollection with one point per placeable record.

    Records without usable coordinates are skipped and counted in a warning,
    or raise `MalformedPayload` when `strict` is set.
    """
    flags = get_flags()
    if keep_zero is None:
        keep_zero = flags.keep_zero_values
    if strict is None:
        strict = flags.strict_coordinates

    output: List[dict] = []
    skipped = 0
    for idx, record in enumerate(records):
        feature = project_record(record, keep_zero=keep_zero)
        if feature is None:
            if strict:
                raise MalformedPayload(
                    f"record {idx} has no usable coordinates "
                    f"(latitude={record.latitude!r}, longitude={record.longitude!r})"
                )
            skipped += 1
            continue
        output.append(feature)
    if skipped:
        logger.warning("skipped %d records without usable coordinates", skipped)
    return {"type": "FeatureCollection", "features": output}
