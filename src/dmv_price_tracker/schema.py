from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping


class _Missing:
    """Marker for a field the source payload did not provide at all."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Missing, ())


MISSING: Any = _Missing()

RECORD_FIELDS = (
    "latitude",
    "longitude",
    "address",
    "price",
    "bedrooms",
    "bathrooms",
)


def is_missing(value: Any) -> bool:
    return value is MISSING


@dataclass(frozen=True)
class PropertyRecord:
    # location
    latitude: Any = MISSING
    longitude: Any = MISSING

    # listing
    address: Any = MISSING
    price: Any = MISSING
    bedrooms: Any = MISSING
    bathrooms: Any = MISSING

    # any other source columns (id, zip_code, status, ...)
    extras: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PropertyRecord":
        known = {name: data[name] for name in RECORD_FIELDS if name in data}
        extras = {k: v for k, v in data.items() if k not in RECORD_FIELDS}
        return cls(extras=extras, **known)

    def get(self, name: str, default: Any = None) -> Any:
        if name in RECORD_FIELDS:
            value = getattr(self, name)
        else:
            value = self.extras.get(name, MISSING)
        return default if value is MISSING else value

    def missing_fields(self) -> list:
        return [name for name in RECORD_FIELDS if getattr(self, name) is MISSING]

    def to_dict(self) -> dict:
        """Return the record as the source would have written it.

        Missing fields are left out; explicit nulls are kept.
        """
        out = {
            name: getattr(self, name)
            for name in RECORD_FIELDS
            if getattr(self, name) is not MISSING
        }
        out.update(self.extras)
        return out
