from __future__ import annotations

from typing import Any, List, Literal

from pydantic import BaseModel, Field


class PointGeometry(BaseModel):
    type: Literal["Point"] = "Point"
    coordinates: List[float] = Field(min_length=2, max_length=2)


class FeatureProperties(BaseModel):
    title: Any = "Property"
    price: Any = "N/A"
    bedrooms: Any = "N/A"
    bathrooms: Any = "N/A"


class Feature(BaseModel):
    type: Literal["Feature"] = "Feature"
    geometry: PointGeometry
    properties: FeatureProperties


class FeatureCollection(BaseModel):
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: List[Feature] = Field(default_factory=list)


class LoadSummary(BaseModel):
    run_id: str
    source: str
    shape: str
    records: int
    features: int
    skipped: int
    started_at: str
    finished_at: str
    warnings: List[str] = Field(default_factory=list)
