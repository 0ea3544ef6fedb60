"""One load cycle: init source -> fetch -> normalize -> project.

`render_page` wraps the cycle for the map page: configuration is checked
before any fetch, and any failure replaces the map with a plain-text error
page. There is no partial rendering.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from .config import Settings
from .errors import (
    MalformedPayload,
    MissingConfiguration,
    PipelineError,
    SourceError,
)
from .features import project
from .normalize import ColumnarPayload, expand, parse_payload
from .schema import PropertyRecord
from .sources.providers import RecordSource
from . import map_view


logger = logging.getLogger("dmv.pipeline")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class LoadResult:
    run_id: str
    source: str
    shape: str
    records: List[PropertyRecord]
    collection: dict
    started_at: str
    finished_at: str
    warnings: List[str] = field(default_factory=list)

    @property
    def records_count(self) -> int:
        return len(self.records)

    @property
    def features_count(self) -> int:
        return len(self.collection.get("features", []))

    @property
    def skipped_count(self) -> int:
        return self.records_count - self.features_count

    def to_dict(self) -> dict:
        return {
            "run_id": self.run_id,
            "source": self.source,
            "shape": self.shape,
            "records": self.records_count,
            "features": self.features_count,
            "skipped": self.skipped_count,
            "started_at": self.started_at,
            "finished_at": self.finished_at,
            "warnings": list(self.warnings),
        }


async def load_features(
    source: RecordSource,
    lines: bool = False,
    keep_zero: Optional[bool] = None,
    strict: Optional[bool] = None,
) -> LoadResult:
    started_at = _now()
    run_id = uuid4().hex
    try:
        await source.open()
        text = await source.fetch_text()
    finally:
        await source.close()
    logger.debug("fetched %d characters from %s", len(text), source.name)

    payload = parse_payload(text, lines=lines)
    records = expand(payload)
    collection = project(records, keep_zero=keep_zero, strict=strict)

    warnings = []
    if isinstance(payload, ColumnarPayload) and payload.is_ragged():
        warnings.append(f"mismatched column lengths: {payload.lengths()}")
    skipped = len(records) - len(collection["features"])
    if skipped:
        warnings.append(f"{skipped} records without usable coordinates")

    result = LoadResult(
        run_id=run_id,
        source=source.name,
        shape=payload.kind,
        records=records,
        collection=collection,
        started_at=started_at,
        finished_at=_now(),
        warnings=warnings,
    )
    logger.info(
        "loaded %d records (%d features) from %s",
        result.records_count,
        result.features_count,
        source.name,
    )
    return result


@dataclass
class PageResult:
    status_code: int
    html: str
    result: Optional[LoadResult] = None


def _status_for(error: PipelineError) -> int:
    if isinstance(error, MalformedPayload):
        return 422
    if isinstance(error, SourceError):
        return 502
    return 500


async def render_page(settings: Settings, source: RecordSource) -> PageResult:
    try:
        token = settings.require_access_token()
    except MissingConfiguration as e:
        logger.warning("map not initialized: %s is not configured", e.setting)
        return PageResult(status_code=503, html=map_view.render_instructions(str(e)))

    try:
        result = await load_features(source, lines=settings.payload_lines)
        html = map_view.render_map(result.collection, settings, token)
    except PipelineError as e:
        logger.error("error loading or rendering map: %s", e, exc_info=True)
        return PageResult(status_code=_status_for(e), html=map_view.render_error(str(e)))
    except Exception as e:
        logger.exception("unexpected failure while rendering map")
        return PageResult(status_code=500, html=map_view.render_error(str(e)))
    return PageResult(status_code=200, html=html, result=result)
