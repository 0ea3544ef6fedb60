"""Turn a raw analytics payload into a list of `PropertyRecord`.

The upstream pipeline has written its output in more than one layout over
time, so the payload shape is detected first (`parse_payload`) and each
shape has its own expansion into rows:

- rows:     ``[{"latitude": ..., ...}, ...]``
- columnar: ``{"columns": {"latitude": [...], "longitude": [...]}}``
- single:   ``{"latitude": ..., ...}``
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union

from .errors import MalformedPayload
from .schema import PropertyRecord


logger = logging.getLogger("dmv.normalize")

COLUMNS_KEY = "columns"


@dataclass(frozen=True)
class RowsPayload:
    rows: List[Mapping[str, Any]]
    kind: str = "rows"


@dataclass(frozen=True)
class ColumnarPayload:
    columns: Dict[str, List[Any]]
    kind: str = "columnar"

    def lengths(self) -> Dict[str, int]:
        return {name: len(values) for name, values in sorted(self.columns.items())}

    def row_count(self) -> int:
        if not self.columns:
            return 0
        return min(self.lengths().values())

    def is_ragged(self) -> bool:
        return len(set(self.lengths().values())) > 1


@dataclass(frozen=True)
class SingleRecordPayload:
    record: Mapping[str, Any]
    kind: str = "single"


ParsedPayload = Union[RowsPayload, ColumnarPayload, SingleRecordPayload]


def _reject_constant(name: str) -> Any:
    raise MalformedPayload(f"payload is not valid JSON: {name}")


def decode_json(raw: Union[str, bytes, bytearray]) -> Any:
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedPayload(f"payload is not UTF-8: {e}") from e
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise MalformedPayload(f"payload is not valid JSON: {e}") from e


def decode_json_lines(raw: Union[str, bytes, bytearray]) -> List[Any]:
    """Decode newline-delimited JSON, one record object per line."""
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedPayload(f"payload is not UTF-8: {e}") from e
    rows = []
    for lineno, line in enumerate(raw.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            rows.append(json.loads(line, parse_constant=_reject_constant))
        except (json.JSONDecodeError, MalformedPayload) as e:
            raise MalformedPayload(f"line {lineno} is not valid JSON: {e}") from e
    return rows


def _columnar_columns(value: Any) -> Optional[Dict[str, List[Any]]]:
    if not isinstance(value, dict) or COLUMNS_KEY not in value:
        return None
    columns = value[COLUMNS_KEY]
    if not isinstance(columns, dict):
        return None
    if not all(isinstance(v, list) for v in columns.values()):
        return None
    return {str(k): v for k, v in columns.items()}


def parse_payload(raw: Any, *, lines: bool = False) -> ParsedPayload:
    """Detect the payload shape.

    `raw` may be JSON text or an already-decoded value. Columnar is tried
    first, then rows, then a single bare record.
    """
    if isinstance(raw, (str, bytes, bytearray)):
        value = decode_json_lines(raw) if lines else decode_json(raw)
    else:
        value = raw

    columns = _columnar_columns(value)
    if columns is not None:
        return ColumnarPayload(columns=columns)

    if isinstance(value, list):
        for idx, item in enumerate(value):
            if not isinstance(item, dict):
                raise MalformedPayload(
                    f"record {idx} is {type(item).__name__}, expected object"
                )
        return RowsPayload(rows=value)

    if isinstance(value, dict):
        return SingleRecordPayload(record=value)

    raise MalformedPayload(
        f"payload is {type(value).__name__}, expected array or object"
    )


def _expand_columns(payload: ColumnarPayload) -> List[Dict[str, Any]]:
    length = payload.row_count()
    if payload.is_ragged():
        logger.warning(
            "columnar payload has mismatched column lengths %s; truncating to %d rows",
            payload.lengths(),
            length,
        )
    rows = []
    for i in range(length):
        rows.append({name: values[i] for name, values in payload.columns.items()})
    return rows


def expand(payload: ParsedPayload) -> List[PropertyRecord]:
    if isinstance(payload, ColumnarPayload):
        rows = _expand_columns(payload)
    elif isinstance(payload, RowsPayload):
        rows = payload.rows
    else:
        rows = [payload.record]
    return [PropertyRecord.from_mapping(row) for row in rows]


def normalize(raw: Any, *, lines: bool = False) -> List[PropertyRecord]:
    payload = parse_payload(raw, lines=lines)
    records = expand(payload)
    logger.debug("normalized %s payload into %d records", payload.kind, len(records))
    return records
