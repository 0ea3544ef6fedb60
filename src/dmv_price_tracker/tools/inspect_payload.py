"""Print what an aggregated payload file looks like on disk.

Used to check which layout the analytics pipeline wrote before pointing
the map at it. Failures are printed, never raised, and the exit code stays 0.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Optional, Union

from dmv_price_tracker.config import DEFAULT_DATA_PATH


PREVIEW_CHARS = 500


def inspect_payload(
    path: Union[str, Path],
    emit: Callable[[str], None] = print,
) -> Optional[object]:
    path = Path(path)
    try:
        raw = path.read_bytes()
        text = raw.decode("utf-8")
        emit(f"File size: {len(raw)}")
        emit(f"\nFirst {PREVIEW_CHARS} characters:")
        emit(text[:PREVIEW_CHARS])

        value = json.loads(text)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        emit(f"Error: {e}")
        return None

    emit(f"\nParsed JSON - type: {type(value).__name__}")
    if isinstance(value, list):
        emit(f"It's an array with {len(value)} items")
        if value:
            emit("\nFirst item: " + json.dumps(value[0], indent=2))
    elif isinstance(value, dict):
        emit("It's an object")
        emit(f"Keys: {list(value.keys())}")
        data = value.get("data")
        if isinstance(data, list):
            emit(f"It has a data array with {len(data)} items")
            if data:
                emit("\nFirst data item: " + json.dumps(data[0], indent=2))
    return value


def main() -> int:
    inspect_payload(Path.cwd() / DEFAULT_DATA_PATH)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
