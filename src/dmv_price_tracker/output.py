from pathlib import Path
from typing import Optional, Union

OUTPUT_SUFFIXES = (".json", ".geojson")


def check_output_path(
    path_str: str,
    payload_path: Optional[Union[str, Path]] = None,
) -> Path:
    """Resolve the `--output` target for a FeatureCollection.

    The target must be a .json/.geojson file and must not be the payload
    the features were loaded from.
    """
    if not path_str:
        raise ValueError("output path required")
    path = Path(path_str).expanduser()
    if path.suffix.lower() not in OUTPUT_SUFFIXES:
        raise ValueError(
            f"output must be a {' or '.join(OUTPUT_SUFFIXES)} file, got {path.name!r}"
        )
    resolved = path.resolve()
    if resolved.is_dir():
        raise ValueError(f"output {resolved} is a directory")
    if payload_path is not None and resolved == Path(payload_path).expanduser().resolve():
        raise ValueError(f"refusing to overwrite the input payload {resolved}")
    return resolved
