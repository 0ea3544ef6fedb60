import argparse
import asyncio
import json
import logging

from .config import get_settings
from .output import check_output_path
from .pipeline import load_features
from .sources.file_source import FileRecordSource
from .sources.http_source import HttpRecordSource


def main():
    parser = argparse.ArgumentParser(
        description="DC/NoVA property map: normalize a payload or serve the map",
    )

    parser.add_argument(
        "--input",
        default=None,
        help="Payload file to load (default: DMV_DATA_PATH or output/aggregated_data.json)",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Fetch the payload over HTTP instead of reading a file",
    )
    parser.add_argument(
        "--lines",
        action="store_true",
        help="Payload is newline-delimited JSON (one record per line)",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Write the GeoJSON FeatureCollection to a file (path)",
    )
    parser.add_argument(
        "--keep-zero",
        dest="keep_zero",
        action="store_true",
        default=None,
        help="Show 0 prices and room counts instead of N/A",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail on records without usable coordinates instead of skipping them",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print only the load summary, not the features",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, etc.)",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Emit one JSON log line summarizing the load",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Serve the map and API with uvicorn",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Bind host for --serve")
    parser.add_argument("--port", type=int, default=8000, help="Bind port for --serve")

    args = parser.parse_args()

    if args.log_level:
        logging.basicConfig(level=args.log_level.upper())

    if args.serve:
        import uvicorn

        uvicorn.run(
            "dmv_price_tracker.api.app:app",
            host=args.host,
            port=args.port,
            log_level=(args.log_level or "info").lower(),
        )
        return

    if args.input and args.url:
        parser.error("--input and --url are mutually exclusive")

    settings = get_settings()
    if args.url:
        source = HttpRecordSource(args.url)
    elif args.input:
        source = FileRecordSource(args.input)
    elif settings.data_url:
        source = HttpRecordSource(settings.data_url)
    else:
        source = FileRecordSource(settings.data_path)

    output_path = None
    if args.output:
        payload_path = source.path if isinstance(source, FileRecordSource) else None
        output_path = check_output_path(args.output, payload_path=payload_path)

    result = asyncio.run(
        load_features(
            source,
            lines=args.lines or settings.payload_lines,
            keep_zero=args.keep_zero,
            strict=args.strict,
        )
    )

    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(
            json.dumps(result.collection, allow_nan=False), encoding="utf-8"
        )
    elif not args.summary:
        print(json.dumps(result.collection, allow_nan=False))

    if args.summary or args.output:
        print(
            f"Loaded {result.records_count} records from {result.source} "
            f"({result.shape}): {result.features_count} features, "
            f"{result.skipped_count} skipped"
        )
    if args.log_json:
        print(json.dumps(result.to_dict()))


def _safe_main():
    try:
        main()
    except SystemExit:
        raise
    except Exception as exc:
        print(json.dumps({"error": str(exc)}))
        raise SystemExit(1)


if __name__ == "__main__":
    _safe_main()
