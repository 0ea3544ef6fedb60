#!/usr/bin/env python3
"""Inspect output/aggregated_data.json in the current directory."""

from dmv_price_tracker.tools.inspect_payload import main


if __name__ == "__main__":
    raise SystemExit(main())
