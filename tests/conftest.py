import os
import socket
import sys
import urllib.request
from pathlib import Path

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
SRC = REPO_ROOT / "src"
FIXTURES = Path(__file__).resolve().parent / "fixtures"

# Prefer repo sources over any installed package.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def block_network(monkeypatch):
    if os.getenv("LIVE") == "1":
        return

    real_connect = socket.socket.connect

    def guarded_connect(sock, address):
        host = address[0]
        if host not in ("127.0.0.1", "localhost"):
            raise RuntimeError("Network access blocked in tests")
        return real_connect(sock, address)

    monkeypatch.setattr(socket.socket, "connect", guarded_connect)
    monkeypatch.setattr(
        urllib.request,
        "urlopen",
        lambda *args, **kwargs: (_ for _ in ()).throw(
            RuntimeError("Network access blocked in tests")
        ),
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    from dmv_price_tracker.config import reset_settings_cache
    from dmv_price_tracker.feature_flags import reset_flags_cache

    for name in (
        "MAPBOX_ACCESS_TOKEN",
        "DMV_DATA_PATH",
        "DMV_DATA_URL",
        "DMV_PAYLOAD_LINES",
        "DMV_MAP_STYLE",
        "DMV_MAP_CENTER",
        "DMV_MAP_ZOOM",
        "DMV_FEATURE_KEEP_ZERO_VALUES",
        "DMV_FEATURE_STRICT_COORDINATES",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    reset_flags_cache()
    yield
    reset_settings_cache()
    reset_flags_cache()


@pytest.fixture
def fixtures_dir():
    return FIXTURES
