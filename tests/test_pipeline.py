import asyncio

import pytest

from dmv_price_tracker.config import Settings
from dmv_price_tracker.errors import MalformedPayload, SourceError
from dmv_price_tracker.pipeline import load_features, render_page
from dmv_price_tracker.sources.file_source import FileRecordSource


class _StaticSource:
    name = "static"

    def __init__(self, text):
        self.text = text
        self.events = []

    async def open(self):
        self.events.append("open")

    async def fetch_text(self):
        self.events.append("fetch")
        return self.text

    async def close(self):
        self.events.append("close")


def test_load_cycle_runs_in_order():
    source = _StaticSource('[{"latitude": 38.9, "longitude": -77.0}, {"address": "no coords"}]')

    result = asyncio.run(load_features(source))

    assert source.events == ["open", "fetch", "close"]
    assert result.shape == "rows"
    assert result.records_count == 2
    assert result.features_count == 1
    assert result.skipped_count == 1
    assert result.warnings == ["1 records without usable coordinates"]
    summary = result.to_dict()
    assert summary["source"] == "static"
    assert summary["features"] == 1


def test_load_cycle_propagates_malformed_payload():
    with pytest.raises(MalformedPayload):
        asyncio.run(load_features(_StaticSource("{oops")))


def test_load_cycle_strict_coordinates():
    source = _StaticSource('[{"address": "no coords"}]')
    with pytest.raises(MalformedPayload):
        asyncio.run(load_features(source, strict=True))


def test_load_cycle_from_file(fixtures_dir):
    result = asyncio.run(load_features(FileRecordSource(fixtures_dir / "columnar_payload.json")))
    assert result.shape == "columnar"
    assert result.features_count == 3


def test_load_cycle_missing_file(tmp_path):
    with pytest.raises(SourceError):
        asyncio.run(load_features(FileRecordSource(tmp_path / "x.json")))


def test_render_page_checks_token_before_fetching():
    settings = Settings.from_env(load_env_file=False)
    source = _StaticSource("[]")

    page = asyncio.run(render_page(settings, source))

    assert page.status_code == 503
    assert source.events == []
    assert page.result is None


def test_render_page_success(monkeypatch):
    monkeypatch.setenv("MAPBOX_ACCESS_TOKEN", "pk.test-token")
    settings = Settings.from_env(load_env_file=False)

    page = asyncio.run(render_page(settings, _StaticSource('{"latitude": 38.9, "longitude": -77.0}')))

    assert page.status_code == 200
    assert page.result.shape == "single"
    assert "new mapboxgl.Map" in page.html


def test_render_page_logs_failure(monkeypatch, caplog):
    monkeypatch.setenv("MAPBOX_ACCESS_TOKEN", "pk.test-token")
    settings = Settings.from_env(load_env_file=False)

    page = asyncio.run(render_page(settings, _StaticSource("[1, 2]")))

    assert page.status_code == 422
    assert "<pre>Error: record 0 is int, expected object</pre>" in page.html
    assert "error loading or rendering map" in caplog.text


def test_load_cycle_closes_source_when_fetch_fails():
    class _BrokenSource(_StaticSource):
        async def fetch_text(self):
            self.events.append("fetch")
            raise SourceError("connection reset")

    source = _BrokenSource("")
    with pytest.raises(SourceError):
        asyncio.run(load_features(source))
    assert source.events == ["open", "fetch", "close"]
