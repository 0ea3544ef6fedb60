import pytest

from dmv_price_tracker.config import Settings
from dmv_price_tracker.errors import MISSING_TOKEN_MESSAGE, RenderingFault
from dmv_price_tracker.map_view import (
    CIRCLE_PAINT,
    render_error,
    render_instructions,
    render_map,
)


def _settings():
    return Settings.from_env(load_env_file=False)


def test_circle_paint_matches_viewer():
    assert CIRCLE_PAINT["circle-radius"] == 6
    assert CIRCLE_PAINT["circle-opacity"] == 0.6
    assert CIRCLE_PAINT["circle-stroke-color"] == "#fff"


def test_render_map_embeds_center_and_zoom():
    html = render_map({"type": "FeatureCollection", "features": []}, _settings(), "pk.x")
    assert "[-77.0369, 38.9072]" in html
    assert "zoom: 11.0" in html


def test_render_map_rejects_non_finite_values():
    collection = {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [-77.0, 38.9]},
                "properties": {"title": "x", "price": float("inf"), "bedrooms": "N/A", "bathrooms": "N/A"},
            }
        ],
    }
    with pytest.raises(RenderingFault):
        render_map(collection, _settings(), "pk.x")


def test_render_instructions_lists_steps():
    html = render_instructions(MISSING_TOKEN_MESSAGE)
    assert "<h2>Error: Please set your Mapbox token in .env file</h2>" in html
    assert html.count("<p>") == 3


def test_render_error_escapes_message():
    html = render_error("<script>alert(1)</script>")
    assert "<pre>Error: &lt;script&gt;" in html
