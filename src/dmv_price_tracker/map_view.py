from typing import Dict

from jinja2 import Environment, PackageLoader, TemplateError, select_autoescape

from .config import Settings
from .errors import RenderingFault


LAYER_ID = "property-points"
SOURCE_ID = "properties"

# Paint for one circle per property.
CIRCLE_PAINT: Dict[str, object] = {
    "circle-radius": 6,
    "circle-color": "#ff6b6b",
    "circle-opacity": 0.6,
    "circle-stroke-width": 2,
    "circle-stroke-color": "#fff",
}

_env = Environment(
    loader=PackageLoader("dmv_price_tracker", "templates"),
    autoescape=select_autoescape(["html"]),
)
# NaN/Infinity are not valid JSON; fail the render instead of shipping them.
_env.policies["json.dumps_kwargs"] = {"sort_keys": True, "allow_nan": False}


def _render(template: str, **context) -> str:
    try:
        return _env.get_template(template).render(**context)
    except (TemplateError, TypeError, ValueError) as e:
        raise RenderingFault(f"rendering {template} failed: {e}") from e


def render_map(collection: dict, settings: Settings, token: str) -> str:
    lon, lat = settings.map_center
    return _render(
        "map.html",
        access_token=token,
        map_style=settings.map_style,
        center=[lon, lat],
        zoom=settings.map_zoom,
        collection=collection,
        layer_id=LAYER_ID,
        source_id=SOURCE_ID,
        paint=CIRCLE_PAINT,
    )


def render_instructions(message: str) -> str:
    lines = [line for line in message.splitlines() if line.strip()]
    heading = lines[0] if lines else message
    return _render("message.html", heading=heading, steps=lines[1:], error=None)


def render_error(message: str) -> str:
    return _render("message.html", heading=None, steps=[], error=f"Error: {message}")
