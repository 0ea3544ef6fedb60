import logging

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse

from dmv_price_tracker.api.schemas import FeatureCollection, LoadSummary
from dmv_price_tracker.config import get_settings
from dmv_price_tracker.errors import MalformedPayload, PipelineError, SourceError
from dmv_price_tracker.pipeline import LoadResult, load_features, render_page
from dmv_price_tracker.sources.registry import get_source


logger = logging.getLogger("dmv.api")


def health():
    return {"status": "ok"}


async def _load() -> LoadResult:
    settings = get_settings()
    source = get_source(settings)
    try:
        return await load_features(source, lines=settings.payload_lines)
    except MalformedPayload as e:
        logger.warning("malformed payload from %s: %s", source.name, e)
        raise HTTPException(status_code=422, detail=str(e))
    except SourceError as e:
        logger.warning("source %s unavailable: %s", source.name, e)
        raise HTTPException(status_code=502, detail=str(e))
    except PipelineError as e:
        logger.error("load failed for %s: %s", source.name, e)
        raise HTTPException(status_code=500, detail=str(e))


app = FastAPI(title="DC/NoVA property map")


if app:

    @app.get("/health")
    def health_route():
        return health()

    @app.get("/api/properties", response_model=FeatureCollection)
    async def properties():
        result = await _load()
        return result.collection

    @app.get("/api/properties/summary", response_model=LoadSummary)
    async def properties_summary():
        result = await _load()
        return result.to_dict()

    @app.get("/", response_class=HTMLResponse)
    async def root():
        settings = get_settings()
        page = await render_page(settings, get_source(settings))
        return HTMLResponse(
            page.html,
            status_code=page.status_code,
            headers={"Cache-Control": "no-store"},
        )
