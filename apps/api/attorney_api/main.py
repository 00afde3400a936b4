import logging

import httpx
from fastapi import FastAPI

from attorney_api.config import settings
from attorney_api.dependencies import USER_AGENT, build_pipeline
from attorney_api.routers import attorneys

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Attorney Finder API",
    version="0.1.0",
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url=None,
)

app.include_router(attorneys.router, prefix="/api/attorneys", tags=["attorneys"])


@app.on_event("startup")
async def _start_pipeline():
    app.state.http_client = httpx.AsyncClient(headers={"User-Agent": USER_AGENT})
    app.state.pipeline = build_pipeline(settings, app.state.http_client)
    app.state.pipeline.cache.start()

    google = "configured" if app.state.pipeline.google.enabled else "not configured (optional)"
    logger.info(
        f"[Attorneys] Overpass: {settings.OVERPASS_URL} | Google: {google} | "
        f"enrichment={'on' if settings.ENABLE_ATTORNEY_ENRICHMENT else 'off'} "
        f"caching={'on' if settings.ENABLE_ATTORNEY_CACHING else 'off'}"
    )


@app.on_event("shutdown")
async def _stop_pipeline():
    pipeline = getattr(app.state, "pipeline", None)
    if pipeline is not None:
        pipeline.cache.destroy()
    client = getattr(app.state, "http_client", None)
    if client is not None:
        await client.aclose()


@app.get("/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}
