"""
Attorneys Router
GET /api/attorneys: civil-rights attorneys near a coordinate.

Contract: malformed coordinates are the only client-visible error (400).
Anything that goes wrong inside the pipeline still answers 200, with an
empty list at worst.
"""
import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse

from attorney_api.config import settings
from attorney_api.dependencies import get_pipeline
from attorney_api.services.pipeline import AttorneyPipeline

logger = logging.getLogger(__name__)

router = APIRouter()

ORIGIN_HEADER = {"Access-Control-Allow-Origin": settings.CORS_ALLOW_ORIGIN}
CORS_HEADERS = {
    **ORIGIN_HEADER,
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


def _json(content: dict, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers=ORIGIN_HEADER)


def _error(message: str, status_code: int = 400) -> JSONResponse:
    return _json({"error": message}, status_code)


def _parse_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        parsed = float(value)
    except ValueError:
        return None
    return parsed if math.isfinite(parsed) else None


@router.options("")
async def attorneys_preflight():
    return Response(status_code=204, headers=CORS_HEADERS)


@router.get("")
async def search_attorneys(
    lat: Optional[str] = Query(None),
    lng: Optional[str] = Query(None),
    radius: Optional[str] = Query(None),
    pipeline: AttorneyPipeline = Depends(get_pipeline),
):
    """Find civil-rights attorneys within `radius` km (default 50) of lat/lng."""
    if not lat or not lng:
        return _error("Latitude and longitude are required")

    lat_f = _parse_float(lat)
    lng_f = _parse_float(lng)
    if lat_f is None or lng_f is None:
        return _error("Latitude and longitude must be valid numbers")
    if not (-90 <= lat_f <= 90 and -180 <= lng_f <= 180):
        return _error("Latitude must be within ±90 and longitude within ±180")

    radius_f = _parse_float(radius) if radius else None
    if radius_f is None or radius_f <= 0:
        if radius:
            logger.warning(f"[Attorneys] invalid radius {radius!r}, using default")
        radius_f = settings.DEFAULT_SEARCH_RADIUS_KM

    try:
        attorneys = await pipeline.process(lat_f, lng_f, radius_f)
        payload = [a.to_json() for a in attorneys]
    except Exception as e:
        logger.exception(f"[Attorneys] Unexpected error: {e}")
        payload = []

    return _json({"attorneys": payload})


@router.get("/stats")
async def attorney_pipeline_stats(pipeline: AttorneyPipeline = Depends(get_pipeline)):
    """Cache occupancy and pipeline configuration."""
    return _json({**pipeline.stats(), "cache_healthy": pipeline.cache.is_healthy()})


@router.post("/cache/clear")
async def clear_attorney_cache(pipeline: AttorneyPipeline = Depends(get_pipeline)):
    """Drop every cached result so the next search re-fetches."""
    count = pipeline.clear_cache()
    logger.info(f"[Cache] Cleared {count} cached attorney result(s)")
    return _json({"cleared": count})
