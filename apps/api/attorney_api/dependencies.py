import random

import httpx
from fastapi import Request

from attorney_api.config import Settings
from attorney_api.services.attorney_cache import AttorneyCache
from attorney_api.services.google_search import GoogleSearchClient
from attorney_api.services.overpass_client import OverpassClient
from attorney_api.services.pipeline import AttorneyPipeline, PipelineConfig

USER_AGENT = "AttorneyFinder/1.0 (civil-rights-attorney-search)"


def build_pipeline(settings: Settings, client: httpx.AsyncClient) -> AttorneyPipeline:
    """Wire the cache, sources and pipeline from settings. Caller owns `client`."""
    rng = random.Random(settings.MOCK_RANDOM_SEED)
    cache = AttorneyCache(
        default_ttl=settings.ATTORNEY_CACHE_TTL,
        max_size=settings.ATTORNEY_CACHE_MAX_SIZE,
        cleanup_interval=settings.ATTORNEY_CACHE_CLEANUP_INTERVAL,
        precision=settings.CACHE_COORD_PRECISION,
    )
    overpass = OverpassClient(
        client,
        endpoint=settings.OVERPASS_URL,
        timeout_s=settings.OVERPASS_TIMEOUT_SECONDS,
        rng=rng,
    )
    google = GoogleSearchClient(
        client,
        api_key=settings.GOOGLE_SEARCH_API_KEY,
        cse_id=settings.GOOGLE_CSE_ID,
        timeout_s=settings.GOOGLE_TIMEOUT_SECONDS,
        rng=rng,
    )
    config = PipelineConfig(
        enable_enrichment=settings.ENABLE_ATTORNEY_ENRICHMENT,
        enable_caching=settings.ENABLE_ATTORNEY_CACHING,
        fallback_to_mock=settings.FALLBACK_TO_MOCK,
        cache_ttl=settings.ATTORNEY_CACHE_TTL,
        max_results=settings.MAX_RESULTS,
        duplicate_threshold=settings.DUPLICATE_NAME_THRESHOLD,
    )
    return AttorneyPipeline(cache, overpass, google=google, config=config, rng=rng)


def get_pipeline(request: Request) -> AttorneyPipeline:
    return request.app.state.pipeline
