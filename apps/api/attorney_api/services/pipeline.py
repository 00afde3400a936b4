"""
Attorney Enrichment Pipeline
The single entry point behind GET /api/attorneys.

  1. Cache lookup (quantized lat/lng/radius)
  2. Live fetch: Overpass, plus Google Custom Search when configured, in parallel
  3. Nothing found → fallback mock attorneys
  4. Classify (dropping excluded practices) or, with enrichment off, wrap with
     bare defaults; then remove near-duplicates
  5. Sort: verified, featured, rating, cases (all descending), cap, and mark
     exactly the top N as featured
  6. Cache the finished list and return it

Any exception from steps 2–5 is caught here. With fallback_to_mock on (the
default) callers get the mock list instead of an error.
"""
from __future__ import annotations

import asyncio
import dataclasses
import logging
import random
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from attorney_api.schemas.attorney import GENERAL_PRACTICE, AttorneyRecord, SocialMedia
from attorney_api.services.attorney_cache import AttorneyCache
from attorney_api.services.classifier import civil_rights_profile, classify
from attorney_api.services.dedup import dedupe_attorneys
from attorney_api.services.google_search import GoogleSearchClient
from attorney_api.services.mock_attorneys import generate_mock_attorneys
from attorney_api.services.overpass_client import OverpassClient

logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    enable_enrichment: bool = True
    enable_caching: bool = True
    fallback_to_mock: bool = True
    cache_ttl: float = 24 * 60 * 60
    max_results: int = 100
    duplicate_threshold: float = 0.8
    featured_count: int = 3


def sort_attorneys(attorneys: list[AttorneyRecord]) -> list[AttorneyRecord]:
    return sorted(
        attorneys,
        key=lambda a: (not a.verified, not a.featured, -a.rating, -a.cases),
    )


def mark_featured(attorneys: list[AttorneyRecord], count: int = 3) -> list[AttorneyRecord]:
    """Featured flags from earlier stages are provisional; only the top `count` keep one."""
    return [a.model_copy(update={"featured": i < count}) for i, a in enumerate(attorneys)]


class AttorneyPipeline:
    def __init__(
        self,
        cache: AttorneyCache,
        overpass: OverpassClient,
        google: Optional[GoogleSearchClient] = None,
        config: Optional[PipelineConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.cache = cache
        self.overpass = overpass
        self.google = google
        self.config = config or PipelineConfig()
        self.rng = rng or random.Random()

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    async def process(self, lat: float, lng: float, radius: float) -> list[AttorneyRecord]:
        cfg = self.config
        logger.info(f"[Pipeline] start ({lat}, {lng}) radius={radius}km")

        if cfg.enable_caching:
            cached = self.cache.get(lat, lng, radius)
            if cached is not None:
                logger.info(f"[Pipeline] cache hit ({len(cached)} attorneys)")
                return list(cached)

        try:
            attorneys = await self._resolve(lat, lng, radius)
        except Exception as e:
            if not cfg.fallback_to_mock:
                raise
            logger.exception(f"[Pipeline] error, falling back to mock attorneys: {e}")
            attorneys = self._finalize(generate_mock_attorneys(lat, lng, self.rng))

        if cfg.enable_caching:
            self.cache.set(lat, lng, radius, attorneys, ttl=cfg.cache_ttl)

        logger.info(f"[Pipeline] returning {len(attorneys)} attorneys")
        return list(attorneys)

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    async def _resolve(self, lat: float, lng: float, radius: float) -> list[AttorneyRecord]:
        basic = await self.fetch_live(lat, lng, radius)
        if not basic:
            logger.info("[Pipeline] no live attorneys found, using mock data")
            return self._finalize(generate_mock_attorneys(lat, lng, self.rng))

        if self.config.enable_enrichment:
            attorneys = self.enrich(basic)
            logger.info(
                f"[Pipeline] enrichment: {len(basic)} basic → {len(attorneys)} civil-rights attorneys"
            )
        else:
            attorneys = self.wrap_basic(basic)

        attorneys = dedupe_attorneys(attorneys, threshold=self.config.duplicate_threshold)
        if not attorneys:
            logger.info("[Pipeline] every live record was excluded, using mock data")
            return self._finalize(generate_mock_attorneys(lat, lng, self.rng))

        return self._finalize(attorneys)

    async def fetch_live(self, lat: float, lng: float, radius: float) -> list[AttorneyRecord]:
        sources = [("osm", self.overpass.search_attorneys(lat, lng, radius))]
        if self.google is not None and self.google.enabled:
            sources.append(("google", self.google.search_attorneys(lat, lng, radius)))

        results = await asyncio.gather(*(coro for _, coro in sources), return_exceptions=True)

        attorneys: list[AttorneyRecord] = []
        for (name, _), result in zip(sources, results):
            if isinstance(result, BaseException):
                logger.warning(f"[Pipeline] {name} source failed: {result!r}")
                continue
            attorneys.extend(result)
        logger.info(f"[Pipeline] {len(attorneys)} basic attorney records")
        return attorneys

    def enrich(self, attorneys: list[AttorneyRecord]) -> list[AttorneyRecord]:
        now = datetime.now(timezone.utc)
        enriched: list[AttorneyRecord] = []
        for a in attorneys:
            extra = " ".join(a.specialization + [a.description or ""])
            labels = classify(a.name, extra_text=extra, record_id=a.id)
            if not labels:
                logger.debug(f"[Pipeline] excluded {a.name!r}")
                continue
            enriched.append(
                a.model_copy(
                    update={
                        **civil_rights_profile(labels),
                        "specialization": labels,
                        "practice_areas": list(labels),
                        "reviews": [],
                        "social_media": SocialMedia(),
                        "verified": True,
                        "last_updated": now,
                    }
                )
            )
        return enriched

    def wrap_basic(self, attorneys: list[AttorneyRecord]) -> list[AttorneyRecord]:
        now = datetime.now(timezone.utc)
        return [
            a.model_copy(
                update={
                    "specialization": a.specialization or [GENERAL_PRACTICE],
                    **civil_rights_profile([]),
                    "practice_areas": [],
                    "reviews": [],
                    "social_media": SocialMedia(),
                    "verified": False,
                    "last_updated": now,
                }
            )
            for a in attorneys
        ]

    def _finalize(self, attorneys: list[AttorneyRecord]) -> list[AttorneyRecord]:
        ranked = sort_attorneys(attorneys)[: self.config.max_results]
        return mark_featured(ranked, self.config.featured_count)

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    def stats(self) -> dict:
        return {
            "cache": self.cache.stats(),
            "sources": {
                "osm": True,
                "google": bool(self.google is not None and self.google.enabled),
            },
            "config": dataclasses.asdict(self.config),
        }

    def update_config(self, **changes) -> PipelineConfig:
        self.config = dataclasses.replace(self.config, **changes)
        logger.info(f"[Pipeline] configuration updated: {self.config}")
        return self.config

    def clear_cache(self) -> int:
        return self.cache.clear()
