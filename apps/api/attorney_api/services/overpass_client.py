"""
Overpass Client
Looks up lawyer / attorney offices around a coordinate on OpenStreetMap.

One union query covers every legal-office tag we know about. Elements are
wrapped one at a time in OverpassElement (named accessors over the raw tag
map) and turned into AttorneyRecord objects right here, so nothing downstream
ever touches the raw OSM tag bag. A malformed element is logged and skipped;
the rest of the response is kept.

Upstream trouble (timeouts, non-2xx, bad JSON, nothing found) always resolves
to an empty list; the pipeline treats that as "use the fallback", not as an
error.
"""
from __future__ import annotations

import asyncio
import logging
import random
from typing import Optional

import httpx
from pydantic import ValidationError

from attorney_api.schemas.attorney import (
    ADDRESS_NOT_AVAILABLE,
    GENERAL_PRACTICE,
    LOCATION_NOT_AVAILABLE,
    AttorneyRecord,
    approximate_distance_km,
)

logger = logging.getLogger(__name__)

DEFAULT_OVERPASS_URL = "https://overpass-api.de/api/interpreter"

# (key, value) pairs queried with around:radius
LEGAL_OFFICE_TAGS: list[tuple[str, str]] = [
    ("amenity", "lawyer"),
    ("office", "lawyer"),
    ("office", "attorney"),
    ("office", "advocate"),
    ("office", "legal"),
    ("office", "barrister"),
    ("office", "solicitor"),
]


class UpstreamUnavailable(Exception):
    """A live data source could not be reached or returned nothing usable."""


class OverpassElement:
    """Typed view over one Overpass node and its free-text tags."""

    def __init__(self, raw: dict):
        self.id = str(raw.get("id", ""))
        self.lat: Optional[float] = raw.get("lat")
        self.lon: Optional[float] = raw.get("lon")
        if self.lat is None and isinstance(raw.get("center"), dict):
            self.lat = raw["center"].get("lat")
            self.lon = raw["center"].get("lon")
        self.tags: dict[str, str] = {
            str(k): str(v) for k, v in (raw.get("tags") or {}).items()
        }

    def _tag(self, *keys: str) -> Optional[str]:
        for key in keys:
            val = self.tags.get(key, "").strip()
            if val:
                return val
        return None

    @property
    def name(self) -> str:
        return self._tag("name") or ""

    @property
    def phone(self) -> Optional[str]:
        return self._tag("phone", "contact:phone")

    @property
    def website(self) -> Optional[str]:
        return self._tag("website", "contact:website")

    @property
    def email(self) -> Optional[str]:
        return self._tag("email", "contact:email")

    @property
    def address(self) -> Optional[str]:
        return self._tag("addr:full", "address")

    @property
    def city(self) -> Optional[str]:
        return self._tag("addr:city", "city")

    @property
    def office_type(self) -> Optional[str]:
        return self._tag("office")

    @property
    def description(self) -> Optional[str]:
        return self._tag("description")

    @property
    def detailed_location(self) -> str:
        parts = [
            self._tag("addr:street"),
            self._tag("addr:housenumber"),
            self._tag("addr:city"),
            self._tag("addr:state"),
            self._tag("addr:postcode"),
        ]
        return ", ".join(p for p in parts if p) or ADDRESS_NOT_AVAILABLE


def build_overpass_query(lat: float, lng: float, radius_km: float, timeout_s: int = 15) -> str:
    radius_m = int(round(radius_km * 1000))
    filters = "\n".join(
        f'  node["{key}"="{value}"](around:{radius_m},{lat},{lng});'
        for key, value in LEGAL_OFFICE_TAGS
    )
    return f"""
[out:json][timeout:{timeout_s}];
(
{filters}
);
out body;
>;
out skel qt;
"""


def element_to_attorney(
    el: OverpassElement,
    rng: random.Random,
    origin: Optional[tuple[float, float]] = None,
) -> Optional[AttorneyRecord]:
    """Convert an Overpass element to an AttorneyRecord. Nameless elements are dropped."""
    name = el.name
    if not name:
        return None

    distance = None
    if origin and el.lat is not None and el.lon is not None:
        distance = approximate_distance_km(origin[0], origin[1], el.lat, el.lon)

    return AttorneyRecord(
        id=el.id,
        name=name,
        specialization=[el.office_type.title() if el.office_type else GENERAL_PRACTICE],
        location=el.city or LOCATION_NOT_AVAILABLE,
        detailed_location=el.detailed_location,
        rating=rng.random() * 2 + 3,
        cases=rng.randint(50, 249),
        languages=[],
        featured=False,
        phone=el.phone,
        website=el.website,
        email=el.email,
        address=el.address,
        lat=el.lat,
        lng=el.lon,
        verified=False,
        source="osm",
        description=el.description,
        distance_from_user=distance,
    )


class OverpassClient:
    def __init__(
        self,
        client: httpx.AsyncClient,
        endpoint: str = DEFAULT_OVERPASS_URL,
        timeout_s: float = 15.0,
        rng: Optional[random.Random] = None,
    ):
        self.client = client
        self.endpoint = endpoint
        self.timeout_s = timeout_s
        self.rng = rng or random.Random()

    async def fetch_elements(self, lat: float, lng: float, radius_km: float) -> list[dict]:
        """Run the around-query and return the raw elements. Raises UpstreamUnavailable on any failure."""
        query = build_overpass_query(lat, lng, radius_km, timeout_s=int(self.timeout_s))
        try:
            resp = await asyncio.wait_for(
                self.client.post(
                    self.endpoint,
                    content=query,
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                    timeout=self.timeout_s,
                ),
                timeout=self.timeout_s + 2,
            )
        except (asyncio.TimeoutError, httpx.HTTPError) as e:
            raise UpstreamUnavailable(f"Overpass request failed: {e!r}") from e

        if resp.status_code != 200:
            raise UpstreamUnavailable(f"Overpass returned {resp.status_code}")
        try:
            data = resp.json()
        except ValueError as e:
            raise UpstreamUnavailable("Overpass returned invalid JSON") from e

        elements = data.get("elements") if isinstance(data, dict) else None
        if not elements:
            raise UpstreamUnavailable("Overpass returned no elements")
        return [el for el in elements if isinstance(el, dict)]

    async def search_attorneys(self, lat: float, lng: float, radius_km: float) -> list[AttorneyRecord]:
        """Fetch and convert. Never raises; an empty list means 'use the fallback'."""
        try:
            elements = await self.fetch_elements(lat, lng, radius_km)
        except UpstreamUnavailable as e:
            logger.warning(f"[Overpass] {e}")
            return []

        attorneys: list[AttorneyRecord] = []
        for raw in elements:
            try:
                attorney = element_to_attorney(OverpassElement(raw), self.rng, origin=(lat, lng))
            except (TypeError, ValueError, AttributeError, ValidationError) as e:
                logger.warning(f"[Overpass] skipping malformed element {raw.get('id')!r}: {e}")
                continue
            if attorney:
                attorneys.append(attorney)

        logger.info(
            f"[Overpass] ({lat}, {lng}, {radius_km}km): {len(elements)} elements → "
            f"{len(attorneys)} named attorneys"
        )
        return attorneys
