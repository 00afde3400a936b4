"""
Fallback attorney records.
Used whenever live sources produce nothing, so callers never get an empty
list. Every record carries source="mock"; consumers that need real data only
must filter on it.
"""
from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Optional

from attorney_api.schemas.attorney import (
    AttorneyRecord,
    Review,
    SocialMedia,
    approximate_distance_km,
)
from attorney_api.services.classifier import civil_rights_profile

MOCK_JITTER_DEGREES = 0.01

_MOCK_PROFILES: list[dict] = [
    {
        "id": "mock-1",
        "name": "Sarah Johnson",
        "specialization": ["Criminal Defense"],
        "location": "Downtown",
        "detailed_location": "123 Main St, Downtown, State 12345",
        "rating": 4.8,
        "cases": 150,
        "languages": ["English", "Spanish"],
        "phone": "(555) 123-4567",
        "website": "https://sarahjohnsonlaw.com",
        "email": "sarah@sarahjohnsonlaw.com",
        "practice_areas": ["Criminal Defense", "Traffic Violations"],
        "civil_rights_focus": ["Criminal Justice Reform"],
        "community_involvement": ["Community Legal Aid"],
        "review": "Excellent representation in my case",
        "social_media": {
            "linkedin": "https://linkedin.com/in/sarahjohnsonlaw",
            "facebook": "https://facebook.com/sarahjohnsonlaw",
        },
    },
    {
        "id": "mock-2",
        "name": "Michael Chen",
        "specialization": ["Personal Injury"],
        "location": "Midtown",
        "detailed_location": "456 Oak Ave, Midtown, State 12345",
        "rating": 4.6,
        "cases": 200,
        "languages": ["English", "Mandarin"],
        "phone": "(555) 234-5678",
        "website": "https://michaelchenlaw.com",
        "email": "michael@michaelchenlaw.com",
        "practice_areas": ["Personal Injury", "Medical Malpractice"],
        "civil_rights_focus": ["Disability Rights"],
        "community_involvement": ["Accessibility Advocacy"],
        "review": "Great results for my injury case",
        "social_media": {"linkedin": "https://linkedin.com/in/michaelchenlaw"},
    },
    {
        "id": "mock-3",
        "name": "Emily Rodriguez",
        "specialization": ["Family Law"],
        "location": "Uptown",
        "detailed_location": "789 Pine St, Uptown, State 12345",
        "rating": 4.9,
        "cases": 120,
        "languages": ["English", "Spanish"],
        "phone": "(555) 345-6789",
        "website": "https://emilyrodriguezlaw.com",
        "email": "emily@emilyrodriguezlaw.com",
        "practice_areas": ["Family Law", "Divorce", "Child Custody"],
        "civil_rights_focus": ["Women's Rights", "Family Law"],
        "community_involvement": ["Women's Rights Campaign", "Domestic Violence Support"],
        "review": "Compassionate and professional",
        "social_media": {},
    },
    {
        "id": "mock-4",
        "name": "David Thompson",
        "specialization": ["Civil Rights Law"],
        "location": "Financial District",
        "detailed_location": "321 Liberty Blvd, Financial District, State 12345",
        "rating": 4.7,
        "cases": 180,
        "languages": ["English"],
        "phone": "(555) 456-7890",
        "website": "https://davidthompsonlaw.com",
        "email": "david@davidthompsonlaw.com",
        "practice_areas": ["Civil Rights Law", "Police Misconduct", "Constitutional Law"],
        "civil_rights_focus": ["Civil Rights Law", "Police Misconduct", "Constitutional Law"],
        "community_involvement": ["Human Rights Advocacy", "Community Legal Aid"],
        "review": "Stood up for my rights when no one else would",
        "social_media": {"linkedin": "https://linkedin.com/in/davidthompsonlaw"},
    },
    {
        "id": "mock-5",
        "name": "Lisa Wang",
        "specialization": ["Immigration Law"],
        "location": "Chinatown",
        "detailed_location": "654 Heritage St, Chinatown, State 12345",
        "rating": 4.5,
        "cases": 95,
        "languages": ["English", "Mandarin", "Cantonese"],
        "phone": "(555) 567-8901",
        "website": "https://lisawanglaw.com",
        "email": "lisa@lisawanglaw.com",
        "practice_areas": ["Immigration Law", "Visa Applications", "Citizenship"],
        "civil_rights_focus": ["Immigration Law", "Asylum & Refugee Law"],
        "community_involvement": ["Refugee Support", "Immigrant Rights Advocacy"],
        "review": "Helped with my immigration process",
        "social_media": {},
    },
]

MOCK_COUNT = len(_MOCK_PROFILES)


def _jitter(rng: random.Random) -> float:
    return (rng.random() - 0.5) * MOCK_JITTER_DEGREES


def generate_mock_attorneys(
    lat: float,
    lng: float,
    rng: Optional[random.Random] = None,
) -> list[AttorneyRecord]:
    """Five preset attorneys scattered within ±0.005° of (lat, lng)."""
    rng = rng or random.Random()
    now = datetime.now(timezone.utc)

    attorneys: list[AttorneyRecord] = []
    for i, p in enumerate(_MOCK_PROFILES):
        a_lat = lat + _jitter(rng)
        a_lng = lng + _jitter(rng)
        focus = civil_rights_profile(p["civil_rights_focus"])
        focus["community_involvement"] = list(p["community_involvement"])
        attorneys.append(
            AttorneyRecord(
                id=p["id"],
                name=p["name"],
                specialization=list(p["specialization"]),
                location=p["location"],
                detailed_location=p["detailed_location"],
                rating=p["rating"],
                cases=p["cases"],
                languages=list(p["languages"]),
                featured=i < 2,
                phone=p["phone"],
                website=p["website"],
                email=p["email"],
                address=p["detailed_location"],
                lat=a_lat,
                lng=a_lng,
                practice_areas=list(p["practice_areas"]),
                **focus,
                reviews=[
                    Review(
                        rating=p["rating"],
                        comment=p["review"],
                        source="Google Reviews",
                        date=now,
                    )
                ],
                social_media=SocialMedia(**p["social_media"]),
                verified=True,
                last_updated=now,
                source="mock",
                distance_from_user=approximate_distance_km(lat, lng, a_lat, a_lng),
            )
        )
    return attorneys
