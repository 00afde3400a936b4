"""
Near-duplicate removal for attorney records gathered from several sources.
First occurrence wins; later records whose names are too similar to an
already-accepted one are dropped.
"""
from __future__ import annotations

import logging

from attorney_api.schemas.attorney import AttorneyRecord

logger = logging.getLogger(__name__)

DEFAULT_SIMILARITY_THRESHOLD = 0.8


def name_similarity(name1: str, name2: str) -> float:
    """Share of name1's words that fuzzily match (substring, either way) a word in name2."""
    words1 = name1.lower().split()
    words2 = name2.lower().split()
    if not words1 or not words2:
        return 0.0

    matches = 0
    for w1 in words1:
        if any(w1 in w2 or w2 in w1 for w2 in words2):
            matches += 1
    return matches / max(len(words1), len(words2))


def dedupe_attorneys(
    attorneys: list[AttorneyRecord],
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> list[AttorneyRecord]:
    unique: list[AttorneyRecord] = []
    seen_ids: set[str] = set()
    for attorney in attorneys:
        if attorney.id in seen_ids:
            continue
        if any(name_similarity(attorney.name, kept.name) > threshold for kept in unique):
            continue
        unique.append(attorney)
        seen_ids.add(attorney.id)

    if len(unique) != len(attorneys):
        logger.debug(f"[Dedup] {len(attorneys)} → {len(unique)} records")
    return unique
