"""
Specialization Classifier
Infers civil-rights practice-area labels from an attorney's name and tag text.

Three tables drive everything:
  EXCLUSION_KEYWORDS:   any hit means "not a civil-rights practice"; checked
                        first, short-circuits to an empty result
  SPECIALIZATION_RULES: ordered (predicate, labels) pairs; every matching
                        rule contributes its labels
  FALLBACK_ROTATION:    bundle picked by record id when nothing matched, so
                        unlabelled records still get a varied assignment
"""
from __future__ import annotations

import zlib
from typing import Callable, NamedTuple

Predicate = Callable[[str], bool]


class Rule(NamedTuple):
    predicate: Predicate
    labels: tuple[str, ...]


def any_of(*terms: str) -> Predicate:
    return lambda text: any(t in text for t in terms)


def all_of(*terms: str) -> Predicate:
    return lambda text: all(t in text for t in terms)


EXCLUSION_KEYWORDS: tuple[str, ...] = (
    "tax",
    "revenue",
    "trademark",
    "patent",
    "intellectual property",
    "corporate",
    "business",
    "commercial",
    "banking",
    "finance",
    "real estate",
    "property",
    # registration / documentation agencies
    "nadra",
    "documentation",
    "registration",
    "notary",
)

SPECIALIZATION_RULES: tuple[Rule, ...] = (
    Rule(any_of("civil rights", "human rights"), ("Civil Rights Law",)),
    Rule(any_of("immigration", "asylum", "refugee"), ("Immigration Law", "Asylum & Refugee Law")),
    Rule(any_of("constitutional"), ("Constitutional Law", "First Amendment Rights")),
    Rule(all_of("police", "misconduct"), ("Police Misconduct",)),
    Rule(any_of("discrimination"), ("Discrimination Law",)),
    Rule(all_of("employment", "discrimination"), ("Employment Discrimination",)),
    Rule(all_of("housing", "discrimination"), ("Housing Discrimination",)),
    Rule(all_of("education", "law"), ("Education Law",)),
    Rule(any_of("disability", "accessibility"), ("Disability Rights",)),
    Rule(any_of("lgbt", "transgender"), ("LGBTQ+ Rights",)),
    Rule(any_of("women", "marriage", "divorce", "khula", "family"), ("Women's Rights",)),
    # always a subset of the previous rule, so Family Law follows Women's Rights
    Rule(any_of("family", "marriage", "divorce"), ("Family Law",)),
    Rule(all_of("racial", "justice"), ("Racial Justice",)),
    Rule(all_of("criminal", "justice"), ("Criminal Justice Reform",)),
    Rule(all_of("environmental", "justice"), ("Environmental Justice",)),
    Rule(any_of("blasphemy"), ("Constitutional Law", "First Amendment Rights")),
    Rule(any_of("honor killing", "honour killing"), ("Women's Rights", "Criminal Justice Reform")),
    Rule(any_of("forced conversion", "forced marriage"), ("Women's Rights", "Constitutional Law")),
    Rule(any_of("acid attack"), ("Women's Rights", "Criminal Justice Reform")),
)

FALLBACK_ROTATION: tuple[tuple[str, ...], ...] = (
    ("Women's Rights", "Family Law"),
    ("Immigration Law", "Asylum & Refugee Law"),
    ("Constitutional Law", "First Amendment Rights"),
    ("Police Misconduct", "Criminal Justice Reform"),
    ("Discrimination Law", "Employment Discrimination"),
    ("Disability Rights",),
    ("LGBTQ+ Rights",),
    ("Racial Justice",),
    ("Civil Rights Law", "Constitutional Law"),
    ("Criminal Justice Reform", "Police Misconduct"),
    ("Women's Rights", "Discrimination Law"),
    ("Immigration Law", "Constitutional Law"),
    ("Employment Discrimination", "Workplace Rights"),
    ("Disability Rights", "Accessibility Law"),
    ("LGBTQ+ Rights", "Discrimination Law"),
    ("Racial Justice", "Civil Rights Law"),
    ("Civil Rights Law", "Human Rights"),
    ("Constitutional Law", "Civil Rights Law"),
    ("Criminal Justice Reform", "Civil Rights Law"),
)


# Filled in by civil_rights_profile()
IMMIGRATION_SERVICES: tuple[str, ...] = ("Asylum", "Refugee Status", "Deportation Defense")
COMMUNITY_INVOLVEMENT: tuple[str, ...] = ("Human Rights Advocacy", "Community Legal Aid")


def _combined_text(name: str, extra_text: str = "") -> str:
    return f"{name} {extra_text}".lower()


def is_excluded(text: str) -> bool:
    """True if the text names a practice that is clearly not civil-rights work."""
    text = text.lower()
    return any(kw in text for kw in EXCLUSION_KEYWORDS)


def rotation_index(record_id: str) -> int:
    """Stable index for a record id: numeric ids map to themselves, others to their CRC32."""
    record_id = (record_id or "").strip()
    if record_id.isdigit():
        return int(record_id)
    return zlib.crc32(record_id.encode("utf-8"))


def fallback_specialization(record_id: str) -> list[str]:
    bundle = FALLBACK_ROTATION[rotation_index(record_id) % len(FALLBACK_ROTATION)]
    return list(bundle)


def match_rules(text: str) -> list[str]:
    """Labels from every matching inclusion rule, deduplicated in rule order."""
    labels: list[str] = []
    for rule in SPECIALIZATION_RULES:
        if rule.predicate(text):
            for label in rule.labels:
                if label not in labels:
                    labels.append(label)
    return labels


def classify(name: str, extra_text: str = "", record_id: str = "") -> list[str]:
    """
    Return the ordered specialization labels for a record.
    An empty list means the record is excluded and should be dropped.
    """
    text = _combined_text(name, extra_text)
    if is_excluded(text):
        return []
    labels = match_rules(text)
    if not labels:
        labels = fallback_specialization(record_id)
    return labels


def civil_rights_profile(labels: list[str]) -> dict:
    """Civil-rights focus fields for a record carrying `labels`; all empty when unlabelled."""
    return {
        "civil_rights_focus": list(labels),
        "immigration_services": list(IMMIGRATION_SERVICES) if "Immigration Law" in labels else [],
        "pro_bono_work": bool(labels),
        "community_involvement": list(COMMUNITY_INVOLVEMENT) if labels else [],
    }
