# tests/test_classifier.py
"""Tests for the specialization classifier: exclusion, keyword rules, fallback rotation."""

import zlib

import pytest

from attorney_api.services.classifier import (
    EXCLUSION_KEYWORDS,
    FALLBACK_ROTATION,
    SPECIALIZATION_RULES,
    Rule,
    civil_rights_profile,
    classify,
    fallback_specialization,
    is_excluded,
    match_rules,
    rotation_index,
)


# ---------------------------------------------------------------------------
# Exclusion
# ---------------------------------------------------------------------------


class TestExclusion:
    def test_tax_and_trademark_firm_is_excluded(self):
        """'Associates' must not rescue a firm the exclusion list already rejected."""
        assert classify("ABC Tax & Trademark Associates") == []

    def test_exclusion_beats_inclusion_keywords(self):
        assert classify("Immigration & Property Consultants") == []

    def test_exclusion_checks_extra_text(self):
        assert classify("Smith Chambers", extra_text="Corporate mergers") == []

    @pytest.mark.parametrize("name", [
        "Patent Attorneys Ltd",
        "Real Estate Legal Services",
        "NADRA Documentation Centre",
        "Banking & Finance Counsel",
        "City Notary Public",
    ])
    def test_excluded_names(self, name):
        assert classify(name, record_id="1") == []

    def test_is_excluded_is_case_insensitive(self):
        assert is_excluded("CORPORATE Counsel")
        assert not is_excluded("Human Rights Watch")

    def test_exclusion_list_covers_registration_agencies(self):
        assert "registration" in EXCLUSION_KEYWORDS
        assert "documentation" in EXCLUSION_KEYWORDS


# ---------------------------------------------------------------------------
# Keyword rules
# ---------------------------------------------------------------------------


class TestKeywordRules:
    def test_immigration(self):
        assert classify("Immigration & Asylum Law Chambers") == [
            "Immigration Law",
            "Asylum & Refugee Law",
        ]

    def test_family_adds_womens_rights_then_family_law(self):
        assert classify("Khan Family Law Associates") == ["Women's Rights", "Family Law"]

    def test_women_alone_has_no_family_law(self):
        assert classify("Women Rights Advocates") == ["Women's Rights"]

    def test_khula_maps_to_womens_rights_only(self):
        assert classify("Khula Legal Help Desk") == ["Women's Rights"]

    def test_police_misconduct_needs_both_words(self):
        assert classify("Police Misconduct Legal Aid") == ["Police Misconduct"]
        assert "Police Misconduct" not in classify("Police Lines Advocates", record_id="5")

    def test_rules_accumulate(self):
        labels = classify("Civil Rights & Immigration Law Center")
        assert labels == ["Civil Rights Law", "Immigration Law", "Asylum & Refugee Law"]

    def test_labels_deduplicated(self):
        labels = classify("Constitutional Blasphemy Defence")
        assert labels == ["Constitutional Law", "First Amendment Rights"]

    def test_extra_text_contributes(self):
        labels = classify("Smith Chambers", extra_text="Refugee and asylum casework")
        assert labels == ["Immigration Law", "Asylum & Refugee Law"]

    def test_match_rules_empty_for_plain_name(self):
        assert match_rules("ahmed & co") == []

    def test_rule_table_shape(self):
        for rule in SPECIALIZATION_RULES:
            assert isinstance(rule, Rule)
            assert callable(rule.predicate)
            assert rule.labels


# ---------------------------------------------------------------------------
# Fallback rotation
# ---------------------------------------------------------------------------


class TestFallback:
    def test_numeric_id_indexes_rotation(self):
        assert classify("Ahmed & Co", record_id="5") == list(FALLBACK_ROTATION[5])

    def test_numeric_id_wraps(self):
        assert classify("Ahmed & Co", record_id=str(len(FALLBACK_ROTATION))) == list(FALLBACK_ROTATION[0])

    def test_non_numeric_id_uses_crc32(self):
        expected = FALLBACK_ROTATION[zlib.crc32(b"google-abc") % len(FALLBACK_ROTATION)]
        assert fallback_specialization("google-abc") == list(expected)

    def test_fallback_is_deterministic(self):
        assert classify("Ahmed & Co", record_id="mock-x") == classify("Ahmed & Co", record_id="mock-x")

    def test_rotation_index_empty_id(self):
        assert rotation_index("") == zlib.crc32(b"")

    def test_fallback_never_empty(self):
        for i in range(50):
            assert classify("Plain Name Chambers", record_id=str(i))

    def test_fallback_varies_across_ids(self):
        bundles = {tuple(classify("Plain Name Chambers", record_id=str(i))) for i in range(10)}
        assert len(bundles) > 1


# ---------------------------------------------------------------------------
# Civil-rights focus fields
# ---------------------------------------------------------------------------


class TestCivilRightsProfile:
    def test_immigration_labels_add_services(self):
        profile = civil_rights_profile(["Immigration Law", "Asylum & Refugee Law"])
        assert profile["civil_rights_focus"] == ["Immigration Law", "Asylum & Refugee Law"]
        assert profile["immigration_services"] == ["Asylum", "Refugee Status", "Deportation Defense"]
        assert profile["pro_bono_work"] is True
        assert profile["community_involvement"] == ["Human Rights Advocacy", "Community Legal Aid"]

    def test_other_labels_have_no_immigration_services(self):
        assert civil_rights_profile(["Women's Rights"])["immigration_services"] == []

    def test_unlabelled_record_is_empty(self):
        assert civil_rights_profile([]) == {
            "civil_rights_focus": [],
            "immigration_services": [],
            "pro_bono_work": False,
            "community_involvement": [],
        }
