# tests/test_mock_attorneys.py
"""Tests for the fallback attorney generator."""

import random

from attorney_api.services.mock_attorneys import MOCK_COUNT, generate_mock_attorneys

KARACHI = (24.8607, 67.0011)


class TestGenerateMockAttorneys:
    def test_returns_five_records(self):
        attorneys = generate_mock_attorneys(*KARACHI)
        assert MOCK_COUNT == 5
        assert [a.id for a in attorneys] == ["mock-1", "mock-2", "mock-3", "mock-4", "mock-5"]

    def test_records_are_mock_and_verified(self):
        for a in generate_mock_attorneys(*KARACHI):
            assert a.source == "mock"
            assert a.verified is True
            assert 3 <= a.rating < 5
            assert a.specialization
            assert a.reviews and a.reviews[0].source == "Google Reviews"
            assert a.last_updated is not None

    def test_positions_jittered_within_half_hundredth_degree(self):
        for a in generate_mock_attorneys(*KARACHI, rng=random.Random(1)):
            assert abs(a.lat - KARACHI[0]) <= 0.005
            assert abs(a.lng - KARACHI[1]) <= 0.005
            assert a.distance_from_user is not None
            assert a.distance_from_user < 1.0

    def test_first_two_featured(self):
        attorneys = generate_mock_attorneys(*KARACHI)
        assert [a.featured for a in attorneys] == [True, True, False, False, False]

    def test_seeded_rng_is_reproducible(self):
        first = generate_mock_attorneys(*KARACHI, rng=random.Random(42))
        second = generate_mock_attorneys(*KARACHI, rng=random.Random(42))
        assert [(a.lat, a.lng) for a in first] == [(a.lat, a.lng) for a in second]

    def test_profiles_are_independent_copies(self):
        first = generate_mock_attorneys(*KARACHI)
        first[0].specialization.append("Tampered")
        second = generate_mock_attorneys(*KARACHI)
        assert "Tampered" not in second[0].specialization

    def test_civil_rights_focus_fields(self):
        by_id = {a.id: a for a in generate_mock_attorneys(*KARACHI)}
        for a in by_id.values():
            assert a.civil_rights_focus
            assert a.community_involvement
            assert a.pro_bono_work is True
        assert by_id["mock-5"].immigration_services == ["Asylum", "Refugee Status", "Deportation Defense"]
        assert by_id["mock-1"].immigration_services == []

    def test_camel_case_serialization(self):
        payload = generate_mock_attorneys(*KARACHI)[0].to_json()
        assert payload["detailedLocation"] == "123 Main St, Downtown, State 12345"
        assert payload["practiceAreas"] == ["Criminal Defense", "Traffic Violations"]
        assert payload["socialMedia"]["linkedin"] == "https://linkedin.com/in/sarahjohnsonlaw"
        assert "distanceFromUser" in payload
        assert "description" not in payload
