# tests/test_dedup.py
"""Tests for name-similarity scoring and near-duplicate removal."""

from attorney_api.schemas.attorney import AttorneyRecord
from attorney_api.services.dedup import dedupe_attorneys, name_similarity


def _attorney(id_, name, source="osm"):
    return AttorneyRecord(id=id_, name=name, source=source)


class TestNameSimilarity:
    def test_identical_names(self):
        assert name_similarity("Khan Law Associates", "Khan Law Associates") == 1.0

    def test_case_insensitive(self):
        assert name_similarity("KHAN LAW", "khan law") == 1.0

    def test_partial_overlap_divides_by_longer_name(self):
        assert name_similarity("Khan Law", "Khan Law Associates") == 2 / 3

    def test_substring_either_direction(self):
        assert name_similarity("Sarah Johnson Law Office", "Sarah Johnson Law Offices") == 1.0

    def test_disjoint_names(self):
        assert name_similarity("Ahmed Chambers", "Rizvi Partners") == 0.0

    def test_empty_name(self):
        assert name_similarity("", "Khan Law") == 0.0


class TestDedupeAttorneys:
    def test_near_duplicate_dropped_first_wins(self):
        records = [
            _attorney("1", "Sarah Johnson Law Office"),
            _attorney("google-1", "Sarah Johnson Law Offices", source="google"),
        ]
        result = dedupe_attorneys(records)
        assert [a.id for a in result] == ["1"]

    def test_threshold_is_strict(self):
        # 4 of 5 words = 0.8, which is not > 0.8
        records = [
            _attorney("1", "Ali Raza Human Rights Chambers"),
            _attorney("2", "Ali Raza Human Rights Foundation"),
        ]
        assert len(dedupe_attorneys(records)) == 2

    def test_custom_threshold(self):
        records = [_attorney("1", "Khan Law"), _attorney("2", "Khan Law Associates")]
        assert len(dedupe_attorneys(records, threshold=0.5)) == 1

    def test_distinct_records_kept_in_order(self):
        records = [
            _attorney("3", "Rizvi Partners"),
            _attorney("1", "Ahmed Chambers"),
            _attorney("2", "Women Rights Desk"),
        ]
        assert [a.id for a in dedupe_attorneys(records)] == ["3", "1", "2"]

    def test_repeated_id_dropped(self):
        records = [_attorney("7", "Ahmed Chambers"), _attorney("7", "Completely Different Name")]
        assert len(dedupe_attorneys(records)) == 1

    def test_idempotent(self):
        records = [
            _attorney("1", "Sarah Johnson Law Office"),
            _attorney("2", "Sarah Johnson Law Offices"),
            _attorney("3", "Khan Law"),
            _attorney("4", "Khan Law Associates"),
            _attorney("5", "Khan Law Associates Karachi"),
            _attorney("6", "Rizvi Partners"),
        ]
        once = dedupe_attorneys(records)
        twice = dedupe_attorneys(once)
        assert [a.id for a in twice] == [a.id for a in once]

    def test_empty_input(self):
        assert dedupe_attorneys([]) == []
