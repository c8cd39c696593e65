# tests/test_filtering.py

"""
Tests for result browsing filters.
"""

import pytest

from app.models import FinancialRecord
from app.core.matching import reconcile
from app.core.filtering import filter_result, record_contains


def make_record(**fields) -> FinancialRecord:
    return FinancialRecord.from_mapping(fields)


@pytest.fixture
def result():
    left = [
        make_record(id="A1", amount=100, description="ACME Corp"),
        make_record(id="B2", amount=250, description="Office chair"),
        make_record(id="C3", amount=75, description="Invoice"),
        make_record(id="D4", amount=12, description="Parking"),
    ]
    right = [
        make_record(id="A1", amount=100, description="ACME Corp"),
        make_record(id="B2", amount=250, description="Office chairs"),
        make_record(id="C3", amount=75, description="Invoic"),
        make_record(id="E5", amount=999, description="Consulting"),
    ]
    return reconcile(left, right)


class TestFiltering:
    """Test search and confidence filters."""

    def test_no_filters_is_identity(self, result):
        assert filter_result(result) == result

    def test_search_is_case_insensitive(self, result):
        filtered = filter_result(result, search="acme")

        assert len(filtered.matches) == 1
        assert filtered.matches[0].record1.id == "A1"
        assert filtered.mismatches == []
        assert filtered.missing_in_dataset1 == []
        assert filtered.missing_in_dataset2 == []

    def test_search_covers_missing_records(self, result):
        filtered = filter_result(result, search="consulting")

        assert [r.id for r in filtered.missing_in_dataset1] == ["E5"]
        assert filtered.missing_in_dataset2 == []

    def test_min_confidence_applies_to_matches_only(self, result):
        filtered = filter_result(result, min_confidence=0.99)

        assert [m.record1.id for m in filtered.matches] == ["A1"]
        assert len(filtered.mismatches) == 1
        assert len(filtered.missing_in_dataset2) == 1

    def test_summary_untouched(self, result):
        filtered = filter_result(result, search="nothing matches this")

        assert filtered.matches == []
        assert filtered.summary == result.summary

    def test_record_contains_searches_values_and_names(self):
        record = make_record(id="A1", memo="Quarterly fee")

        assert record_contains(record, "QUARTERLY")
        assert record_contains(record, '"memo"')
        assert not record_contains(record, "annual")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
