# app/core/filtering.py

"""
Result browsing filters.

Narrow a reconciliation result down to what a reviewer is looking for,
without touching the summary (which always describes the full run).
"""

from typing import Optional
import json

from app.models import FinancialRecord, ReconciliationResult


def record_contains(record: FinancialRecord, search: str) -> bool:
    """Case-insensitive substring search over the record's JSON rendering."""
    rendered = json.dumps(record.to_dict(), default=str, separators=(",", ":"), ensure_ascii=False)
    return search.lower() in rendered.lower()


def filter_result(
    result: ReconciliationResult,
    search: Optional[str] = None,
    min_confidence: float = 0.0,
) -> ReconciliationResult:
    """
    Filter the four collections of a result.

    - search: keep entries where the record (or either record of a pair)
      contains the text
    - min_confidence: applies to matches only
    """
    def hit(*records: FinancialRecord) -> bool:
        if not search:
            return True
        return any(record_contains(r, search) for r in records)

    return result.model_copy(update={
        "matches": [
            m for m in result.matches
            if m.confidence >= min_confidence and hit(m.record1, m.record2)
        ],
        "mismatches": [m for m in result.mismatches if hit(m.record1, m.record2)],
        "missing_in_dataset1": [r for r in result.missing_in_dataset1 if hit(r)],
        "missing_in_dataset2": [r for r in result.missing_in_dataset2 if hit(r)],
    })
