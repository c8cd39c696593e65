# app/core/matching.py

"""
Core record reconciliation engine.

Pairs records from two independently sourced datasets with a greedy
best-candidate scan: each dataset 1 record, in order, takes the
highest-confidence acceptable dataset 2 record still available. Ties go
to the earliest dataset 2 record. This is not a global optimum, and
results depend on input order.
"""

from datetime import datetime
from typing import Any, Iterable, Mapping, Optional, Union
import logging
import math

from app.models import (
    FinancialRecord,
    MatchResult,
    MismatchResult,
    PairEvaluation,
    ReconciliationConfig,
    ReconciliationResult,
    ReconciliationSummary,
)
from app.core.confidence import find_matching_fields
from app.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

KEY_FIELDS = ("id", "reference")

RecordLike = Union[FinancialRecord, Mapping[str, Any]]


def default_config() -> ReconciliationConfig:
    """Thresholds from application settings."""
    return ReconciliationConfig(
        field_match_threshold=settings.field_match_threshold,
        pairing_confidence_threshold=settings.pairing_confidence_threshold,
    )


def is_same_transaction(
    evaluation: PairEvaluation,
    config: ReconciliationConfig,
) -> bool:
    """
    Decide from a pair evaluation whether two records are the same transaction.

    Accepted if:
    1. Confidence meets the pairing threshold, OR
    2. A key field (id/reference) matched plus at least one other field
    """
    has_key_match = any(f in KEY_FIELDS for f in evaluation.matched_fields)
    has_multiple_matches = len(evaluation.matched_fields) >= 2

    return (
        evaluation.confidence >= config.pairing_confidence_threshold
        or (has_key_match and has_multiple_matches)
    )


def are_records_likely_same(
    record1: FinancialRecord,
    record2: FinancialRecord,
    config: Optional[ReconciliationConfig] = None,
) -> bool:
    """Check if two records likely represent the same transaction."""
    if config is None:
        config = default_config()

    evaluation = find_matching_fields(record1, record2, config.field_match_threshold)
    return is_same_transaction(evaluation, config)


def reconcile(
    dataset1: Iterable[RecordLike],
    dataset2: Iterable[RecordLike],
    config: Optional[ReconciliationConfig] = None,
) -> ReconciliationResult:
    """
    Main reconciliation function.

    1. For each dataset 1 record, scan every unpaired dataset 2 record
    2. Keep the acceptable candidate with the highest confidence
    3. Pair them: a match when no field differs, otherwise a mismatch
    4. Everything left unpaired is missing from the other side
    """
    start_time = datetime.now()

    if config is None:
        config = default_config()

    records1 = [_as_record(r) for r in dataset1]
    records2 = [_as_record(r) for r in dataset2]

    matches: list[MatchResult] = []
    mismatches: list[MismatchResult] = []

    # Track what's been paired
    matched_indices1: set[int] = set()
    matched_indices2: set[int] = set()

    for i, record1 in enumerate(records1):
        if i in matched_indices1:
            continue

        best_match: Optional[tuple[int, PairEvaluation]] = None

        for j, record2 in enumerate(records2):
            if j in matched_indices2:
                continue

            evaluation = find_matching_fields(record1, record2, config.field_match_threshold)

            if is_same_transaction(evaluation, config):
                if best_match is None or evaluation.confidence > best_match[1].confidence:
                    best_match = (j, evaluation)

        if best_match is None:
            continue

        j, evaluation = best_match

        if not evaluation.differences:
            matches.append(MatchResult(
                record1=record1,
                record2=records2[j],
                confidence=evaluation.confidence,
                matched_fields=evaluation.matched_fields,
            ))
        else:
            mismatches.append(MismatchResult(
                record1=record1,
                record2=records2[j],
                differences=evaluation.differences,
            ))

        matched_indices1.add(i)
        matched_indices2.add(j)
        logger.debug(
            f"Paired dataset1[{i}] with dataset2[{j}] "
            f"(confidence {evaluation.confidence:.3f}, {len(evaluation.differences)} differences)"
        )

    # Unpaired dataset 2 records are what dataset 1 is missing, and vice versa
    missing_in_dataset1 = [r for j, r in enumerate(records2) if j not in matched_indices2]
    missing_in_dataset2 = [r for i, r in enumerate(records1) if i not in matched_indices1]

    match_rate = (len(matches) / len(records1) * 100) if records1 else 0

    summary = ReconciliationSummary(
        total_records1=len(records1),
        total_records2=len(records2),
        total_matches=len(matches),
        total_mismatches=len(mismatches),
        total_missing_in1=len(missing_in_dataset1),
        total_missing_in2=len(missing_in_dataset2),
        match_rate=math.floor(match_rate * 100 + 0.5) / 100,
    )

    duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
    logger.info(
        f"Reconciled {len(records1)} against {len(records2)} records in {duration_ms}ms: "
        f"{summary.total_matches} matches, {summary.total_mismatches} mismatches, "
        f"match rate {summary.match_rate}%"
    )

    return ReconciliationResult(
        matches=matches,
        mismatches=mismatches,
        missing_in_dataset1=missing_in_dataset1,
        missing_in_dataset2=missing_in_dataset2,
        summary=summary,
    )


def _as_record(record: RecordLike) -> FinancialRecord:
    if isinstance(record, FinancialRecord):
        return record
    return FinancialRecord.from_mapping(record)
