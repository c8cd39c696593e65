# app/models/result.py

from typing import Any
from pydantic import BaseModel, ConfigDict, Field

from app.models.record import FinancialRecord


# ============================================
# Configuration
# ============================================

class ReconciliationConfig(BaseModel):
    """Tunable thresholds for one reconciliation run."""

    field_match_threshold: float = Field(
        0.9, ge=0, le=1, description="Similarity at or above which a field counts as matched"
    )
    pairing_confidence_threshold: float = Field(
        0.8, ge=0, le=1, description="Confidence at or above which a pair is accepted"
    )


# ============================================
# Pair Evaluation
# ============================================

class FieldDifference(BaseModel):
    """A shared field whose values did not meet the match threshold."""

    model_config = ConfigDict(frozen=True)

    field: str
    value1: Any
    value2: Any


class PairEvaluation(BaseModel):
    """Outcome of comparing two records field by field."""

    model_config = ConfigDict(frozen=True)

    confidence: float = Field(ge=0, le=1)
    matched_fields: list[str] = Field(default_factory=list)
    differences: list[FieldDifference] = Field(default_factory=list)


# ============================================
# Reconciliation Output
# ============================================

class MatchResult(BaseModel):
    """A pair of records that agree on every shared field."""

    model_config = ConfigDict(frozen=True)

    record1: FinancialRecord
    record2: FinancialRecord
    confidence: float
    matched_fields: list[str]


class MismatchResult(BaseModel):
    """A pair judged to be the same transaction, with field-level differences."""

    model_config = ConfigDict(frozen=True)

    record1: FinancialRecord
    record2: FinancialRecord
    differences: list[FieldDifference]


class ReconciliationSummary(BaseModel):
    """Counts for a reconciliation run."""

    model_config = ConfigDict(frozen=True)

    total_records1: int
    total_records2: int
    total_matches: int
    total_mismatches: int
    total_missing_in1: int
    total_missing_in2: int
    match_rate: float


class ReconciliationResult(BaseModel):
    """
    Result of a reconciliation run.

    Note the bucket naming: `missing_in_dataset1` holds unpaired records
    that came from dataset 2 (they are what dataset 1 lacks), and
    `missing_in_dataset2` holds unpaired records from dataset 1.
    """

    model_config = ConfigDict(frozen=True)

    matches: list[MatchResult] = Field(default_factory=list)
    mismatches: list[MismatchResult] = Field(default_factory=list)
    missing_in_dataset1: list[FinancialRecord] = Field(default_factory=list)
    missing_in_dataset2: list[FinancialRecord] = Field(default_factory=list)
    summary: ReconciliationSummary
