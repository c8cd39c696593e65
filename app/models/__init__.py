# app/models/__init__.py

from app.models.record import (
    FinancialRecord,
    KNOWN_FIELDS,
)
from app.models.result import (
    ReconciliationConfig,
    FieldDifference,
    PairEvaluation,
    MatchResult,
    MismatchResult,
    ReconciliationSummary,
    ReconciliationResult,
)

__all__ = [
    # Record
    "FinancialRecord",
    "KNOWN_FIELDS",
    # Result
    "ReconciliationConfig",
    "FieldDifference",
    "PairEvaluation",
    "MatchResult",
    "MismatchResult",
    "ReconciliationSummary",
    "ReconciliationResult",
]
