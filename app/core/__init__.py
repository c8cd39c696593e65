# app/core/__init__.py

from app.core.matching import reconcile, are_records_likely_same, is_same_transaction
from app.core.confidence import find_matching_fields
from app.core.similarity import calculate_similarity, edit_distance
from app.core.filtering import filter_result
from app.core.normalizers import (
    normalize_value,
    normalize_header,
    parse_amount,
)

__all__ = [
    "reconcile",
    "are_records_likely_same",
    "is_same_transaction",
    "find_matching_fields",
    "calculate_similarity",
    "edit_distance",
    "filter_result",
    "normalize_value",
    "normalize_header",
    "parse_amount",
]
