# app/core/confidence.py

"""
Confidence scoring for record pairs.

Confidence is the mean similarity over every field present in both
records (0-1). Priority fields are compared first, in this order:
- id
- reference
- date
- amount
- description
then every other shared field in the order the first record holds them.
"""

from app.models import FieldDifference, FinancialRecord, PairEvaluation
from app.core.similarity import calculate_similarity
from app.config import get_settings

settings = get_settings()

PRIORITY_FIELDS = ("id", "reference", "date", "amount", "description")


def find_matching_fields(
    record1: FinancialRecord,
    record2: FinancialRecord,
    field_match_threshold: float = None,
) -> PairEvaluation:
    """
    Compare two records field by field.

    Returns a PairEvaluation with the mean confidence, the fields that met
    the match threshold and a difference entry for every other shared field.
    Fields present on only one side are ignored.
    """
    if field_match_threshold is None:
        field_match_threshold = settings.field_match_threshold

    fields1 = record1.fields()
    fields2 = record2.fields()

    priority = [f for f in PRIORITY_FIELDS if f in fields1 and f in fields2]
    others = [f for f in fields1 if f in fields2 and f not in PRIORITY_FIELDS]

    matched_fields: list[str] = []
    differences: list[FieldDifference] = []
    total_similarity = 0.0

    for field in priority + others:
        value1 = fields1[field]
        value2 = fields2[field]
        similarity = calculate_similarity(value1, value2)
        total_similarity += similarity

        if similarity >= field_match_threshold:
            matched_fields.append(field)
        else:
            differences.append(FieldDifference(field=field, value1=value1, value2=value2))

    field_count = len(priority) + len(others)
    confidence = total_similarity / field_count if field_count > 0 else 0.0

    return PairEvaluation(
        confidence=confidence,
        matched_fields=matched_fields,
        differences=differences,
    )
