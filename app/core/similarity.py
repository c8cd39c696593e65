# app/core/similarity.py

"""
Value similarity scoring.

Every score is in [0, 1]:
- 1.0 when the normalized values are equal
- normalized Levenshtein similarity when both are text
- 0 otherwise (e.g. a number against a string)
"""

from typing import Any

from app.core.normalizers import normalize_value


def calculate_similarity(value1: Any, value2: Any) -> float:
    """Calculate similarity between two raw field values."""
    norm1 = normalize_value(value1)
    norm2 = normalize_value(value2)

    if norm1 == norm2:
        return 1.0

    if isinstance(norm1, str) and isinstance(norm2, str):
        if len(norm1) > len(norm2):
            longer, shorter = norm1, norm2
        else:
            longer, shorter = norm2, norm1

        if len(longer) == 0:
            return 1.0

        return (len(longer) - edit_distance(longer, shorter)) / len(longer)

    return 0.0


def edit_distance(str1: str, str2: str) -> int:
    """
    Levenshtein distance between two strings.

    Insertion, deletion and substitution each cost 1. The table has
    len(str2) + 1 rows and len(str1) + 1 columns.
    """
    matrix = [[i] + [0] * len(str1) for i in range(len(str2) + 1)]
    for j in range(len(str1) + 1):
        matrix[0][j] = j

    for i in range(1, len(str2) + 1):
        for j in range(1, len(str1) + 1):
            if str2[i - 1] == str1[j - 1]:
                matrix[i][j] = matrix[i - 1][j - 1]
            else:
                matrix[i][j] = min(
                    matrix[i - 1][j - 1] + 1,
                    matrix[i][j - 1] + 1,
                    matrix[i - 1][j] + 1,
                )

    return matrix[len(str2)][len(str1)]
