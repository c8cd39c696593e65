# app/dependencies.py

"""
Shared request dependencies for FastAPI.

Builds the reconciliation thresholds and result filters from request
parameters, falling back to application settings.
"""

from typing import Optional
from fastapi import Form, Query
from pydantic import BaseModel

from app.core.matching import default_config
from app.models import ReconciliationConfig


class ResultFilters(BaseModel):
    search: Optional[str] = None
    min_confidence: float = 0.0


def build_config(
    field_match_threshold: Optional[float] = None,
    pairing_confidence_threshold: Optional[float] = None,
) -> ReconciliationConfig:
    """Thresholds for a run: explicit values win over settings."""
    overrides = {
        "field_match_threshold": field_match_threshold,
        "pairing_confidence_threshold": pairing_confidence_threshold,
    }
    return default_config().model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )


def get_upload_config(
    field_match_threshold: Optional[float] = Form(None, ge=0, le=1),
    pairing_confidence_threshold: Optional[float] = Form(None, ge=0, le=1),
) -> ReconciliationConfig:
    """Thresholds sent as multipart form fields alongside uploaded files."""
    return build_config(field_match_threshold, pairing_confidence_threshold)


def get_result_filters(
    search: Optional[str] = Query(None, description="Case-insensitive text search"),
    min_confidence: float = Query(0.0, ge=0, le=1, description="Minimum match confidence"),
) -> ResultFilters:
    return ResultFilters(search=search, min_confidence=min_confidence)
