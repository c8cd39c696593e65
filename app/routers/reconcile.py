# app/routers/reconcile.py

"""
Reconciliation routes.

The main endpoints that run the matching engine, either on records sent
as JSON or on two uploaded CSV / Excel files.
"""

from typing import Optional
import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from app.core.filtering import filter_result
from app.core.matching import reconcile
from app.dependencies import (
    ResultFilters,
    build_config,
    get_result_filters,
    get_upload_config,
)
from app.integrations.files import FileParseError, parse_file
from app.models import FinancialRecord, ReconciliationConfig, ReconciliationResult
from app.config import get_settings

settings = get_settings()
router = APIRouter()
logger = logging.getLogger(__name__)


class ReconcileRequest(BaseModel):
    dataset1: list[FinancialRecord]
    dataset2: list[FinancialRecord]
    config: Optional[ReconciliationConfig] = None


class ParseResponse(BaseModel):
    success: bool
    filename: str
    record_count: int
    records: list[FinancialRecord]


# ============================================
# Reconcile JSON Records
# ============================================

@router.post("/reconcile", response_model=ReconciliationResult)
async def run_reconciliation(
    request: ReconcileRequest,
    filters: ResultFilters = Depends(get_result_filters),
):
    """
    Reconcile two datasets of already-parsed records.

    1. Checks both datasets are non-empty
    2. Runs the matching engine off the event loop
    3. Applies optional search / confidence filters to the response
    """
    if not request.dataset1 or not request.dataset2:
        raise HTTPException(
            status_code=400,
            detail="Please upload both datasets before reconciling",
        )

    config = request.config or build_config()
    result = await run_in_threadpool(reconcile, request.dataset1, request.dataset2, config)

    return filter_result(result, filters.search, filters.min_confidence)


# ============================================
# Reconcile Uploaded Files
# ============================================

@router.post("/reconcile/upload", response_model=ReconciliationResult)
async def run_file_reconciliation(
    file1: UploadFile = File(..., description="Dataset 1 (CSV or Excel)"),
    file2: UploadFile = File(..., description="Dataset 2 (CSV or Excel)"),
    config: ReconciliationConfig = Depends(get_upload_config),
    filters: ResultFilters = Depends(get_result_filters),
):
    """
    Parse two uploaded files and reconcile them.

    Each file must be CSV, XLSX or XLS and contain at least one row.
    """
    dataset1 = await _parse_upload(file1)
    dataset2 = await _parse_upload(file2)

    result = await run_in_threadpool(reconcile, dataset1, dataset2, config)

    return filter_result(result, filters.search, filters.min_confidence)


# ============================================
# Parse Preview
# ============================================

@router.post("/parse", response_model=ParseResponse)
async def parse_upload(file: UploadFile = File(..., description="CSV or Excel file")):
    """Parse a single file and return its records, e.g. for a preview table."""
    records = await _parse_upload(file)

    return ParseResponse(
        success=True,
        filename=file.filename or "",
        record_count=len(records),
        records=records,
    )


async def _parse_upload(file: UploadFile) -> list[FinancialRecord]:
    """Read and parse one upload, mapping failures to HTTP errors."""
    content = await file.read(settings.max_upload_bytes + 1)

    if len(content) > settings.max_upload_bytes:
        logger.warning(f"Rejected upload {file.filename!r}: over {settings.max_upload_bytes} bytes")
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size is {settings.max_upload_bytes // (1024 * 1024)}MB",
        )

    try:
        return await run_in_threadpool(parse_file, file.filename or "", content)
    except FileParseError as e:
        raise HTTPException(status_code=400, detail=str(e))
