# app/integrations/files.py

"""
CSV / Excel file ingestion.

Turns an uploaded spreadsheet into FinancialRecords the engine can compare:
- Detects common columns (id, date, amount, ...) from header names
- Coerces amount-like columns to numbers
- Keeps every original column alongside the detected fields
- Guarantees every record has an id and reference
"""

from typing import Any
import io
import logging

import pandas as pd

from app.core.normalizers import normalize_header, parse_amount
from app.models import FinancialRecord, KNOWN_FIELDS

logger = logging.getLogger(__name__)

CSV_EXTENSIONS = ("csv",)
EXCEL_EXTENSIONS = ("xlsx", "xls")


# ============================================
# Errors
# ============================================

class FileParseError(ValueError):
    """An uploaded file could not be turned into records."""


class UnsupportedFileTypeError(FileParseError):
    def __init__(self, message: str = "Unsupported file type. Please upload a CSV or Excel file."):
        super().__init__(message)


class EmptyFileError(FileParseError):
    def __init__(self, message: str = "The file appears to be empty or has no valid data."):
        super().__init__(message)


# ============================================
# Parsing
# ============================================

def parse_csv(content: bytes) -> list[FinancialRecord]:
    """Parse CSV bytes (header row first). Every cell is read as text."""
    try:
        df = pd.read_csv(
            io.BytesIO(content),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        raise EmptyFileError()
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise FileParseError(f"Failed to read CSV file: {e}")

    return _records_from_rows(df.to_dict(orient="records"))


def parse_excel(content: bytes, extension: str = "xlsx") -> list[FinancialRecord]:
    """Parse the first worksheet of an Excel workbook."""
    engine = "xlrd" if extension == "xls" else "openpyxl"
    try:
        df = pd.read_excel(io.BytesIO(content), sheet_name=0, engine=engine)
    except Exception as e:
        raise FileParseError(f"Failed to read Excel file: {e}")

    rows = [
        {key: value for key, value in row.items() if not _is_blank_cell(value)}
        for row in df.to_dict(orient="records")
    ]
    return _records_from_rows(rows)


def parse_file(filename: str, content: bytes) -> list[FinancialRecord]:
    """
    Parse an uploaded file based on its extension.

    Raises UnsupportedFileTypeError for anything other than csv/xlsx/xls,
    and EmptyFileError when no records come out.
    """
    extension = (filename or "").rsplit(".", 1)[-1].lower()

    if extension in CSV_EXTENSIONS:
        records = parse_csv(content)
    elif extension in EXCEL_EXTENSIONS:
        records = parse_excel(content, extension)
    else:
        logger.warning(f"Rejected upload {filename!r}: unsupported extension")
        raise UnsupportedFileTypeError()

    if not records:
        raise EmptyFileError()

    logger.info(f"Parsed {len(records)} records from {filename}")
    return records


# ============================================
# Row -> Record mapping
# ============================================

def row_to_record(row: dict[str, Any], position: int) -> FinancialRecord:
    """
    Map one parsed row to a FinancialRecord.

    `position` is the 1-based row number, used to synthesize an id when
    the row has neither an id nor a reference column.
    """
    fields: dict[str, Any] = {}
    extra: dict[str, Any] = {}

    for key, value in row.items():
        header = normalize_header(key)

        if "id" in header or "reference" in header:
            fields["id"] = fields.get("id") or value
            fields["reference"] = fields.get("reference") or value
        if "date" in header:
            fields["date"] = value
        if "amount" in header or "value" in header or "price" in header:
            fields["amount"] = parse_amount(value)
        if "description" in header or "details" in header or "note" in header:
            fields["description"] = value
        if "category" in header or "type" in header:
            fields["category"] = value

        # Keep the original column too, unless it would shadow a detected field
        if key not in KNOWN_FIELDS:
            extra[str(key)] = value

    if not fields.get("id") and not fields.get("reference"):
        fields["id"] = f"record-{position}"
        fields["reference"] = f"record-{position}"

    return FinancialRecord.from_mapping({**fields, **extra})


def _records_from_rows(rows: list[dict[str, Any]]) -> list[FinancialRecord]:
    return [row_to_record(row, index + 1) for index, row in enumerate(rows)]


def _is_blank_cell(value: Any) -> bool:
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False
