# tests/test_files.py

"""
Tests for CSV / Excel ingestion.
"""

import io
import pytest
from pathlib import Path
from openpyxl import Workbook

from app.integrations.files import (
    EmptyFileError,
    FileParseError,
    UnsupportedFileTypeError,
    parse_csv,
    parse_file,
    row_to_record,
)


FIXTURES = Path(__file__).parent / "fixtures"


def make_xlsx(rows: list[list]) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


# ============================================
# CSV Tests
# ============================================

class TestCsvParsing:
    """Test CSV parsing and column detection."""

    def test_common_columns_detected(self):
        content = (
            b"Transaction ID,Date,Amount,Description,Type\n"
            b"T-1,2024-01-01,100.50,Coffee,expense\n"
        )

        records = parse_csv(content)

        assert len(records) == 1
        record = records[0]
        assert record.id == "T-1"
        assert record.reference == "T-1"
        assert record.date == "2024-01-01"
        assert record.amount == 100.5
        assert record.description == "Coffee"
        assert record.category == "expense"

    def test_original_columns_kept(self):
        content = b"Transaction ID,Amount\nT-1,100.50\n"

        record = parse_csv(content)[0]

        assert record.extra == {"Transaction ID": "T-1", "Amount": "100.50"}

    def test_detected_field_not_shadowed_by_raw_column(self):
        record = parse_csv(b"id,amount\nA1,12.5\n")[0]

        assert record.amount == 12.5
        assert record.extra == {}

    def test_invalid_amount_becomes_zero(self):
        record = parse_csv(b"id,amount\nA1,abc\n")[0]

        assert record.amount == 0

    def test_id_synthesized_from_position(self):
        records = parse_csv(b"Date,Amount\n2024-01-01,5\n2024-01-02,6\n")

        assert [r.id for r in records] == ["record-1", "record-2"]
        assert [r.reference for r in records] == ["record-1", "record-2"]

    def test_blank_lines_skipped(self):
        records = parse_csv(b"id,amount\nA1,1\n\nA2,2\n")

        assert [r.id for r in records] == ["A1", "A2"]

    def test_first_id_column_wins(self):
        record = row_to_record({"Invoice ID": "INV-1", "Reference": "REF-9"}, 1)

        assert record.id == "INV-1"
        assert record.reference == "INV-1"

    def test_empty_id_falls_through(self):
        record = row_to_record({"Invoice ID": "", "Reference": "REF-9"}, 1)

        assert record.id == "REF-9"


# ============================================
# Excel Tests
# ============================================

class TestExcelParsing:
    """Test Excel parsing."""

    def test_first_sheet_parsed(self):
        content = make_xlsx([
            ["Reference", "Amount", "Notes"],
            ["R-1", 99.5, None],
            ["R-2", 10, "Refund"],
        ])

        records = parse_file("ledger.xlsx", content)

        assert [r.id for r in records] == ["R-1", "R-2"]
        assert records[0].amount == 99.5
        assert records[1].amount == 10
        assert records[1].description == "Refund"

    def test_empty_cells_omitted(self):
        content = make_xlsx([
            ["Reference", "Amount", "Notes"],
            ["R-1", 99.5, None],
            ["R-2", 10, "Refund"],
        ])

        record = parse_file("ledger.xlsx", content)[0]

        assert record.description is None
        assert "Notes" not in record.extra

    def test_legacy_xls_workbook(self):
        content = (FIXTURES / "ledger.xls").read_bytes()

        records = parse_file("ledger.xls", content)

        assert [r.id for r in records] == ["R-1", "R-2"]
        assert [r.reference for r in records] == ["R-1", "R-2"]
        assert records[0].amount == 99.5
        assert records[0].description is None
        assert records[1].amount == 10
        assert records[1].description == "Refund"
        assert list(records[1].extra) == ["Reference", "Amount", "Notes"]

    def test_corrupt_workbook(self):
        with pytest.raises(FileParseError):
            parse_file("broken.xlsx", b"not a workbook")


# ============================================
# Dispatch Tests
# ============================================

class TestParseFile:
    """Test extension dispatch and error reporting."""

    def test_extension_case_insensitive(self):
        records = parse_file("EXPORT.CSV", b"id,amount\nA1,1\n")

        assert len(records) == 1

    def test_unsupported_extension(self):
        with pytest.raises(UnsupportedFileTypeError) as exc:
            parse_file("notes.txt", b"id\nA1\n")

        assert str(exc.value) == "Unsupported file type. Please upload a CSV or Excel file."

    def test_empty_file(self):
        with pytest.raises(EmptyFileError):
            parse_file("empty.csv", b"")

    def test_header_only_file(self):
        with pytest.raises(EmptyFileError) as exc:
            parse_file("headers.csv", b"id,amount\n")

        assert str(exc.value) == "The file appears to be empty or has no valid data."

    def test_errors_are_value_errors(self):
        assert issubclass(FileParseError, ValueError)
        assert issubclass(UnsupportedFileTypeError, FileParseError)
        assert issubclass(EmptyFileError, FileParseError)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
