"""
Test fixtures and utilities for the record writer tests.

This module provides shared fixtures including temporary directories,
sample records, workbooks and a helper for reading written output back.
"""

import io
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from openpyxl import Workbook, load_workbook

from csv_excel.adapters.openpyxl_adapter import OpenpyxlAdapter
from csv_excel.services.export_service import ExportService


@pytest.fixture
def openpyxl_adapter() -> OpenpyxlAdapter:
    """Create an OpenpyxlAdapter instance for testing."""
    return OpenpyxlAdapter()


@pytest.fixture
def export_service() -> ExportService:
    """Create an ExportService instance for testing."""
    return ExportService()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def workbook() -> Workbook:
    """Return a caller-owned workbook with a single "Data" sheet."""
    wb = Workbook()
    wb.active.title = "Data"
    return wb


@pytest.fixture
def existing_workbook_file(temp_dir: Path) -> Path:
    """
    Create an Excel file that already holds a populated "Summary" sheet.

    Returns:
        Path to the Excel file.
    """
    file_path = temp_dir / "existing.xlsx"

    wb = Workbook()
    ws = wb.active
    ws.title = "Summary"
    ws["A1"] = "Total"
    ws["B1"] = 42
    wb.save(file_path)

    return file_path


@pytest.fixture
def sample_records() -> list[list[str]]:
    """
    Return sample records for write tests.

    Returns:
        List of records with text fields.
    """
    return [
        ["Alice", "30", "Engineering"],
        ["Bob", "25", "Marketing"],
        ["Charlie", "35", "Sales"],
    ]


@pytest.fixture
def read_back():
    """Return a helper that loads a saved workbook and lists a sheet's values row by row."""

    def _read_back(source: Path | io.BytesIO, sheet_name: str) -> list[list]:
        if isinstance(source, io.BytesIO):
            source.seek(0)
        wb = load_workbook(source)
        return [list(row) for row in wb[sheet_name].iter_rows(values_only=True)]

    return _read_back
