"""
Tests for the ExportService.

Tests one-call exports to paths, streams and caller-owned workbooks.
"""

import io
from pathlib import Path

import pytest
from openpyxl import Workbook

from csv_excel.exceptions.excel_exceptions import CellRangeError, ConfigurationError, WriteError
from csv_excel.services.export_service import ExportService


class FailingStream(io.BytesIO):
    """Binary stream whose writes always fail."""

    def write(self, data) -> int:
        raise OSError("disk full")


class TestExportServicePath:
    """Tests for exports to a file path."""

    def test_export_with_headers(
        self,
        export_service: ExportService,
        temp_dir: Path,
        sample_records: list[list[str]],
        read_back,
    ) -> None:
        """Test writing headers and records to a new file."""
        file_path = temp_dir / "export.xlsx"

        result = export_service.export(
            sample_records,
            file_path,
            headers=["Name", "Age", "Department"],
        )

        assert result.sheet_name == "Export"
        assert result.rows_written == 4
        assert result.file_path == str(file_path.absolute())
        assert result.file_size_bytes > 0
        assert result.processing_time_ms >= 0
        assert read_back(file_path, "Export") == [["Name", "Age", "Department"], *sample_records]

    def test_export_start_cell(
        self,
        export_service: ExportService,
        temp_dir: Path,
        read_back,
    ) -> None:
        """Test that start_cell moves the output."""
        file_path = temp_dir / "offset.xlsx"

        export_service.export([[1, 2]], file_path, sheet_name="Data", start_cell="B2")

        assert read_back(file_path, "Data") == [[None, None, None], [None, "1", "2"]]

    def test_invalid_start_cell(self, export_service: ExportService, temp_dir: Path) -> None:
        """Test that an invalid start cell raises CellRangeError."""
        with pytest.raises(CellRangeError):
            export_service.export([["a"]], temp_dir / "x.xlsx", start_cell="??")


class TestExportServiceOtherDestinations:
    """Tests for exports to streams and workbooks."""

    def test_export_to_stream(self, export_service: ExportService, read_back) -> None:
        """Test exporting to a binary stream."""
        stream = io.BytesIO()

        result = export_service.export([["a", "b"]], stream, sheet_name="S")

        assert result.file_path is None
        assert result.rows_written == 1
        assert read_back(stream, "S") == [["a", "b"]]

    def test_export_to_workbook(self, export_service: ExportService, workbook: Workbook) -> None:
        """Test exporting into a caller-owned workbook."""
        result = export_service.export([["a"], ["b"]], workbook, sheet_name="Data")

        assert result.rows_written == 2
        assert workbook["Data"]["A2"].value == "b"

    def test_save_failure_wrapped(self, export_service: ExportService) -> None:
        """Test that unexpected failures are reported as WriteError."""
        with pytest.raises(WriteError) as exc_info:
            export_service.export([["a"]], FailingStream())

        assert exc_info.value.error_code == "WRITE_ERROR"
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_configuration_error_passes_through(self, export_service: ExportService) -> None:
        """Test that writer errors are not wrapped."""
        with pytest.raises(ConfigurationError):
            export_service.export([["a"]], io.BytesIO(), configuration={"delimiter": ""})

    def test_failed_export_leaves_partial_file(
        self,
        export_service: ExportService,
        temp_dir: Path,
        read_back,
    ) -> None:
        """Test that rows written before a failure are still saved to the path."""
        file_path = temp_dir / "partial.xlsx"

        def records():
            yield ["a"]
            raise RuntimeError("source failed")

        with pytest.raises(WriteError):
            export_service.export(records(), file_path)

        assert read_back(file_path, "Export") == [["a"]]
