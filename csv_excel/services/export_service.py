"""
Export service layer.

This module provides the ExportService class, a one-call entry point for
writing a batch of records to a workbook. It opens a SheetRecordWriter for
the destination, writes an optional header and the records, closes the
writer, and reports what was written.

Example:
    service = ExportService()

    result = service.export(
        [["Alice", 30], ["Bob", 25]],
        "/path/to/output.xlsx",
        headers=["Name", "Age"],
    )
    print(f"{result.rows_written} rows in {result.processing_time_ms} ms")
"""

import logging
import os
import time
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from openpyxl import Workbook

from csv_excel.adapters.openpyxl_adapter import OpenpyxlAdapter
from csv_excel.exceptions.excel_exceptions import ExcelWriterError, WriteError
from csv_excel.models.configuration import CsvConfiguration
from csv_excel.models.excel_models import ExportResult
from csv_excel.writers import open_writer

logger = logging.getLogger(__name__)


class ExportService:
    """
    Service for exporting record batches to Excel.

    Destinations may be a file path, a writable binary stream, or an
    openpyxl Workbook owned by the caller (which is written to but not
    saved).

    Attributes:
        adapter: OpenpyxlAdapter used to parse start cells.
    """

    def __init__(self, adapter: OpenpyxlAdapter | None = None) -> None:
        """
        Initialize the ExportService.

        Args:
            adapter: Optional OpenpyxlAdapter instance.
                     If None, creates a new instance.
        """
        self.adapter = adapter or OpenpyxlAdapter()

    def export(
        self,
        records: Iterable[Iterable[Any]],
        destination: Any,
        sheet_name: str | None = None,
        headers: list[str] | None = None,
        start_cell: str = "A1",
        configuration: CsvConfiguration | Mapping[str, Any] | None = None,
    ) -> ExportResult:
        """
        Write records to a destination workbook.

        The writer saves on close even when writing fails, so a failed export
        to a path or stream may leave a partially written workbook at the
        destination. Nothing is rolled back.

        Args:
            records: Rows of values; each row becomes one worksheet row.
            destination: File path, binary stream, or openpyxl Workbook.
            sheet_name: Sheet to write to. Defaults to "Export".
            headers: Optional header record written before the data.
            start_cell: Top-left cell of the output (A1 notation).
            configuration: Writer options.

        Returns:
            ExportResult describing the export.

        Raises:
            ConfigurationError: If the configuration or destination is invalid.
            CellRangeError: If start_cell is invalid.
            WriteError: If writing or saving fails.
        """
        start_time = time.time()
        anchor = self.adapter.parse_range(start_cell)
        label = self._describe(destination)

        try:
            writer = open_writer(destination, sheet_name, configuration)
            with writer:
                writer.row_offset = anchor.start_row - 1
                writer.column_offset = anchor.start_col - 1
                if headers:
                    writer.write_header(headers)
                writer.writerows(records)

            processing_time = (time.time() - start_time) * 1000

        except ExcelWriterError:
            raise
        except Exception as e:
            raise WriteError(
                destination=label,
                operation="export",
                reason=str(e),
            ) from e

        file_path = None
        file_size = None
        if isinstance(destination, (str, os.PathLike)):
            path = Path(destination)
            file_path = str(path.absolute())
            file_size = path.stat().st_size if path.exists() else None

        logger.debug(f"Exported {writer.row_count} row(s) to {label}")

        return ExportResult(
            sheet_name=writer.worksheet.title,
            rows_written=writer.row_count,
            file_path=file_path,
            file_size_bytes=file_size,
            processing_time_ms=round(processing_time, 2),
        )

    def _describe(self, destination: Any) -> str:
        if isinstance(destination, (str, os.PathLike)):
            return os.fspath(destination)
        if isinstance(destination, Workbook):
            return "<workbook>"
        return "<stream>"
