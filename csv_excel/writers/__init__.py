"""
Record writers.

- RecordWriter: base record-writer contract
- CsvRecordWriter: delimited text output using the csv module
- SheetRecordWriter: worksheet output using openpyxl
"""

import os
from collections.abc import Mapping
from typing import Any

from openpyxl import Workbook

from csv_excel.exceptions.excel_exceptions import ConfigurationError
from csv_excel.models.configuration import CsvConfiguration
from csv_excel.writers.base import RecordWriter
from csv_excel.writers.csv_writer import CsvRecordWriter
from csv_excel.writers.sheet_writer import SheetRecordWriter, sanitize_cell_text


def open_writer(
    destination: Any,
    sheet_name: str | None = None,
    configuration: CsvConfiguration | Mapping[str, Any] | None = None,
) -> SheetRecordWriter:
    """
    Open a SheetRecordWriter for a path, a workbook or a binary stream.

    Args:
        destination: File path, openpyxl Workbook, or writable binary stream.
        sheet_name: Sheet to write to. Defaults to "Export".
        configuration: Writer options.

    Raises:
        ConfigurationError: If the destination type is not supported.
    """
    if isinstance(destination, Workbook):
        return SheetRecordWriter.for_workbook(destination, sheet_name, configuration)
    if isinstance(destination, (str, os.PathLike)):
        return SheetRecordWriter.to_path(destination, sheet_name, configuration)
    if hasattr(destination, "write"):
        return SheetRecordWriter.to_stream(destination, sheet_name, configuration)
    raise ConfigurationError(
        reason=f"unsupported destination type: {type(destination).__name__}",
    )


__all__ = [
    "RecordWriter",
    "CsvRecordWriter",
    "SheetRecordWriter",
    "sanitize_cell_text",
    "open_writer",
]
