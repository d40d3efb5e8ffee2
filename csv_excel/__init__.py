"""
csv-excel: write CSV-style records into Excel workbooks.

This package provides record writers that accept one record (a sequence of
text fields) at a time, and place each record in a worksheet row instead of
a line of delimited text.

Architecture:
    - writers: the record-writer contract and its text/worksheet renditions
    - adapters: openpyxl workbook, worksheet and range handling
    - services: one-call exports built on the writers
"""

from csv_excel.exceptions import (
    CellRangeError,
    ConfigurationError,
    ExcelWriterError,
    SheetNotFoundError,
    WriteError,
    WriterClosedError,
)
from csv_excel.models import CellRange, CsvConfiguration, ExportResult
from csv_excel.writers import (
    CsvRecordWriter,
    RecordWriter,
    SheetRecordWriter,
    open_writer,
    sanitize_cell_text,
)

__version__ = "0.1.0"

__all__ = [
    "RecordWriter",
    "CsvRecordWriter",
    "SheetRecordWriter",
    "open_writer",
    "sanitize_cell_text",
    "CsvConfiguration",
    "CellRange",
    "ExportResult",
    "ExcelWriterError",
    "ConfigurationError",
    "WriterClosedError",
    "SheetNotFoundError",
    "CellRangeError",
    "WriteError",
]
