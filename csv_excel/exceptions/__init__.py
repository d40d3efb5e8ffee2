"""
Custom exceptions for the record writers.

Provides type-safe, descriptive exceptions for error handling throughout
the package.
"""

from csv_excel.exceptions.excel_exceptions import (
    CellRangeError,
    ConfigurationError,
    ExcelWriterError,
    SheetNotFoundError,
    WriteError,
    WriterClosedError,
)

__all__ = [
    "ExcelWriterError",
    "ConfigurationError",
    "WriterClosedError",
    "SheetNotFoundError",
    "CellRangeError",
    "WriteError",
]
