"""
Data models for the record writers.

Contains Pydantic models for configuration, target ranges and export results.
"""

from csv_excel.models.configuration import CsvConfiguration
from csv_excel.models.excel_models import CellRange, ExportResult

__all__ = [
    "CsvConfiguration",
    "CellRange",
    "ExportResult",
]
