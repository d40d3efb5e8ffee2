"""
Adapters for spreadsheet library operations.

- OpenpyxlAdapter: workbook, worksheet and range handling using openpyxl
"""

from csv_excel.adapters.openpyxl_adapter import OpenpyxlAdapter

__all__ = [
    "OpenpyxlAdapter",
]
