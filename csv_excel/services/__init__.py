"""
Service layer for record exports.

Contains one-call export operations built on the record writers.
"""

from csv_excel.services.export_service import ExportService

__all__ = [
    "ExportService",
]
