"""
Openpyxl adapter for workbook handling.

This module provides the OpenpyxlAdapter class that wraps the parts of
openpyxl a record writer needs: creating or loading a workbook, finding or
adding a worksheet, resolving a target cell range, and saving the workbook
to a path or a binary stream.

Supported formats:
    - .xlsx (Excel 2007+)
    - .xlsm (Excel Macro-Enabled)

Example:
    adapter = OpenpyxlAdapter()

    workbook = adapter.create_workbook("Export")
    worksheet = adapter.get_or_add_worksheet(workbook, "Export")
    target = adapter.parse_range("B2:D10")
    adapter.save(workbook, "/path/to/output.xlsx")
"""

import logging
import os
from pathlib import Path
from typing import IO, Any

from openpyxl import Workbook, load_workbook
from openpyxl.utils.cell import range_boundaries, range_to_tuple
from openpyxl.worksheet.cell_range import CellRange as OpenpyxlCellRange
from openpyxl.worksheet.worksheet import Worksheet

from csv_excel.exceptions.excel_exceptions import CellRangeError, ConfigurationError
from csv_excel.models.configuration import validate_sheet_name
from csv_excel.models.excel_models import CellRange

logger = logging.getLogger(__name__)


class OpenpyxlAdapter:
    """
    Adapter for the openpyxl operations used by the record writers.

    Attributes:
        SUPPORTED_EXTENSIONS: Tuple of file extensions that may be loaded.
    """

    SUPPORTED_EXTENSIONS = (".xlsx", ".xlsm")

    # ==================== WORKBOOKS ====================

    def create_workbook(self, sheet_name: str | None = None) -> Workbook:
        """
        Create an empty workbook.

        openpyxl always starts a new workbook with a sheet called "Sheet".
        It is removed unless it already carries the requested name, so the
        saved file contains only the sheets the writer adds.

        Args:
            sheet_name: Name of the sheet the caller is about to write to.

        Returns:
            New Workbook instance.
        """
        workbook = Workbook()
        if workbook.active is not None:
            default_sheet = workbook.active
            if default_sheet.title != sheet_name:
                workbook.remove(default_sheet)
        return workbook

    def open_workbook(self, file_path: str | os.PathLike, sheet_name: str | None = None) -> Workbook:
        """
        Load the workbook stored at a path, or create one if the file is missing.

        Args:
            file_path: Path to the Excel file.
            sheet_name: Name of the sheet the caller is about to write to.

        Returns:
            Workbook instance.

        Raises:
            ConfigurationError: If an existing file has an unsupported extension.
        """
        path = Path(file_path)

        if not path.exists():
            logger.debug(f"No workbook at {path}, creating a new one")
            return self.create_workbook(sheet_name)

        if path.suffix.lower() not in self.SUPPORTED_EXTENSIONS:
            raise ConfigurationError(
                reason=f"Unsupported file extension: {path.suffix}",
            )

        logger.debug(f"Loading existing workbook from {path}")
        return load_workbook(str(path))

    def save(self, workbook: Workbook, destination: str | os.PathLike | IO[bytes]) -> None:
        """
        Save a workbook to a path or a binary stream.

        Streams are flushed after saving and left open. Any error raised by
        openpyxl or the stream propagates unchanged.

        Args:
            workbook: Workbook to save.
            destination: File path or writable binary stream.
        """
        if isinstance(destination, (str, os.PathLike)):
            logger.debug(f"Saving workbook to {destination}")
            workbook.save(os.fspath(destination))
            return

        logger.debug("Saving workbook to stream")
        workbook.save(destination)
        destination.flush()

    def release(self, workbook: Workbook) -> None:
        """Close a workbook and any archive it holds open."""
        workbook.close()

    # ==================== WORKSHEETS ====================

    def check_workbook(self, workbook: Workbook) -> Workbook:
        """
        Ensure a value is an openpyxl Workbook.

        Raises:
            ConfigurationError: If it is anything else.
        """
        if not isinstance(workbook, Workbook):
            raise ConfigurationError(
                reason=f"expected an openpyxl Workbook, got {type(workbook).__name__}",
            )
        return workbook

    def get_or_add_worksheet(self, workbook: Workbook, sheet_name: str) -> Worksheet:
        """
        Get a worksheet by name, adding it to the workbook if absent.

        Args:
            workbook: Workbook to search.
            sheet_name: Name of the worksheet.

        Returns:
            The existing or newly created Worksheet.

        Raises:
            ConfigurationError: If workbook is not a Workbook or the name is not
                a valid sheet title.
        """
        self.check_workbook(workbook)
        if sheet_name in workbook.sheetnames:
            return workbook[sheet_name]

        try:
            validate_sheet_name(sheet_name)
        except ValueError as e:
            raise ConfigurationError(reason=str(e)) from e

        logger.debug(f"Adding worksheet {sheet_name!r}")
        return workbook.create_sheet(sheet_name)

    def check_worksheet(self, workbook: Workbook, worksheet: Worksheet) -> Worksheet:
        """
        Ensure a worksheet belongs to a workbook.

        Raises:
            ConfigurationError: If either argument has the wrong type or the
                worksheet is owned by another workbook.
        """
        self.check_workbook(workbook)
        if not isinstance(worksheet, Worksheet):
            raise ConfigurationError(
                reason=f"expected an openpyxl Worksheet, got {type(worksheet).__name__}",
            )
        if worksheet.parent is not workbook:
            raise ConfigurationError(
                reason=f"Worksheet {worksheet.title!r} does not belong to the given workbook",
            )
        return worksheet

    # ==================== RANGES ====================

    def parse_range(self, cell_range: Any) -> CellRange:
        """
        Convert a range specification into a CellRange.

        Supports:
        - "B2" (single cell, used as an anchor)
        - "B2:D10" (range)
        - "'Data'!B2:D10" or "Data!B2:D10" (sheet-qualified range)
        - openpyxl CellRange objects
        - CellRange models (returned as is)

        Args:
            cell_range: The range to convert.

        Returns:
            CellRange with 1-based coordinates.

        Raises:
            CellRangeError: If the range cannot be parsed.
        """
        if isinstance(cell_range, CellRange):
            return cell_range

        if isinstance(cell_range, OpenpyxlCellRange):
            return CellRange(
                start_row=cell_range.min_row,
                start_col=cell_range.min_col,
                end_row=cell_range.max_row,
                end_col=cell_range.max_col,
                sheet_name=cell_range.title,
                a1_notation=cell_range.coord,
            )

        if not isinstance(cell_range, str):
            raise CellRangeError(
                cell_range=repr(cell_range),
                reason="Expected an A1 string or a cell range object",
            )

        text = cell_range.strip()
        if not text:
            raise CellRangeError(cell_range=cell_range, reason="Range is empty")

        sheet_name = None
        try:
            if "!" in text:
                sheet_name, bounds = range_to_tuple(text)
                sheet_name = sheet_name.replace("''", "'")
                coord = text.rsplit("!", 1)[1]
            else:
                bounds = range_boundaries(text)
                coord = text
        except (ValueError, TypeError) as e:
            raise CellRangeError(
                cell_range=cell_range,
                reason="Invalid A1 notation format. Expected format: 'A1' or 'A1:C10'",
            ) from e

        # Whole-column or whole-row references leave one axis open.
        min_col, min_row, max_col, max_row = bounds
        try:
            return CellRange(
                start_row=1 if min_row is None else min_row,
                start_col=1 if min_col is None else min_col,
                end_row=max_row,
                end_col=max_col,
                sheet_name=sheet_name,
                a1_notation=coord.upper(),
            )
        except ValueError as e:
            raise CellRangeError(
                cell_range=cell_range,
                reason="Coordinates must be positive and start before end",
            ) from e
