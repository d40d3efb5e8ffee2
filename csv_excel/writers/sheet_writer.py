"""
Record writer that targets an openpyxl worksheet.

SheetRecordWriter lets code that produces CSV-style records write them into
a workbook instead of a text stream. Each record becomes one worksheet row:
field j of the n-th record (1-based row cursor) lands in

    (range.start_row + n - 1 + row_offset, range.start_col + column_offset + j)

Nothing is saved until the writer is closed.

Example:
    with SheetRecordWriter.to_path("/path/to/output.xlsx") as writer:
        writer.writerow(["Name", "Age"])
        writer.writerow(["Alice", 30])

    workbook = load_workbook("/path/to/report.xlsx")
    with SheetRecordWriter.for_range(workbook, "'Summary'!C4:F20") as writer:
        writer.writerows(rows)
    workbook.save("/path/to/report.xlsx")
"""

import logging
import os
import re
import weakref
from collections.abc import Mapping, Sequence
from typing import IO, Any

from openpyxl import Workbook
from openpyxl.cell.cell import TYPE_FORMULA, TYPE_STRING
from openpyxl.worksheet.worksheet import Worksheet

from csv_excel.adapters.openpyxl_adapter import OpenpyxlAdapter
from csv_excel.exceptions.excel_exceptions import ConfigurationError, SheetNotFoundError
from csv_excel.models.configuration import CsvConfiguration
from csv_excel.models.excel_models import CellRange
from csv_excel.writers.base import RecordWriter

logger = logging.getLogger(__name__)

# Characters the xlsx XML encoding rejects. Tab, LF and CR are allowed.
_CONTROL_CHARACTERS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f]")


def sanitize_cell_text(text: str | None) -> str | None:
    """
    Remove control characters that cannot be stored in an xlsx cell.

    None and the empty string are returned unchanged.
    """
    if not text:
        return text
    return _CONTROL_CHARACTERS.sub("", text)


class SheetRecordWriter(RecordWriter):
    """
    Writes records into the cells of a worksheet.

    Use one of the constructors below rather than calling the class directly:

        to_stream     new workbook, saved to a binary stream on close
        to_path       workbook at a path (loaded if present), saved on close
        for_workbook  caller's workbook, named sheet (added if missing)
        for_worksheet caller's workbook, whole worksheet
        for_range     caller's workbook, anchored at a cell range

    Workbooks created by to_stream/to_path belong to the writer, which saves
    and closes them. Workbooks passed in by the caller are neither saved nor
    closed; persisting them is the caller's job.

    Attributes:
        row_offset: Rows added to every computed cell position.
        column_offset: Columns added to every computed cell position.
    """

    replace_control_characters = staticmethod(sanitize_cell_text)

    def __init__(
        self,
        workbook: Workbook,
        worksheet: Worksheet,
        cell_range: Any = None,
        configuration: CsvConfiguration | Mapping[str, Any] | None = None,
        *,
        owns_workbook: bool = False,
        destination: str | os.PathLike | IO[bytes] | None = None,
        adapter: OpenpyxlAdapter | None = None,
    ) -> None:
        """
        Initialize the writer.

        Args:
            workbook: Workbook holding the target worksheet.
            worksheet: Worksheet to write to.
            cell_range: Target range whose top-left cell anchors all writes.
                None targets the whole worksheet from A1.
            configuration: Writer options. None selects the defaults.
            owns_workbook: Whether close() should release the workbook.
            destination: Path or binary stream the workbook is saved to on
                close. None means close() does not save.
            adapter: OpenpyxlAdapter to use.

        Raises:
            ConfigurationError: If the configuration is invalid, workbook or
                worksheet has the wrong type, or the worksheet does not
                belong to the workbook.
            CellRangeError: If cell_range cannot be parsed.
        """
        super().__init__(configuration)
        self.adapter = adapter or OpenpyxlAdapter()
        self._workbook = self.adapter.check_workbook(workbook)
        self._worksheet = self.adapter.check_worksheet(workbook, worksheet)
        self._range = (
            CellRange.whole_sheet() if cell_range is None else self.adapter.parse_range(cell_range)
        )
        self._owns_workbook = owns_workbook
        self._destination = destination
        self._current_row = 1

        self.row_offset = 0
        self.column_offset = 0

        # Releases an owned workbook, without saving, if the writer is
        # collected before close() is called.
        self._finalizer = (
            weakref.finalize(self, self.adapter.release, workbook) if owns_workbook else None
        )

        logger.debug(
            f"Writing to sheet {self._worksheet.title!r} at row {self._range.start_row}, "
            f"column {self._range.start_col} (owns workbook: {owns_workbook})"
        )

    # ==================== CONSTRUCTORS ====================

    @classmethod
    def to_stream(
        cls,
        stream: IO[bytes],
        sheet_name: str | None = None,
        configuration: CsvConfiguration | Mapping[str, Any] | None = None,
    ) -> "SheetRecordWriter":
        """
        Write to a new workbook that is saved to a binary stream on close.

        The stream is flushed after saving but not closed.

        Args:
            stream: Writable binary stream.
            sheet_name: Sheet to write to. Defaults to the configuration's
                default_sheet_name ("Export").
            configuration: Writer options.
        """
        configuration = CsvConfiguration.validate_configuration(configuration)
        sheet_name = sheet_name or configuration.default_sheet_name
        adapter = OpenpyxlAdapter()
        workbook = adapter.create_workbook(sheet_name)
        worksheet = adapter.get_or_add_worksheet(workbook, sheet_name)
        return cls(
            workbook,
            worksheet,
            configuration=configuration,
            owns_workbook=True,
            destination=stream,
            adapter=adapter,
        )

    @classmethod
    def to_path(
        cls,
        path: str | os.PathLike,
        sheet_name: str | None = None,
        configuration: CsvConfiguration | Mapping[str, Any] | None = None,
    ) -> "SheetRecordWriter":
        """
        Write to the workbook at a path, saved back to the path on close.

        An existing file is loaded so other sheets survive; otherwise a new
        workbook is created.

        Args:
            path: Location of the .xlsx file.
            sheet_name: Sheet to write to. Defaults to the configuration's
                default_sheet_name ("Export").
            configuration: Writer options.
        """
        configuration = CsvConfiguration.validate_configuration(configuration)
        sheet_name = sheet_name or configuration.default_sheet_name
        adapter = OpenpyxlAdapter()
        workbook = adapter.open_workbook(path, sheet_name)
        worksheet = adapter.get_or_add_worksheet(workbook, sheet_name)
        return cls(
            workbook,
            worksheet,
            configuration=configuration,
            owns_workbook=True,
            destination=path,
            adapter=adapter,
        )

    @classmethod
    def for_workbook(
        cls,
        workbook: Workbook,
        sheet_name: str | None = None,
        configuration: CsvConfiguration | Mapping[str, Any] | None = None,
    ) -> "SheetRecordWriter":
        """Write to a named sheet of the caller's workbook, adding the sheet if missing."""
        configuration = CsvConfiguration.validate_configuration(configuration)
        sheet_name = sheet_name or configuration.default_sheet_name
        adapter = OpenpyxlAdapter()
        worksheet = adapter.get_or_add_worksheet(workbook, sheet_name)
        return cls(workbook, worksheet, configuration=configuration, adapter=adapter)

    @classmethod
    def for_worksheet(
        cls,
        workbook: Workbook,
        worksheet: Worksheet,
        configuration: CsvConfiguration | Mapping[str, Any] | None = None,
    ) -> "SheetRecordWriter":
        """Write to the whole of an existing worksheet of the caller's workbook."""
        return cls(workbook, worksheet, configuration=configuration)

    @classmethod
    def for_range(
        cls,
        workbook: Workbook,
        cell_range: Any,
        worksheet: Worksheet | None = None,
        configuration: CsvConfiguration | Mapping[str, Any] | None = None,
    ) -> "SheetRecordWriter":
        """
        Write to a cell range of the caller's workbook.

        The worksheet is taken from, in order: the worksheet argument, the
        sheet named in a qualified range ("'Data'!B2:D10"), the active sheet.

        Raises:
            SheetNotFoundError: If a qualified range names a missing sheet.
            ConfigurationError: If no worksheet can be determined.
        """
        configuration = CsvConfiguration.validate_configuration(configuration)
        adapter = OpenpyxlAdapter()
        adapter.check_workbook(workbook)
        target = adapter.parse_range(cell_range)

        if worksheet is None and target.sheet_name is not None:
            if target.sheet_name not in workbook.sheetnames:
                raise SheetNotFoundError(
                    sheet_name=target.sheet_name,
                    available_sheets=workbook.sheetnames,
                )
            worksheet = workbook[target.sheet_name]
        if worksheet is None:
            worksheet = workbook.active
        if worksheet is None:
            raise ConfigurationError(reason="workbook has no worksheet to write the range to")

        return cls(workbook, worksheet, target, configuration=configuration, adapter=adapter)

    # ==================== PROPERTIES ====================

    @property
    def workbook(self) -> Workbook:
        return self._workbook

    @property
    def worksheet(self) -> Worksheet:
        return self._worksheet

    @property
    def cell_range(self) -> CellRange:
        return self._range

    @property
    def owns_workbook(self) -> bool:
        return self._owns_workbook

    @property
    def row_count(self) -> int:
        return self._current_row - 1

    # ==================== RECORD CONTRACT ====================

    def write(self, record: Sequence[str | None]) -> None:
        """
        Write a record to the next row.

        Fields are written to successive columns. None fields leave their
        cell untouched. Text starting with "=" is stored as text, not as a
        formula.

        Raises:
            WriterClosedError: If the writer has been closed.
        """
        self._check_open()

        row = self._range.start_row + self._current_row - 1 + self.row_offset
        for index, field in enumerate(record):
            if field is None:
                continue
            if not isinstance(field, str):
                field = self.format_field(field)
            cell = self._worksheet.cell(
                row=row,
                column=self._range.start_col + self.column_offset + index,
            )
            cell.value = sanitize_cell_text(field)
            if cell.data_type == TYPE_FORMULA:
                cell.data_type = TYPE_STRING

        self._current_row += 1

    def write_line(self) -> None:
        """Rows are separate cells; there is no terminator to write."""

    # ==================== LIFECYCLE ====================

    def _close(self) -> None:
        if self._finalizer is not None:
            self._finalizer.detach()

        try:
            if self._destination is not None:
                self.adapter.save(self._workbook, self._destination)
        finally:
            if self._owns_workbook:
                self.adapter.release(self._workbook)
                logger.debug(f"Released workbook for sheet {self._worksheet.title!r}")
