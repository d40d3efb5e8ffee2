"""
Base record-writer contract.

A record writer accepts one record (an ordered sequence of text fields) at
a time. writerow() converts arbitrary values to text, hands the fields to
write(), then ends the record with write_line(). Subclasses decide where
fields go: a text stream, a worksheet, and so on.

The interface follows csv.writer (writerow/writerows) so a RecordWriter can
be dropped in wherever code already produces rows for the csv module.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime, time
from typing import Any

from pydantic import BaseModel

from csv_excel.exceptions.excel_exceptions import WriterClosedError
from csv_excel.models.configuration import CsvConfiguration

logger = logging.getLogger(__name__)


class RecordWriter(ABC):
    """
    Abstract base for record writers.

    Attributes:
        configuration: The validated CsvConfiguration.
    """

    def __init__(self, configuration: CsvConfiguration | Mapping[str, Any] | None = None) -> None:
        """
        Initialize the writer.

        Args:
            configuration: Writer options. None selects the defaults.

        Raises:
            ConfigurationError: If the configuration fails validation.
        """
        self.configuration = CsvConfiguration.validate_configuration(configuration)
        self._records_written = 0
        self._header_written = False
        self._closed = False

    # ==================== RECORD CONTRACT ====================

    @abstractmethod
    def write(self, record: Sequence[str | None]) -> None:
        """Write the fields of one record."""

    @abstractmethod
    def write_line(self) -> None:
        """End the current record."""

    async def write_async(self, record: Sequence[str | None]) -> None:
        """Write a record. Runs synchronously; never suspends."""
        self.write(record)

    async def write_line_async(self) -> None:
        """End the current record. Runs synchronously; never suspends."""
        self.write_line()

    @property
    def row_count(self) -> int:
        """Number of records written so far."""
        return self._records_written

    # ==================== VALUE CONVERSION ====================

    def format_field(self, value: Any) -> str | None:
        """
        Convert a value to the text written for it.

        None stays None so writers can leave the field empty. Dates and
        times use ISO 8601.
        """
        if value is None:
            return None
        if isinstance(value, str):
            text = value
        elif isinstance(value, (datetime, date, time)):
            text = value.isoformat()
        else:
            text = str(value)

        if self.configuration.trim_fields:
            text = text.strip()
        return text

    # ==================== HIGH LEVEL WRITES ====================

    def writerow(self, row: Iterable[Any]) -> None:
        """Convert a row of values to text and write it as one record."""
        self.write([self.format_field(value) for value in row])
        self.write_line()

    def writerows(self, rows: Iterable[Iterable[Any]]) -> None:
        for row in rows:
            self.writerow(row)

    def write_header(self, fieldnames: Iterable[str]) -> None:
        """
        Write a header record.

        Only the first call has an effect; later calls are ignored so that
        write_records() can be called repeatedly on the same writer.
        """
        if self._header_written:
            return
        self.writerow(fieldnames)
        self._header_written = True

    def write_records(self, records: Iterable[Mapping[str, Any] | BaseModel]) -> None:
        """
        Write mappings or pydantic models as records.

        Field order comes from the first record. When the configuration has
        a header record, the field names are written once before the data.
        Keys missing from later records are written as empty fields.
        """
        fieldnames: list[str] | None = None
        for record in records:
            if isinstance(record, BaseModel):
                record = record.model_dump()
            if fieldnames is None:
                fieldnames = list(record.keys())
                if self.configuration.has_header_record:
                    self.write_header(fieldnames)
            self.writerow(record.get(name) for name in fieldnames)

    # ==================== LIFECYCLE ====================

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise WriterClosedError(type(self).__name__)

    def flush(self) -> None:
        """Flush buffered output. The base writer buffers nothing."""

    def close(self) -> None:
        """
        Flush and release the writer.

        Only the first call does any work. The writer counts as closed even
        if releasing fails, so a failed save is never retried.
        """
        if self._closed:
            return
        try:
            self.flush()
            self._close()
        finally:
            self._closed = True
            logger.debug(f"{type(self).__name__} closed after {self.row_count} record(s)")

    def _close(self) -> None:
        """Release resources. Called once by close()."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
