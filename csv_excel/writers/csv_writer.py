"""
Record writer for delimited text streams.

CsvRecordWriter renders records with the stdlib csv module, using the
delimiter, quote character and line terminator from the configuration.

Example:
    with open("out.csv", "w", newline="") as fh:
        with CsvRecordWriter(fh, {"delimiter": ";"}) as writer:
            writer.writerow(["Name", "Age"])
            writer.writerow(["Alice", 30])
"""

import csv
import io
from collections.abc import Mapping, Sequence
from typing import IO, Any

from csv_excel.models.configuration import CsvConfiguration
from csv_excel.writers.base import RecordWriter

# Rendering with CRLF makes the csv module quote any field holding CR or LF,
# whatever terminator the configuration asks for.
_RENDER_TERMINATOR = "\r\n"


class CsvRecordWriter(RecordWriter):
    """
    Writes records as delimited text.

    The stream belongs to the caller: close() flushes it but leaves it open.
    """

    def __init__(
        self,
        stream: IO[str],
        configuration: CsvConfiguration | Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(configuration)
        self.stream = stream
        self._buffer = io.StringIO()
        self._csv = csv.writer(
            self._buffer,
            delimiter=self.configuration.delimiter,
            quotechar=self.configuration.quotechar,
            lineterminator=_RENDER_TERMINATOR,
            quoting=csv.QUOTE_MINIMAL,
        )

    def write(self, record: Sequence[str | None]) -> None:
        self._check_open()
        self._buffer.seek(0)
        self._buffer.truncate()
        self._csv.writerow(record)
        # The terminator is emitted by write_line().
        self.stream.write(self._buffer.getvalue()[: -len(_RENDER_TERMINATOR)])
        self._records_written += 1

    def write_line(self) -> None:
        self._check_open()
        self.stream.write(self.configuration.lineterminator)

    def flush(self) -> None:
        self.stream.flush()
