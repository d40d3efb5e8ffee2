"""
Tests for the base record-writer contract and the CsvRecordWriter.
"""

import io
from datetime import date, datetime

import pytest
from openpyxl import Workbook
from pydantic import BaseModel

from csv_excel.exceptions.excel_exceptions import WriterClosedError
from csv_excel.writers.csv_writer import CsvRecordWriter
from csv_excel.writers.sheet_writer import SheetRecordWriter


class Person(BaseModel):
    name: str
    age: int


def sheet_values(workbook: Workbook) -> list[list]:
    return [list(row) for row in workbook["Data"].iter_rows(values_only=True)]


class TestCsvRecordWriter:
    """Tests for delimited text output."""

    def test_writerow(self) -> None:
        """Test that rows are delimited and terminated."""
        stream = io.StringIO()

        with CsvRecordWriter(stream) as writer:
            writer.writerow(["Name", "Age"])
            writer.writerow(["Alice", 30])

        assert stream.getvalue() == "Name,Age\r\nAlice,30\r\n"

    def test_quotes_fields_with_delimiter(self) -> None:
        """Test that fields containing the delimiter are quoted."""
        stream = io.StringIO()

        with CsvRecordWriter(stream) as writer:
            writer.writerow(["a", "b,c", 'say "hi"'])

        assert stream.getvalue() == 'a,"b,c","say ""hi"""\r\n'

    def test_quotes_fields_with_line_breaks(self) -> None:
        """Test that fields containing LF or CR are quoted so records stay whole."""
        stream = io.StringIO()

        with CsvRecordWriter(stream) as writer:
            writer.writerow(["a\nb", "c"])
            writer.writerow(["x\ry", "d"])

        assert stream.getvalue() == '"a\nb",c\r\n"x\ry",d\r\n'

    def test_line_breaks_quoted_with_custom_terminator(self) -> None:
        """Test that CR is quoted even when the terminator is a bare LF."""
        stream = io.StringIO()

        with CsvRecordWriter(stream, {"lineterminator": "\n"}) as writer:
            writer.writerow(["x\ry", "d"])

        assert stream.getvalue() == '"x\ry",d\n'

    def test_configured_dialect(self) -> None:
        """Test that delimiter, quote and terminator come from the configuration."""
        stream = io.StringIO()
        configuration = {"delimiter": ";", "quotechar": "'", "lineterminator": "\n"}

        with CsvRecordWriter(stream, configuration) as writer:
            writer.writerow(["a;b", "c"])

        assert stream.getvalue() == "'a;b';c\n"

    def test_none_written_as_empty(self) -> None:
        """Test that None fields become empty fields."""
        stream = io.StringIO()

        with CsvRecordWriter(stream) as writer:
            writer.writerow(["a", None, "c"])

        assert stream.getvalue() == "a,,c\r\n"

    def test_close_leaves_stream_open(self) -> None:
        """Test that the caller's stream survives close()."""
        stream = io.StringIO()

        writer = CsvRecordWriter(stream)
        writer.writerow(["a"])
        writer.close()

        assert not stream.closed
        assert writer.row_count == 1

    def test_write_after_close_raises(self) -> None:
        """Test that writes after close() raise WriterClosedError."""
        writer = CsvRecordWriter(io.StringIO())
        writer.close()

        with pytest.raises(WriterClosedError):
            writer.writerow(["a"])


class TestRecordWriterConversion:
    """Tests for the value conversion done by writerow()."""

    def test_dates_use_iso_format(self) -> None:
        """Test that dates and datetimes are written in ISO 8601."""
        stream = io.StringIO()

        with CsvRecordWriter(stream) as writer:
            writer.writerow([date(2024, 1, 31), datetime(2024, 1, 31, 8, 30)])

        assert stream.getvalue() == "2024-01-31,2024-01-31T08:30:00\r\n"

    def test_trim_fields(self) -> None:
        """Test that trim_fields strips surrounding whitespace."""
        stream = io.StringIO()

        with CsvRecordWriter(stream, {"trim_fields": True}) as writer:
            writer.writerow(["  a ", "\tb"])

        assert stream.getvalue() == "a,b\r\n"

    def test_writerows(self) -> None:
        """Test writing several rows at once."""
        stream = io.StringIO()

        with CsvRecordWriter(stream) as writer:
            writer.writerows([["a"], ["b"], ["c"]])

        assert stream.getvalue() == "a\r\nb\r\nc\r\n"
        assert writer.row_count == 3


class TestRecordWriterRecords:
    """Tests for header and mapping support."""

    def test_write_header_once(self) -> None:
        """Test that only the first header call writes."""
        stream = io.StringIO()

        with CsvRecordWriter(stream) as writer:
            writer.write_header(["a", "b"])
            writer.write_header(["x", "y"])

        assert stream.getvalue() == "a,b\r\n"

    def test_write_records_with_header(self) -> None:
        """Test that mappings are written under a header from the first record."""
        stream = io.StringIO()

        with CsvRecordWriter(stream) as writer:
            writer.write_records([
                {"name": "Alice", "age": 30},
                {"age": 25, "name": "Bob"},
                {"name": "Carol"},
            ])

        assert stream.getvalue() == "name,age\r\nAlice,30\r\nBob,25\r\nCarol,\r\n"

    def test_write_records_without_header(self) -> None:
        """Test that has_header_record=False suppresses the header."""
        stream = io.StringIO()

        with CsvRecordWriter(stream, {"has_header_record": False}) as writer:
            writer.write_records([{"name": "Alice"}])

        assert stream.getvalue() == "Alice\r\n"

    def test_write_models_to_sheet(self) -> None:
        """Test that pydantic models are written to a worksheet."""
        wb = Workbook()
        wb.active.title = "Data"

        with SheetRecordWriter.for_workbook(wb, "Data") as writer:
            writer.write_records([Person(name="Alice", age=30), Person(name="Bob", age=25)])

        assert sheet_values(wb) == [["name", "age"], ["Alice", "30"], ["Bob", "25"]]

    def test_repeated_write_records_share_header(self) -> None:
        """Test that a second batch does not repeat the header."""
        wb = Workbook()
        wb.active.title = "Data"

        with SheetRecordWriter.for_workbook(wb, "Data") as writer:
            writer.write_records([{"id": 1}])
            writer.write_records([{"id": 2}])

        assert sheet_values(wb) == [["id"], ["1"], ["2"]]
