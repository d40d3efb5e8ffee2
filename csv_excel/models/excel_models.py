"""
Pydantic models for spreadsheet targets and export results.

All models use Pydantic v2 for validation and serialization.
"""

from pydantic import BaseModel, Field, field_validator


class CellRange(BaseModel):
    """
    Represents the rectangular target of a record writer.

    Coordinates are 1-based, matching openpyxl. An unset end means the
    range is open in that direction (the whole-worksheet target has no end
    at all). Only the top-left corner is used as the coordinate origin for
    writes.

    Attributes:
        start_row: Starting row index (1-based).
        start_col: Starting column index (1-based).
        end_row: Ending row index (1-based, inclusive), or None for unbounded.
        end_col: Ending column index (1-based, inclusive), or None for unbounded.
        sheet_name: Optional sheet the range was qualified with.
        a1_notation: Optional A1 notation string (e.g., "B2:D10").
    """

    start_row: int = Field(
        default=1,
        ge=1,
        description="Starting row index (1-based)",
    )
    start_col: int = Field(
        default=1,
        ge=1,
        description="Starting column index (1-based)",
    )
    end_row: int | None = Field(
        default=None,
        ge=1,
        description="Ending row index (1-based, inclusive), None for unbounded",
    )
    end_col: int | None = Field(
        default=None,
        ge=1,
        description="Ending column index (1-based, inclusive), None for unbounded",
    )
    sheet_name: str | None = Field(
        default=None,
        description="Sheet the range was qualified with, if any",
    )
    a1_notation: str | None = Field(
        default=None,
        description="Optional A1 notation string (e.g., 'B2:D10')",
    )

    model_config = {"frozen": True}

    @field_validator("end_row")
    @classmethod
    def validate_end_row(cls, v: int | None, info) -> int | None:
        """Ensure end_row is greater than or equal to start_row."""
        if v is not None and "start_row" in info.data and v < info.data["start_row"]:
            raise ValueError("end_row must be >= start_row")
        return v

    @field_validator("end_col")
    @classmethod
    def validate_end_col(cls, v: int | None, info) -> int | None:
        """Ensure end_col is greater than or equal to start_col."""
        if v is not None and "start_col" in info.data and v < info.data["start_col"]:
            raise ValueError("end_col must be >= start_col")
        return v

    @classmethod
    def whole_sheet(cls) -> "CellRange":
        """Return the range covering an entire worksheet, anchored at A1."""
        return cls()


class ExportResult(BaseModel):
    """
    Summary of a completed export.

    Attributes:
        sheet_name: Sheet the records were written to.
        rows_written: Number of records written, header included.
        file_path: Path of the saved file, when exported to a path.
        file_size_bytes: Size of the saved output, when known.
        processing_time_ms: Time taken by the export in milliseconds.
    """

    sheet_name: str = Field(
        description="Sheet the records were written to",
    )
    rows_written: int = Field(
        ge=0,
        description="Number of records written, header included",
    )
    file_path: str | None = Field(
        default=None,
        description="Path of the saved file, when exported to a path",
    )
    file_size_bytes: int | None = Field(
        default=None,
        ge=0,
        description="Size of the saved output in bytes, when known",
    )
    processing_time_ms: float | None = Field(
        default=None,
        ge=0,
        description="Time taken by the export in milliseconds",
    )
