"""
Custom exceptions for spreadsheet record writing.

This module defines a hierarchy of exceptions for the error conditions a
record writer can hit. All exceptions inherit from ExcelWriterError for
consistent error handling.

Errors raised by openpyxl or the destination stream while saving are not
part of this hierarchy; they propagate unmodified from the writer's close().

Example:
    try:
        writer.write(["a", "b"])
    except WriterClosedError as e:
        logger.error(f"Writer error: {e.error_code}")
    except ExcelWriterError as e:
        logger.error(f"General error: {e}")
"""


class ExcelWriterError(Exception):
    """
    Base exception for all record writer errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Optional additional context about the error.
    """

    def __init__(
        self,
        message: str,
        error_code: str = "EXCEL_WRITER_ERROR",
        details: dict | None = None,
    ) -> None:
        """
        Initialize the ExcelWriterError.

        Args:
            message: Human-readable error description.
            error_code: Machine-readable error code.
            details: Optional additional context about the error.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict:
        """
        Convert exception to a dictionary.

        Returns:
            Dictionary containing error_code, message, and details.
        """
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(ExcelWriterError):
    """
    Raised when the writer configuration is missing or fails validation.

    Attributes:
        reason: Why the configuration was rejected.
        errors: Field level errors reported by validation, if any.
    """

    def __init__(
        self,
        reason: str,
        errors: list[dict] | None = None,
    ) -> None:
        self.reason = reason
        self.errors = errors or []

        super().__init__(
            message=f"Invalid writer configuration: {reason}",
            error_code="INVALID_CONFIGURATION",
            details={
                "reason": reason,
                "errors": self.errors,
            },
        )


class WriterClosedError(ExcelWriterError, ValueError):
    """
    Raised when a record is written after the writer has been closed.

    Also a ValueError, matching what Python file objects raise on I/O
    against a closed file.
    """

    def __init__(self, writer_name: str = "SheetRecordWriter") -> None:
        self.writer_name = writer_name

        super().__init__(
            message=f"Cannot write to a closed {writer_name}",
            error_code="WRITER_CLOSED",
            details={"writer": writer_name},
        )


class SheetNotFoundError(ExcelWriterError):
    """
    Raised when a range refers to a sheet the workbook does not contain.

    Attributes:
        sheet_name: Name of the sheet that was not found.
        available_sheets: List of sheets available in the workbook.
    """

    def __init__(
        self,
        sheet_name: str,
        available_sheets: list[str] | None = None,
    ) -> None:
        """
        Initialize the SheetNotFoundError.

        Args:
            sheet_name: Name of the sheet that was not found.
            available_sheets: List of sheets available in the workbook.
        """
        self.sheet_name = sheet_name
        self.available_sheets = available_sheets or []

        message = f"Sheet not found: {sheet_name}"
        if available_sheets:
            message += f". Available sheets: {', '.join(available_sheets)}"

        super().__init__(
            message=message,
            error_code="SHEET_NOT_FOUND",
            details={
                "sheet_name": sheet_name,
                "available_sheets": self.available_sheets,
            },
        )


class CellRangeError(ExcelWriterError):
    """
    Raised when an invalid target cell range is specified.

    This covers invalid range syntax (e.g., "A1:"), zero or negative
    coordinates, and ranges whose end lies before their start.

    Attributes:
        cell_range: The invalid cell range string.
        reason: Specific reason why the range is invalid.
    """

    def __init__(
        self,
        cell_range: str,
        reason: str | None = None,
    ) -> None:
        """
        Initialize the CellRangeError.

        Args:
            cell_range: The invalid cell range string.
            reason: Specific reason why the range is invalid.
        """
        self.cell_range = cell_range
        self.reason = reason

        message = f"Invalid cell range: {cell_range}"
        if reason:
            message += f" - {reason}"

        super().__init__(
            message=message,
            error_code="INVALID_CELL_RANGE",
            details={
                "cell_range": cell_range,
                "reason": reason,
            },
        )


class WriteError(ExcelWriterError):
    """
    Raised by the export service when an export fails.

    Attributes:
        destination: Description of the destination being written.
        operation: The specific write operation that failed.
    """

    def __init__(
        self,
        destination: str,
        operation: str = "write",
        reason: str | None = None,
    ) -> None:
        """
        Initialize the WriteError.

        Args:
            destination: Description of the destination being written.
            operation: The specific write operation that failed.
            reason: Specific reason for the write failure.
        """
        self.destination = destination
        self.operation = operation
        self.reason = reason

        message = f"Failed to {operation} Excel workbook: {destination}"
        if reason:
            message += f" - {reason}"

        super().__init__(
            message=message,
            error_code="WRITE_ERROR",
            details={
                "destination": destination,
                "operation": operation,
                "reason": reason,
            },
        )
