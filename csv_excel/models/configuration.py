"""
Configuration model shared by the record writers.

CsvConfiguration carries the options the base record writer consumes
(delimiter, quoting, line terminator, culture, header handling). The
spreadsheet writer only requires that a configuration is present and valid;
it never reads the text-format options itself.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from csv_excel.exceptions.excel_exceptions import ConfigurationError

INVALID_SHEET_NAME_CHARS = frozenset("[]:*?/\\")
MAX_SHEET_NAME_LENGTH = 31


class CsvConfiguration(BaseModel):
    """
    Options for record serialization.

    Attributes:
        delimiter: Field delimiter used by text writers.
        quotechar: Quote character used by text writers.
        lineterminator: Record terminator used by text writers.
        culture: Culture name used when formatting values as text.
        has_header_record: Whether write_records emits a header first.
        trim_fields: Whether text fields are stripped of surrounding whitespace.
        default_sheet_name: Sheet used when a writer is not given one.
    """

    delimiter: str = Field(
        default=",",
        description="Field delimiter used by text writers",
    )
    quotechar: str = Field(
        default='"',
        description="Quote character used by text writers",
    )
    lineterminator: str = Field(
        default="\r\n",
        min_length=1,
        description="Record terminator used by text writers",
    )
    culture: str = Field(
        default="invariant",
        min_length=1,
        description="Culture name used when formatting values as text",
    )
    has_header_record: bool = Field(
        default=True,
        description="Whether write_records emits a header record first",
    )
    trim_fields: bool = Field(
        default=False,
        description="Whether text fields are stripped of surrounding whitespace",
    )
    default_sheet_name: str = Field(
        default="Export",
        description="Sheet used when a writer is not given one",
    )

    model_config = {
        "extra": "forbid",
        "validate_assignment": True,
    }

    @field_validator("delimiter")
    @classmethod
    def validate_delimiter(cls, v: str) -> str:
        """Ensure the delimiter is a single character that is not a newline."""
        if len(v) != 1:
            raise ValueError("delimiter must be a single character")
        if v in "\r\n":
            raise ValueError("delimiter cannot be a line break")
        return v

    @field_validator("quotechar")
    @classmethod
    def validate_quotechar(cls, v: str, info) -> str:
        """Ensure the quote character is a single character distinct from the delimiter."""
        if len(v) != 1:
            raise ValueError("quotechar must be a single character")
        if v == info.data.get("delimiter"):
            raise ValueError("quotechar and delimiter must differ")
        return v

    @field_validator("default_sheet_name")
    @classmethod
    def check_default_sheet_name(cls, v: str) -> str:
        return validate_sheet_name(v)

    @classmethod
    def validate_configuration(
        cls,
        configuration: "CsvConfiguration | Mapping[str, Any] | None",
    ) -> "CsvConfiguration":
        """
        Coerce and validate a configuration argument.

        Args:
            configuration: None for the defaults, a CsvConfiguration, or a
                mapping of CsvConfiguration fields.

        Returns:
            A validated CsvConfiguration.

        Raises:
            ConfigurationError: If the value is of the wrong type or fails
                validation.
        """
        if configuration is None:
            return cls()

        try:
            if isinstance(configuration, cls):
                # Revalidate: model_construct() or assignment may have bypassed checks.
                return cls.model_validate(configuration.model_dump())
            if isinstance(configuration, Mapping):
                return cls.model_validate(dict(configuration))
        except ValidationError as e:
            raise ConfigurationError(
                reason=f"{e.error_count()} validation error(s)",
                errors=[
                    {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                    for err in e.errors()
                ],
            ) from e

        raise ConfigurationError(
            reason=f"expected CsvConfiguration or mapping, got {type(configuration).__name__}",
        )


def validate_sheet_name(name: str) -> str:
    """
    Check a worksheet title against the xlsx naming rules.

    Raises:
        ValueError: If the name is empty, too long, or contains a reserved character.
    """
    if not name or not name.strip():
        raise ValueError("sheet name cannot be empty")
    if len(name) > MAX_SHEET_NAME_LENGTH:
        raise ValueError(f"sheet name cannot exceed {MAX_SHEET_NAME_LENGTH} characters")
    bad = sorted(INVALID_SHEET_NAME_CHARS.intersection(name))
    if bad:
        raise ValueError(f"sheet name contains invalid characters: {''.join(bad)}")
    return name
