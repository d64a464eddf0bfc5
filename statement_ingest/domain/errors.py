"""Exception hierarchy for statement ingestion."""
from __future__ import annotations


class StatementIngestError(Exception):
    """Base exception for all ingestion errors."""

    def __init__(self, message: str, *args: object) -> None:
        self.message = message
        super().__init__(message, *args)


class StatementParseError(StatementIngestError, ValueError):
    """Raised by the parsers for a single row; never escapes a whole document."""

    kind = "parse_error"


class NumberFormatError(StatementParseError):
    """A numeric field could not be decoded after locale normalization."""

    kind = "number_format"


class StructuralMismatchError(StatementParseError):
    """A row has too few columns or a position block ran past end of input."""

    kind = "structural_mismatch"


class UnsupportedDocumentError(StatementIngestError):
    """The text extractor cannot turn this upload into text."""


class StorageError(StatementIngestError):
    """The holding store could not read or write its backing data."""
