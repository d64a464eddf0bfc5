"""Whole-document statement parsing: header, layout detection, row parsing."""
from __future__ import annotations

from typing import Mapping, Sequence

import structlog

from statement_ingest.domain.models import FormatKind
from statement_ingest.domain.repositories import RowParser
from statement_ingest.domain.results import ParseOutcome
from statement_ingest.infrastructure.parsing.detection import detect_format
from statement_ingest.infrastructure.parsing.header import extract_header
from statement_ingest.infrastructure.parsing.line_oriented import LineOrientedParser
from statement_ingest.infrastructure.parsing.table import TableRowParser

logger = structlog.get_logger(__name__)


def default_row_parsers() -> dict[FormatKind, RowParser]:
    return {
        FormatKind.TABLE: TableRowParser(),
        FormatKind.LINE_ORIENTED: LineOrientedParser(),
    }


def split_lines(raw_text: str) -> list[str]:
    """Split on ``\\n`` (or ``\\r\\n``) only.

    ``str.splitlines`` would also break on form feeds and other separators
    that extractors leave inside a line. Trailing empty lines are dropped.
    """
    lines = [line[:-1] if line.endswith("\r") else line for line in raw_text.split("\n")]
    while lines and not lines[-1]:
        lines.pop()
    return lines


class StatementParser:
    """Turns statement text into a :class:`ParseOutcome` without touching storage."""

    def __init__(self, row_parsers: Mapping[FormatKind, RowParser] | None = None) -> None:
        self._row_parsers = dict(row_parsers) if row_parsers is not None else default_row_parsers()

    def parse(self, raw_text: str) -> ParseOutcome:
        return self.parse_lines(split_lines(raw_text))

    def parse_lines(self, lines: Sequence[str]) -> ParseOutcome:
        header = extract_header(lines)
        format_kind = detect_format(lines)
        row_parser = self._row_parsers.get(format_kind)
        if row_parser is None:
            raise KeyError(f"No row parser registered for {format_kind.value}")

        result = row_parser.parse(lines, header.depot_id, header.statement_date)
        logger.info(
            "statement_parsed",
            depot_id=header.depot_id,
            statement_date=header.statement_date,
            format=format_kind.value,
            records=len(result.records),
            skipped=len(result.issues),
        )
        return ParseOutcome(
            header=header,
            records=tuple(result.records),
            skipped_row_count=len(result.issues),
            format_kind=format_kind,
            issues=tuple(result.issues),
        )
