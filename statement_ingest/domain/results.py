"""Domain-level results for statement parsing."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from .models import FormatKind, HoldingRecord, RowIssue, StatementHeader


@dataclass(frozen=True)
class RowParseResult:
    records: Sequence[HoldingRecord] = field(default_factory=tuple)
    issues: Sequence[RowIssue] = field(default_factory=tuple)


@dataclass(frozen=True)
class ParseOutcome:
    header: StatementHeader
    records: Sequence[HoldingRecord]
    skipped_row_count: int
    format_kind: FormatKind
    issues: Sequence[RowIssue] = field(default_factory=tuple)

    @property
    def depot_id(self) -> str:
        return self.header.depot_id

    def has_issues(self) -> bool:
        return self.skipped_row_count > 0
