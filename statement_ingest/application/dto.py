"""Application-level DTOs for statement ingestion."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from statement_ingest.domain.models import FormatKind, RowIssue


@dataclass(slots=True, frozen=True)
class UploadRequest:
    filename: str
    content: bytes


@dataclass(slots=True, frozen=True)
class IngestionReport:
    depot_id: str
    record_count: int
    skipped_row_count: int
    format_kind: FormatKind
    statement_date: str = ""
    issues: Sequence[RowIssue] = field(default_factory=tuple)

    def message(self) -> str:
        return f"File processed successfully for depot: {self.depot_id}"
