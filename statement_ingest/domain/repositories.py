"""Collaborator interfaces anchoring the domain layer."""
from __future__ import annotations

from typing import Protocol, Sequence

from .models import ClientRecord, HoldingRecord
from .results import RowParseResult


class HoldingStore(Protocol):
    """Durable home of holdings, scoped by depot id."""

    def find_holdings(self, depot_id: str) -> Sequence[HoldingRecord]:
        ...

    def replace_holdings(self, depot_id: str, records: Sequence[HoldingRecord]) -> None:
        """Atomically delete every holding of ``depot_id`` and insert ``records``."""
        ...

    def upsert_client_tag(self, depot_id: str) -> None:
        ...

    def find_client(self, depot_id: str) -> ClientRecord | None:
        ...


class TextExtractor(Protocol):
    """Turns an uploaded file into UTF-8 text."""

    def extract(self, content: bytes, filename: str) -> str:
        ...


class RowParser(Protocol):
    """Turns the lines of one statement layout into holding records."""

    def parse(self, lines: Sequence[str], depot_id: str, statement_date: str) -> RowParseResult:
        ...
