"""Parser for markdown-table statements (``| STK. / Nominale | ... |``)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import structlog

from statement_ingest.config import SETTINGS
from statement_ingest.domain.errors import StatementParseError, StructuralMismatchError
from statement_ingest.domain.models import HoldingRecord, RowIssue
from statement_ingest.domain.results import RowParseResult
from statement_ingest.infrastructure.parsing.numbers import parse_locale_decimal

logger = structlog.get_logger(__name__)

MIN_SEGMENTS = 6
ROW_SEPARATOR = "||"
SEPARATOR_PREFIX = "|---"
ISIN_MARKER = "ISIN: "


def split_segments(row: str) -> list[str]:
    """Split on ``|`` and drop trailing empty segments.

    The leading segment of a well-formed row is always empty.
    """
    segments = row.split("|")
    while segments and segments[-1] == "":
        segments.pop()
    return segments


def split_concatenated(row: str) -> list[str]:
    """Split a physical line that holds several rows joined by ``||``."""
    if ROW_SEPARATOR not in row:
        return [row]
    rows: list[str] = []
    for fragment in row.split(ROW_SEPARATOR):
        trimmed = fragment.strip()
        if not trimmed:
            continue
        if not trimmed.startswith("|"):
            trimmed = "|" + trimmed
        rows.append(trimmed)
    return rows


def split_security_name(field: str) -> tuple[str, str]:
    """Return ``(asset_name, isin)`` from a name cell such as ``Tesla Inc.<br>ISIN: US88160R1014``."""
    text = field.replace("<br>", " ").replace("\n", " ")
    name, marker, rest = text.partition(ISIN_MARKER)
    isin = ""
    if marker:
        tokens = rest.split()
        if tokens:
            isin = tokens[0]
    return name.strip(), isin


@dataclass(frozen=True)
class TableLayout:
    """Segment positions of each column, counted with the leading empty segment."""

    quantity: int = 1
    name: int = 2
    price: int = 3
    date: int = 4
    value: int = 5
    ticker: int | None = None
    isin: int | None = None

    @property
    def min_segments(self) -> int:
        used = [self.quantity, self.name, self.price, self.date, self.value]
        used.extend(idx for idx in (self.ticker, self.isin) if idx is not None)
        return max(MIN_SEGMENTS, max(used) + 1)

    @classmethod
    def from_header(cls, header_line: str) -> "TableLayout":
        positions: dict[str, int] = {}
        for idx, cell in enumerate(split_segments(header_line)):
            label = cell.strip().lower()
            if idx <= 2 or not label:
                continue
            word = label.split()[0]
            if word in ("ticker", "symbol"):
                positions.setdefault("ticker", idx)
            elif word == "isin":
                positions.setdefault("isin", idx)
            elif word in ("kursdatum", "datum"):
                positions.setdefault("date", idx)
            elif word in ("kurswert", "wert"):
                positions.setdefault("value", idx)
            elif label.startswith("kurs"):
                positions.setdefault("price", idx)
        return cls(**positions)


class TableRowParser:
    """Reads the holdings table that follows the ``STK. / Nominale`` header line."""

    def __init__(
        self,
        header_marker: str = SETTINGS.table_header_marker,
        header_fragment: str = SETTINGS.table_header_fragment,
    ) -> None:
        self._header_marker = header_marker
        self._header_fragment = header_fragment

    def parse(self, lines: Sequence[str], depot_id: str, statement_date: str) -> RowParseResult:
        records: list[HoldingRecord] = []
        issues: list[RowIssue] = []
        layout = TableLayout()
        in_table = False

        for line_number, raw in enumerate(lines, start=1):
            line = raw.strip()
            if line.startswith(self._header_marker):
                layout = TableLayout.from_header(line)
                in_table = True
                continue
            if in_table and self._is_data_row(line):
                for row in split_concatenated(line):
                    try:
                        records.append(self.parse_row(row, layout, depot_id, statement_date))
                    except StatementParseError as exc:
                        logger.warning(
                            "table_row_skipped",
                            line_number=line_number,
                            row=row,
                            kind=exc.kind,
                            error=exc.message,
                        )
                        issues.append(
                            RowIssue(kind=exc.kind, line_number=line_number, text=row, message=exc.message)
                        )
            if in_table and not line:
                in_table = False

        return RowParseResult(records=tuple(records), issues=tuple(issues))

    def _is_data_row(self, line: str) -> bool:
        return (
            line.startswith("|")
            and not line.startswith(SEPARATOR_PREFIX)
            and self._header_fragment not in line
        )

    @staticmethod
    def parse_row(
        row: str,
        layout: TableLayout,
        depot_id: str,
        statement_date: str,
    ) -> HoldingRecord:
        segments = split_segments(row)
        if len(segments) < layout.min_segments:
            raise StructuralMismatchError(
                f"Row has {len(segments)} segments, expected at least {layout.min_segments}"
            )

        asset_name, isin = split_security_name(segments[layout.name].strip())
        if not isin and layout.isin is not None:
            isin = segments[layout.isin].strip()
        ticker = segments[layout.ticker].strip() if layout.ticker is not None else ""
        # The per-row price date is read but the statement date is what gets stored.
        price_date = segments[layout.date].strip()

        quantity = parse_locale_decimal(segments[layout.quantity])
        unit_price = parse_locale_decimal(segments[layout.price])
        total_value = parse_locale_decimal(segments[layout.value])

        logger.debug(
            "table_row_parsed",
            asset=asset_name,
            isin=isin,
            quantity=str(quantity),
            price_date=price_date,
        )
        return HoldingRecord.build(
            depot_id=depot_id,
            asset_name=asset_name,
            isin=isin,
            quantity=quantity,
            unit_price=unit_price,
            total_value=total_value,
            date=statement_date,
            ticker=ticker,
        )
