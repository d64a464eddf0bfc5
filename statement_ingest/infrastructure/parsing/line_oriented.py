"""Parser for the legacy line-oriented statement layout.

A position in this layout spans several physical lines::

    10,00 Stk. Stock A
    ISIN: US1111111111
    Lagerland: Deutschland          (optional, repeatable)
    Wertpapierrechnung ...          (optional, repeatable)
    100,00                          unit price
    01.01.2024                      price date, discarded
    1000,00                         total value

The parser is a small state machine walking the lines with one cursor. Prose
between positions is skipped while looking for the next ``Stk.`` line.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from enum import Enum
from typing import Callable, Sequence

import structlog

from statement_ingest.domain.errors import NumberFormatError
from statement_ingest.domain.models import HoldingRecord, RowIssue
from statement_ingest.domain.results import RowParseResult
from statement_ingest.infrastructure.parsing.numbers import parse_comma_decimal, parse_locale_decimal

logger = structlog.get_logger(__name__)

QUANTITY_TOKEN = " Stk. "
ISIN_PREFIX = "ISIN:"
ISIN_CUT = 6
COUNTRY_PREFIX = "Lagerland:"
CUSTODY_TOKEN = "Wertpapierrechnung"
HALF = Decimal("0.5")


class LineState(str, Enum):
    SEEK_POSITION = "seek_position"
    SEEK_ISIN = "seek_isin"
    SKIP_METADATA = "skip_metadata"
    READ_PRICE = "read_price"
    SKIP_DATE = "skip_date"
    READ_TOTAL = "read_total"
    ABANDONED = "abandoned"
    FINISHED = "finished"


TERMINAL_STATES = frozenset({LineState.ABANDONED, LineState.FINISHED})


@dataclass
class PendingPosition:
    start_line: int
    quantity: Decimal
    asset_name: str
    isin: str = ""
    unit_price: Decimal | None = None


def round_quantity(quantity: Decimal) -> Decimal:
    # Whole share counts; halves go toward positive infinity, so -2.5 becomes -2.
    return (quantity + HALF).to_integral_value(rounding=ROUND_FLOOR)


class LineOrientedMachine:
    """One run of the position state machine over a list of lines."""

    def __init__(self, lines: Sequence[str], depot_id: str, statement_date: str) -> None:
        self._lines = list(lines)
        self._depot_id = depot_id
        self._statement_date = statement_date
        self.cursor = 0
        self.state = LineState.SEEK_POSITION
        self.pending: PendingPosition | None = None
        self.records: list[HoldingRecord] = []
        self.issues: list[RowIssue] = []
        self._handlers: dict[LineState, Callable[[], LineState]] = {
            LineState.SEEK_POSITION: self._seek_position,
            LineState.SEEK_ISIN: self._seek_isin,
            LineState.SKIP_METADATA: self._skip_metadata,
            LineState.READ_PRICE: self._read_price,
            LineState.SKIP_DATE: self._skip_date,
            LineState.READ_TOTAL: self._read_total,
        }

    @property
    def done(self) -> bool:
        return self.state in TERMINAL_STATES

    def step(self) -> LineState:
        if not self.done:
            self.state = self._handlers[self.state]()
        return self.state

    def run(self) -> RowParseResult:
        while not self.done:
            self.step()
        return RowParseResult(records=tuple(self.records), issues=tuple(self.issues))

    def _at_end(self) -> bool:
        return self.cursor >= len(self._lines)

    def _current(self) -> str:
        return self._lines[self.cursor].strip()

    def _abandon(self) -> LineState:
        pending = self.pending
        start = pending.start_line if pending else self.cursor
        message = f"Input ended in state {self.state.value} before the position was complete"
        logger.warning("position_abandoned", state=self.state.value, line_number=start)
        self.issues.append(
            RowIssue(
                kind="structural_mismatch",
                line_number=start,
                text=self._lines[start - 1].strip() if pending else "",
                message=message,
            )
        )
        self.pending = None
        return LineState.ABANDONED

    def _drop(self, exc: NumberFormatError, text: str) -> LineState:
        logger.warning("position_skipped", line_number=self.cursor, error=exc.message)
        self.issues.append(
            RowIssue(kind=exc.kind, line_number=self.cursor, text=text, message=exc.message)
        )
        self.pending = None
        return LineState.SEEK_POSITION

    def _seek_position(self) -> LineState:
        if self._at_end():
            return LineState.FINISHED
        line = self._current()
        self.cursor += 1
        if QUANTITY_TOKEN not in line:
            return LineState.SEEK_POSITION
        left, _, right = line.partition(QUANTITY_TOKEN)
        try:
            quantity = parse_locale_decimal(left)
        except NumberFormatError as exc:
            return self._drop(exc, line)
        self.pending = PendingPosition(start_line=self.cursor, quantity=quantity, asset_name=right.strip())
        return LineState.SEEK_ISIN

    def _seek_isin(self) -> LineState:
        if self._at_end():
            return self._abandon()
        line = self._current()
        self.cursor += 1
        if not line.startswith(ISIN_PREFIX):
            return LineState.SEEK_ISIN
        self.pending.isin = line[ISIN_CUT:]
        return LineState.SKIP_METADATA

    def _skip_metadata(self) -> LineState:
        if self._at_end():
            return LineState.READ_PRICE
        line = self._current()
        if line.startswith(COUNTRY_PREFIX) or CUSTODY_TOKEN in line:
            self.cursor += 1
            return LineState.SKIP_METADATA
        return LineState.READ_PRICE

    def _read_price(self) -> LineState:
        if self._at_end():
            return self._abandon()
        line = self._current()
        self.cursor += 1
        try:
            self.pending.unit_price = parse_comma_decimal(line)
        except NumberFormatError as exc:
            return self._drop(exc, line)
        return LineState.SKIP_DATE

    def _skip_date(self) -> LineState:
        if self._at_end():
            return self._abandon()
        self.cursor += 1
        return LineState.READ_TOTAL

    def _read_total(self) -> LineState:
        if self._at_end():
            return self._abandon()
        line = self._current()
        self.cursor += 1
        try:
            total_value = parse_comma_decimal(line)
        except NumberFormatError as exc:
            return self._drop(exc, line)

        pending = self.pending
        record = HoldingRecord.build(
            depot_id=self._depot_id,
            asset_name=pending.asset_name,
            isin=pending.isin,
            quantity=round_quantity(pending.quantity),
            unit_price=pending.unit_price,
            total_value=total_value,
            date=self._statement_date,
        )
        logger.debug("position_parsed", asset=record.asset_name, isin=record.isin, line_number=pending.start_line)
        self.records.append(record)
        self.pending = None
        return LineState.SEEK_POSITION


class LineOrientedParser:
    """Row parser for statements without the table header."""

    def parse(self, lines: Sequence[str], depot_id: str, statement_date: str) -> RowParseResult:
        return LineOrientedMachine(lines, depot_id, statement_date).run()
