from decimal import Decimal
from typing import Sequence

from statement_ingest.domain.models import FormatKind, HoldingRecord
from statement_ingest.domain.results import RowParseResult
from statement_ingest.infrastructure.parsing.statement import StatementParser, split_lines

TABLE_STATEMENT = """**Depot:** TEST123
**Datum:** 01.12.2024

| STK. / Nominale | Wertpapierbezeichnung | Ticker | Kurs pro Stück (EUR) | Kursdatum | Kurswert (EUR) |
|-----------------|-----------------------|--------|----------------------|-----------|----------------|
| 10,00 | Tesla Inc.<br>ISIN: US88160R1014 | TSLA | 250,50 | 01.12.2024 | 2.505,00 |
| 5,00 | Incomplete Row |
"""

LINE_STATEMENT = """**Depot:** LEGACY1
**Datum:** 01.01.2024
Depotbestand
10,00 Stk. Stock A
ISIN: US1111111111
100,00
01.01.2024
1000,00
"""


def test_table_statement():
    outcome = StatementParser().parse(TABLE_STATEMENT)

    assert outcome.format_kind is FormatKind.TABLE
    assert outcome.depot_id == "TEST123"
    assert outcome.header.statement_date == "01.12.2024"
    assert len(outcome.records) == 1
    assert outcome.records[0].total_value == Decimal("2505.00")
    assert outcome.skipped_row_count == 1
    assert outcome.has_issues()


def test_line_oriented_statement():
    outcome = StatementParser().parse(LINE_STATEMENT)

    assert outcome.format_kind is FormatKind.LINE_ORIENTED
    assert outcome.depot_id == "LEGACY1"
    assert [record.quantity for record in outcome.records] == [Decimal("10")]
    assert outcome.skipped_row_count == 0


def test_empty_text():
    outcome = StatementParser().parse("")

    assert outcome.depot_id == ""
    assert outcome.records == ()
    assert outcome.skipped_row_count == 0
    assert outcome.format_kind is FormatKind.LINE_ORIENTED


def test_crlf_line_endings():
    outcome = StatementParser().parse(TABLE_STATEMENT.replace("\n", "\r\n"))

    assert outcome.depot_id == "TEST123"
    assert len(outcome.records) == 1


def test_form_feed_does_not_end_the_table():
    text = (
        "**Depot:** PAGED\n"
        "| STK. / Nominale | Wertpapierbezeichnung | Kurs | Kursdatum | Kurswert |\n"
        "|---|---|---|---|---|\n"
        "| 1,00 | Alpha<br>ISIN: A1 | 10,00 | 01.12.2024 | 10,00 |\n"
        "\f| 2,00 | Beta<br>ISIN: B1 | 20,00 | 01.12.2024 | 40,00 |\n"
    )

    outcome = StatementParser().parse(text)

    assert [record.isin for record in outcome.records] == ["A1", "B1"]
    assert outcome.skipped_row_count == 0


def test_form_feed_does_not_shift_line_oriented_fields():
    text = "**Depot:** PAGED\n10,00 Stk. Stock A\nISIN: US1111111111\n100,00\n\f01.01.2024\n1000,00\n"

    outcome = StatementParser().parse(text)

    assert [record.total_value for record in outcome.records] == [Decimal("1000.00")]
    assert outcome.issues == ()


def test_only_newlines_split_lines():
    assert split_lines("a\fb\r\nc d\n\n") == ["a\fb", "c d"]


class StubParser:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def parse(self, lines: Sequence[str], depot_id: str, statement_date: str) -> RowParseResult:
        self.calls.append((depot_id, statement_date))
        record = HoldingRecord.build(depot_id, "Stub", "", Decimal("1"), Decimal("1"), Decimal("1"), statement_date)
        return RowParseResult(records=(record,))


def test_dispatches_to_registered_row_parser():
    table_parser = StubParser()
    line_parser = StubParser()
    parser = StatementParser({FormatKind.TABLE: table_parser, FormatKind.LINE_ORIENTED: line_parser})

    outcome = parser.parse(TABLE_STATEMENT)

    assert table_parser.calls == [("TEST123", "01.12.2024")]
    assert line_parser.calls == []
    assert outcome.records[0].instrument_key == "TEST123-"
