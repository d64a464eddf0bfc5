import csv
import io
from decimal import Decimal

from statement_ingest.domain.models import HoldingRecord
from statement_ingest.domain.services import PortfolioAggregator
from statement_ingest.presentation.holdings_report import (
    COLUMNS,
    holdings_to_dataframe,
    render_csv,
    render_html,
    render_xlsx,
)


def make_record() -> HoldingRecord:
    return HoldingRecord.build(
        "D1",
        "McDonald's Corp. & Co.",
        "US5801351017",
        Decimal("15.00"),
        Decimal("280.50"),
        Decimal("4207.50"),
        "05.09.2024",
        ticker="MCD",
    )


def test_render_csv():
    payload = render_csv([make_record()]).decode("utf-8")

    rows = list(csv.DictReader(io.StringIO(payload)))
    assert list(rows[0].keys()) == COLUMNS
    assert rows[0]["instrument_key"] == "D1-US5801351017"
    assert rows[0]["total_value"] == "4207.50"


def test_render_csv_without_records_keeps_header():
    assert render_csv([]).decode("utf-8").strip() == ",".join(COLUMNS)


def test_render_html_escapes_values():
    html = render_html([make_record()])

    assert "McDonald&#x27;s Corp. &amp; Co." in html
    assert render_html([]) == "<p>No holdings.</p>"


def test_dataframe_and_xlsx():
    records = [make_record()]
    summary = PortfolioAggregator().summarize("D1", records)

    frame = holdings_to_dataframe(records)
    workbook = render_xlsx(records, summary)

    assert list(frame.columns) == COLUMNS
    assert frame.loc[0, "ticker"] == "MCD"
    assert workbook[:2] == b"PK"
