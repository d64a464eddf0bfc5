from decimal import Decimal

from statement_ingest.domain.models import HoldingRecord
from statement_ingest.domain.services import PortfolioAggregator


def make_record(name: str, isin: str, quantity: str, price: str) -> HoldingRecord:
    qty = Decimal(quantity)
    unit = Decimal(price)
    return HoldingRecord.build("D1", name, isin, qty, unit, qty * unit, "01.01.2024")


def test_groups_by_isin_with_average_price():
    records = [
        make_record("Apple Inc.", "US0378331005", "10", "100"),
        make_record("Apple Inc.", "US0378331005", "10", "200"),
    ]

    positions = PortfolioAggregator().aggregate(records)

    assert len(positions) == 1
    assert positions[0].quantity == Decimal("20")
    assert positions[0].unit_price == Decimal("150")
    assert positions[0].total_value == Decimal("3000")


def test_falls_back_to_asset_name_without_isin():
    records = [
        make_record("Cash Fund", "", "1", "10"),
        make_record("Cash Fund", "", "2", "10"),
        make_record("Other Fund", "", "1", "5"),
    ]

    positions = PortfolioAggregator().aggregate(records)

    assert [position.name for position in positions] == ["Cash Fund", "Other Fund"]
    assert positions[0].quantity == Decimal("3")


def test_summary_totals():
    records = [make_record("A", "X1", "2", "50"), make_record("B", "X2", "1", "25")]

    summary = PortfolioAggregator().summarize("D1", records)

    assert summary.depot_id == "D1"
    assert summary.record_count == 2
    assert summary.total_value == Decimal("125")


def test_empty_portfolio():
    summary = PortfolioAggregator().summarize("D1", [])

    assert summary.positions == ()
    assert summary.total_value == Decimal("0")
