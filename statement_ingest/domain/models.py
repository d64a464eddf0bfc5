"""Domain models for the statement ingestion pipeline.

These dataclasses capture the canonical schema for parsed statement content.
All of them are transient: they are built fresh per ingestion call and carry no
identity beyond it. Durable identity belongs to the holding store.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class FormatKind(str, Enum):
    """Layout of a statement, decided once per document."""

    TABLE = "table"
    LINE_ORIENTED = "line_oriented"


@dataclass(frozen=True)
class StatementHeader:
    depot_id: str = ""
    statement_date: str = ""


def instrument_key(depot_id: str, isin: str) -> str:
    # Not unique when the ISIN is empty or repeated within a statement.
    return f"{depot_id}-{isin}"


@dataclass(frozen=True)
class HoldingRecord:
    """One parsed position of a statement."""

    depot_id: str
    instrument_key: str
    asset_name: str
    isin: str
    quantity: Decimal
    unit_price: Decimal
    total_value: Decimal
    date: str
    ticker: str = ""

    @classmethod
    def build(
        cls,
        depot_id: str,
        asset_name: str,
        isin: str,
        quantity: Decimal,
        unit_price: Decimal,
        total_value: Decimal,
        date: str,
        ticker: str = "",
    ) -> "HoldingRecord":
        return cls(
            depot_id=depot_id,
            instrument_key=instrument_key(depot_id, isin),
            asset_name=asset_name,
            isin=isin,
            quantity=quantity,
            unit_price=unit_price,
            total_value=total_value,
            date=date,
            ticker=ticker,
        )


@dataclass(frozen=True)
class RowIssue:
    """A row or position block that was dropped while parsing."""

    kind: str
    line_number: int
    text: str
    message: str


@dataclass(frozen=True)
class ClientRecord:
    id: str
    name: str
    email: str
    birth_date: str
    depot: str

    @classmethod
    def for_depot(cls, depot_id: str) -> "ClientRecord":
        return cls(
            id=depot_id,
            name=f"Client {depot_id}",
            email=f"client{depot_id}@example.com",
            birth_date="2000-01-01",
            depot=depot_id,
        )
