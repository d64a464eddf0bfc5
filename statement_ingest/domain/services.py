"""Domain services summarizing stored holdings."""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Sequence

from .models import HoldingRecord


@dataclass(frozen=True)
class AssetPosition:
    name: str
    isin: str
    ticker: str
    quantity: Decimal
    unit_price: Decimal
    total_value: Decimal


@dataclass(frozen=True)
class PortfolioSummary:
    depot_id: str
    positions: Sequence[AssetPosition] = field(default_factory=tuple)
    total_value: Decimal = Decimal("0")
    record_count: int = 0


class PortfolioAggregator:
    """Groups holdings into assets, keyed by ISIN and falling back to the asset name."""

    def aggregate(self, records: Sequence[HoldingRecord]) -> list[AssetPosition]:
        positions: dict[str, AssetPosition] = {}
        for record in records:
            key = self._asset_key(record)
            existing = positions.get(key)
            if existing is None:
                positions[key] = AssetPosition(
                    name=record.asset_name,
                    isin=record.isin,
                    ticker=record.ticker,
                    quantity=record.quantity,
                    unit_price=record.unit_price,
                    total_value=record.total_value,
                )
                continue
            quantity = existing.quantity + record.quantity
            cost = existing.quantity * existing.unit_price + record.quantity * record.unit_price
            unit_price = cost / quantity if quantity else existing.unit_price
            positions[key] = AssetPosition(
                name=existing.name,
                isin=existing.isin,
                ticker=existing.ticker or record.ticker,
                quantity=quantity,
                unit_price=unit_price,
                total_value=cost,
            )
        return list(positions.values())

    def summarize(self, depot_id: str, records: Sequence[HoldingRecord]) -> PortfolioSummary:
        positions = self.aggregate(records)
        return PortfolioSummary(
            depot_id=depot_id,
            positions=tuple(positions),
            total_value=self.portfolio_value(positions),
            record_count=len(records),
        )

    @staticmethod
    def portfolio_value(positions: Sequence[AssetPosition]) -> Decimal:
        return sum((position.total_value for position in positions), Decimal("0"))

    @staticmethod
    def _asset_key(record: HoldingRecord) -> str:
        return record.isin or record.asset_name
