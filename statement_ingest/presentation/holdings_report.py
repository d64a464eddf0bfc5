"""Holding report generators."""
from __future__ import annotations

import csv
import html
import io
from typing import Sequence

import pandas as pd

from statement_ingest.domain.models import HoldingRecord
from statement_ingest.domain.services import PortfolioSummary

COLUMNS = [
    "depot_id",
    "instrument_key",
    "asset_name",
    "isin",
    "ticker",
    "quantity",
    "unit_price",
    "total_value",
    "date",
]


def holdings_to_rows(records: Sequence[HoldingRecord]) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for record in records:
        rows.append(
            {
                "depot_id": record.depot_id,
                "instrument_key": record.instrument_key,
                "asset_name": record.asset_name,
                "isin": record.isin,
                "ticker": record.ticker,
                "quantity": str(record.quantity),
                "unit_price": str(record.unit_price),
                "total_value": str(record.total_value),
                "date": record.date,
            }
        )
    return rows


def holdings_to_dataframe(records: Sequence[HoldingRecord]) -> pd.DataFrame:
    return pd.DataFrame(holdings_to_rows(records), columns=COLUMNS)


def summary_to_dataframe(summary: PortfolioSummary) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "name": position.name,
                "isin": position.isin,
                "ticker": position.ticker,
                "quantity": position.quantity,
                "unit_price": position.unit_price,
                "total_value": position.total_value,
            }
            for position in summary.positions
        ],
        columns=["name", "isin", "ticker", "quantity", "unit_price", "total_value"],
    )


def render_csv(records: Sequence[HoldingRecord]) -> bytes:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=COLUMNS)
    writer.writeheader()
    writer.writerows(holdings_to_rows(records))
    return buffer.getvalue().encode("utf-8")


def render_html(records: Sequence[HoldingRecord]) -> str:
    rows = holdings_to_rows(records)
    if not rows:
        return "<p>No holdings.</p>"
    header = "".join(f"<th>{col}</th>" for col in COLUMNS)
    body_parts = []
    for row in rows:
        body_parts.append("<tr>" + "".join(f"<td>{html.escape(row[col])}</td>" for col in COLUMNS) + "</tr>")
    body_html = "".join(body_parts)
    return f"<table><thead><tr>{header}</tr></thead><tbody>{body_html}</tbody></table>"


def render_xlsx(records: Sequence[HoldingRecord], summary: PortfolioSummary | None = None) -> bytes:
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="xlsxwriter") as writer:
        holdings_to_dataframe(records).to_excel(writer, sheet_name="holdings", index=False)
        if summary is not None:
            summary_to_dataframe(summary).astype(str).to_excel(writer, sheet_name="summary", index=False)
    buf.seek(0)
    return buf.getvalue()
