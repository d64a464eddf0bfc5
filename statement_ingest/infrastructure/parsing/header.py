"""Depot id and statement date extraction from free statement text."""
from __future__ import annotations

from typing import Iterable

from statement_ingest.config import SETTINGS
from statement_ingest.domain.models import StatementHeader


def _strip_marker(line: str, marker: str) -> str:
    return line.replace(marker, "").strip()


def extract_header(
    lines: Iterable[str],
    depot_marker: str = SETTINGS.depot_marker,
    date_marker: str = SETTINGS.date_marker,
) -> StatementHeader:
    """Scan every line; the last line carrying a marker wins.

    A line holding the depot marker is not inspected for the date marker.
    Missing markers leave the field empty, so this never fails.
    """
    depot_id = ""
    statement_date = ""
    for raw in lines:
        line = raw.strip()
        if depot_marker in line:
            depot_id = _strip_marker(line, depot_marker)
        elif date_marker in line:
            statement_date = _strip_marker(line, date_marker)
    return StatementHeader(depot_id=depot_id, statement_date=statement_date)
