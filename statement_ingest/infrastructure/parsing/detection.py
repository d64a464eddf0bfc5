"""Statement layout detection."""
from __future__ import annotations

from typing import Iterable

from statement_ingest.config import SETTINGS
from statement_ingest.domain.models import FormatKind


def detect_format(lines: Iterable[str], marker: str = SETTINGS.table_header_marker) -> FormatKind:
    if any(marker in line for line in lines):
        return FormatKind.TABLE
    return FormatKind.LINE_ORIENTED
