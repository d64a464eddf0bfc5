"""Central configuration for the statement ingestion package."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# Marker literals as rendered by the upstream statement exporter.
DEPOT_MARKER = "**Depot:**"
DATE_MARKER = "**Datum:**"
TABLE_HEADER_MARKER = "| STK. / Nominale |"
TABLE_HEADER_FRAGMENT = "STK. / Nominale"

BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = Path(os.environ.get("STATEMENT_INGEST_DATA_DIR", BASE_DIR / "data"))
STORE_DIR = DATA_DIR / "store"


@dataclass(slots=True, frozen=True)
class Settings:
    depot_marker: str
    date_marker: str
    table_header_marker: str
    table_header_fragment: str
    data_dir: Path
    store_dir: Path
    log_level: str
    log_format: str


SETTINGS = Settings(
    depot_marker=DEPOT_MARKER,
    date_marker=DATE_MARKER,
    table_header_marker=TABLE_HEADER_MARKER,
    table_header_fragment=TABLE_HEADER_FRAGMENT,
    data_dir=DATA_DIR,
    store_dir=STORE_DIR,
    log_level=os.environ.get("STATEMENT_INGEST_LOG_LEVEL", "INFO").upper(),
    log_format=os.environ.get("STATEMENT_INGEST_LOG_FORMAT", "console").lower(),
)
