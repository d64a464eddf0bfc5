"""JSON-file backed holding store.

Every depot owns its own documents under the store root::

    <root>/holdings/depot-<quoted id>.json   [{...}, ...]
    <root>/clients/depot-<quoted id>.json    {...}

Writes go to a temporary sibling file that is then moved over the original,
so a depot's holdings are replaced in one step and writers for different
depots, even in different processes, never touch the same file.
"""
from __future__ import annotations

import json
import os
import tempfile
import threading
from decimal import Decimal
from pathlib import Path
from typing import Any, Sequence
from urllib.parse import quote, unquote

import structlog

from statement_ingest.config import SETTINGS
from statement_ingest.domain.errors import StorageError
from statement_ingest.domain.models import ClientRecord, HoldingRecord

logger = structlog.get_logger(__name__)

DECIMAL_FIELDS = ("quantity", "unit_price", "total_value")
FILE_PREFIX = "depot-"
FILE_SUFFIX = ".json"


def depot_filename(depot_id: str) -> str:
    return f"{FILE_PREFIX}{quote(depot_id, safe='')}{FILE_SUFFIX}"


def depot_from_filename(name: str) -> str | None:
    if not (name.startswith(FILE_PREFIX) and name.endswith(FILE_SUFFIX)):
        return None
    return unquote(name[len(FILE_PREFIX) : -len(FILE_SUFFIX)])


def record_to_dict(record: HoldingRecord) -> dict[str, str]:
    return {
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


def record_from_dict(raw: dict[str, Any]) -> HoldingRecord:
    values = {key: Decimal(str(raw[key])) for key in DECIMAL_FIELDS}
    return HoldingRecord(
        depot_id=str(raw.get("depot_id", "")),
        instrument_key=str(raw.get("instrument_key", "")),
        asset_name=str(raw.get("asset_name", "")),
        isin=str(raw.get("isin", "")),
        ticker=str(raw.get("ticker", "")),
        date=str(raw.get("date", "")),
        **values,
    )


class JsonHoldingStore:
    def __init__(self, root: Path | None = None) -> None:
        self._root = Path(root or SETTINGS.store_dir)
        self._lock = threading.Lock()

    @property
    def root(self) -> Path:
        return self._root

    def holdings_path(self, depot_id: str) -> Path:
        return self._root / "holdings" / depot_filename(depot_id)

    def client_path(self, depot_id: str) -> Path:
        return self._root / "clients" / depot_filename(depot_id)

    def find_holdings(self, depot_id: str) -> Sequence[HoldingRecord]:
        raw = self._read(self.holdings_path(depot_id), default=[])
        if not isinstance(raw, list):
            raise StorageError(f"Holdings file for depot {depot_id!r} is not a JSON list")
        return [record_from_dict(item) for item in raw]

    def replace_holdings(self, depot_id: str, records: Sequence[HoldingRecord]) -> None:
        path = self.holdings_path(depot_id)
        with self._lock:
            self._write(path, [record_to_dict(record) for record in records])
        logger.info("holdings_replaced", depot_id=depot_id, inserted=len(records))

    def upsert_client_tag(self, depot_id: str) -> None:
        client = ClientRecord.for_depot(depot_id)
        payload = {
            "id": client.id,
            "name": client.name,
            "email": client.email,
            "birth_date": client.birth_date,
            "depot": client.depot,
        }
        with self._lock:
            self._write(self.client_path(depot_id), payload)

    def find_client(self, depot_id: str) -> ClientRecord | None:
        raw = self._read(self.client_path(depot_id), default=None)
        if raw is None:
            return None
        return ClientRecord(**raw)

    def list_depots(self) -> list[str]:
        folder = self._root / "holdings"
        if not folder.is_dir():
            return []
        depots = (depot_from_filename(path.name) for path in folder.iterdir())
        return sorted(depot for depot in depots if depot is not None)

    @staticmethod
    def _read(path: Path, default: Any) -> Any:
        if not path.exists():
            return default
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Cannot read holding store file {path}: {exc}") from exc

    @staticmethod
    def _write(path: Path, data: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".tmp-", suffix=FILE_SUFFIX, dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, ensure_ascii=False, indent=2, sort_keys=True)
            os.replace(tmp_name, path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Cannot write holding store file {path}: {exc}") from exc
