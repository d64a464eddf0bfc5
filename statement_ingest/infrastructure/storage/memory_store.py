"""In-process holding store."""
from __future__ import annotations

import threading
from typing import Sequence

from statement_ingest.domain.models import ClientRecord, HoldingRecord


class InMemoryHoldingStore:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._holdings: dict[str, tuple[HoldingRecord, ...]] = {}
        self._clients: dict[str, ClientRecord] = {}

    def find_holdings(self, depot_id: str) -> Sequence[HoldingRecord]:
        with self._lock:
            return list(self._holdings.get(depot_id, ()))

    def replace_holdings(self, depot_id: str, records: Sequence[HoldingRecord]) -> None:
        snapshot = tuple(records)
        with self._lock:
            self._holdings[depot_id] = snapshot

    def upsert_client_tag(self, depot_id: str) -> None:
        with self._lock:
            self._clients[depot_id] = ClientRecord.for_depot(depot_id)

    def find_client(self, depot_id: str) -> ClientRecord | None:
        with self._lock:
            return self._clients.get(depot_id)

    def list_depots(self) -> list[str]:
        with self._lock:
            return sorted(self._holdings)
