"""Portfolio statement ingestion toolkit."""
from statement_ingest.application.use_cases import (
    IngestionContext,
    IngestStatementUseCase,
    IngestUploadUseCase,
    ingest,
)
from statement_ingest.domain.models import FormatKind, HoldingRecord, StatementHeader
from statement_ingest.infrastructure.parsing.statement import StatementParser
from statement_ingest.infrastructure.storage.json_store import JsonHoldingStore
from statement_ingest.infrastructure.storage.memory_store import InMemoryHoldingStore

__all__ = [
    "IngestionContext",
    "IngestStatementUseCase",
    "IngestUploadUseCase",
    "ingest",
    "FormatKind",
    "HoldingRecord",
    "StatementHeader",
    "StatementParser",
    "JsonHoldingStore",
    "InMemoryHoldingStore",
]
