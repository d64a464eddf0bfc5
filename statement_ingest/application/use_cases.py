"""Application services orchestrating statement ingestion."""
from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from statement_ingest.application.dto import IngestionReport, UploadRequest
from statement_ingest.application.locks import DepotLocks
from statement_ingest.domain.repositories import HoldingStore, TextExtractor
from statement_ingest.domain.results import ParseOutcome
from statement_ingest.domain.services import PortfolioAggregator, PortfolioSummary
from statement_ingest.infrastructure.extraction.text_extractor import PlainTextExtractor
from statement_ingest.infrastructure.parsing.statement import StatementParser

logger = structlog.get_logger(__name__)

_SHARED_LOCKS = DepotLocks()


@dataclass(slots=True)
class IngestionContext:
    store: HoldingStore
    parser: StatementParser = field(default_factory=StatementParser)
    locks: DepotLocks = field(default_factory=lambda: _SHARED_LOCKS)


class IngestStatementUseCase:
    """Parses one statement and replaces the stored holdings of its depot."""

    def __init__(self, context: IngestionContext) -> None:
        self._context = context

    def execute(self, raw_text: str) -> IngestionReport:
        outcome = self._context.parser.parse(raw_text)
        self._store(outcome)
        return IngestionReport(
            depot_id=outcome.depot_id,
            record_count=len(outcome.records),
            skipped_row_count=outcome.skipped_row_count,
            format_kind=outcome.format_kind,
            statement_date=outcome.header.statement_date,
            issues=outcome.issues,
        )

    def _store(self, outcome: ParseOutcome) -> None:
        depot_id = outcome.depot_id
        store = self._context.store
        with self._context.locks.hold(depot_id):
            store.upsert_client_tag(depot_id)
            store.replace_holdings(depot_id, outcome.records)
        logger.info(
            "statement_ingested",
            depot_id=depot_id,
            records=len(outcome.records),
            skipped=outcome.skipped_row_count,
        )


class IngestUploadUseCase:
    """Extracts text from an uploaded file, then ingests it."""

    def __init__(self, context: IngestionContext, extractor: TextExtractor | None = None) -> None:
        self._ingest = IngestStatementUseCase(context)
        self._extractor = extractor or PlainTextExtractor()

    def execute(self, request: UploadRequest) -> IngestionReport:
        text = self._extractor.extract(request.content, request.filename)
        logger.info("upload_received", filename=request.filename, bytes=len(request.content))
        return self._ingest.execute(text)


class PortfolioSummaryUseCase:
    def __init__(self, store: HoldingStore, aggregator: PortfolioAggregator | None = None) -> None:
        self._store = store
        self._aggregator = aggregator or PortfolioAggregator()

    def execute(self, depot_id: str) -> PortfolioSummary:
        records = self._store.find_holdings(depot_id)
        return self._aggregator.summarize(depot_id, records)


def ingest(raw_text: str, store: HoldingStore) -> IngestionReport:
    """Parse ``raw_text`` and replace the holdings of its depot in ``store``."""
    return IngestStatementUseCase(IngestionContext(store=store)).execute(raw_text)
