"""Command-line entrypoint for statement ingestion."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from statement_ingest.application.dto import UploadRequest
from statement_ingest.application.use_cases import (
    IngestionContext,
    IngestUploadUseCase,
    PortfolioSummaryUseCase,
)
from statement_ingest.config import SETTINGS
from statement_ingest.domain.errors import StatementIngestError
from statement_ingest.infrastructure.extraction.text_extractor import ensure_bytes
from statement_ingest.infrastructure.storage.json_store import JsonHoldingStore
from statement_ingest.logging_config import configure_logging
from statement_ingest.presentation.holdings_report import render_csv, render_xlsx


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Ingest portfolio statements into the holding store")
    parser.add_argument("statements", nargs="+", type=Path, help="Statement text or markdown files")
    parser.add_argument("--store", type=Path, default=SETTINGS.store_dir, help="Directory of the JSON holding store")
    parser.add_argument("--export", type=Path, help="Write the ingested holdings to a .csv or .xlsx file")
    parser.add_argument("--log-level", type=str, default=SETTINGS.log_level, help="Log level (default: INFO)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv or sys.argv[1:])
    configure_logging(args.log_level)

    store = JsonHoldingStore(args.store)
    use_case = IngestUploadUseCase(IngestionContext(store=store))

    exit_code = 0
    depots: list[str] = []
    for path in args.statements:
        try:
            report = use_case.execute(UploadRequest(filename=path.name, content=ensure_bytes(path)))
        except (OSError, StatementIngestError) as exc:
            print(f"{path}: {exc}", file=sys.stderr)
            exit_code = 1
            continue

        depots.append(report.depot_id)
        print(f"{path.name}")
        print("=" * len(path.name))
        print(f"Depot: {report.depot_id or '(none)'}")
        print(f"Statement date: {report.statement_date or '(none)'}")
        print(f"Format: {report.format_kind.value}")
        print(f"Records: {report.record_count}")
        print(f"Skipped rows: {report.skipped_row_count}")
        for issue in report.issues:
            print(f"- line {issue.line_number} ({issue.kind}): {issue.message}")
        print()

    if args.export and depots:
        records = [record for depot_id in dict.fromkeys(depots) for record in store.find_holdings(depot_id)]
        if args.export.suffix.lower() == ".xlsx":
            summary = PortfolioSummaryUseCase(store).execute(depots[-1]) if len(set(depots)) == 1 else None
            args.export.write_bytes(render_xlsx(records, summary))
        else:
            args.export.write_bytes(render_csv(records))
        print(f"Exported {len(records)} holdings to {args.export}")

    return exit_code


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
