import csv
import io
from pathlib import Path

from statement_ingest.cli import main
from statement_ingest.infrastructure.storage.json_store import JsonHoldingStore

STATEMENT = """**Depot:** CLI001
**Datum:** 01.12.2024

| STK. / Nominale | Wertpapierbezeichnung | Ticker | Kurs pro Stück (EUR) | Kursdatum | Kurswert (EUR) |
|-----------------|-----------------------|--------|----------------------|-----------|----------------|
| 10,00 | Tesla Inc.<br>ISIN: US88160R1014 | TSLA | 250,50 | 01.12.2024 | 2.505,00 |
| 5,00 | Incomplete Row |
"""


def test_cli_ingests_and_exports(tmp_path: Path, capsys):
    statement = tmp_path / "portfolio.md"
    statement.write_text(STATEMENT, encoding="utf-8")
    store_dir = tmp_path / "store"
    export_path = tmp_path / "export.csv"

    exit_code = main([str(statement), "--store", str(store_dir), "--export", str(export_path)])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "Depot: CLI001" in out
    assert "Records: 1" in out
    assert "Skipped rows: 1" in out
    assert [record.isin for record in JsonHoldingStore(store_dir).find_holdings("CLI001")] == ["US88160R1014"]
    rows = list(csv.DictReader(io.StringIO(export_path.read_text(encoding="utf-8"))))
    assert rows[0]["asset_name"] == "Tesla Inc."


def test_cli_reports_unsupported_files(tmp_path: Path, capsys):
    statement = tmp_path / "portfolio.pdf"
    statement.write_bytes(b"%PDF-1.7")

    exit_code = main([str(statement), "--store", str(tmp_path / "store")])

    assert exit_code == 1
    assert "portfolio.pdf" in capsys.readouterr().err
