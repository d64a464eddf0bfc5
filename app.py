"""Streamlit front-end for statement ingestion."""
from __future__ import annotations

import pandas as pd
import streamlit as st

from statement_ingest import IngestionContext, IngestUploadUseCase, JsonHoldingStore
from statement_ingest.application.dto import IngestionReport, UploadRequest
from statement_ingest.application.use_cases import PortfolioSummaryUseCase
from statement_ingest.domain.errors import StatementIngestError
from statement_ingest.logging_config import configure_logging
from statement_ingest.presentation.holdings_report import (
    holdings_to_dataframe,
    render_csv,
    render_html,
    render_xlsx,
    summary_to_dataframe,
)


configure_logging()
st.set_page_config(page_title="Statement Ingest", layout="wide")
st.title("Portfolio Statement Upload")


@st.cache_resource
def get_store() -> JsonHoldingStore:
    return JsonHoldingStore()


def issues_to_dataframe(report: IngestionReport) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"line": issue.line_number, "kind": issue.kind, "message": issue.message, "text": issue.text}
            for issue in report.issues
        ],
        columns=["line", "kind", "message", "text"],
    )


store = get_store()

if "report" not in st.session_state:
    st.session_state["report"] = None

uploaded = st.file_uploader("Upload statement", type=["txt", "md"])
run_btn = st.button("Ingest", disabled=uploaded is None)
if run_btn and uploaded is not None:
    use_case = IngestUploadUseCase(IngestionContext(store=store))
    try:
        with st.spinner("Parsing statement..."):
            report = use_case.execute(UploadRequest(filename=uploaded.name, content=uploaded.read()))
    except StatementIngestError as exc:
        st.error(exc.message)
    else:
        st.session_state["report"] = report
        st.success(report.message())

report: IngestionReport | None = st.session_state.get("report")
depots = store.list_depots()
default_depot = report.depot_id if report and report.depot_id in depots else None
depot_id = st.selectbox(
    "Depot",
    depots,
    index=depots.index(default_depot) if default_depot is not None else 0,
) if depots else None

if report is not None:
    col1, col2, col3 = st.columns(3)
    col1.metric("Records", report.record_count)
    col2.metric("Skipped rows", report.skipped_row_count)
    col3.metric("Format", report.format_kind.value)
    if report.issues:
        with st.expander("Skipped rows", expanded=False):
            st.dataframe(issues_to_dataframe(report))

if depot_id is None:
    st.info("No holdings stored yet. Upload a statement first.")
else:
    records = store.find_holdings(depot_id)
    summary = PortfolioSummaryUseCase(store).execute(depot_id)
    client = store.find_client(depot_id)
    if client is not None:
        st.caption(f"{client.name} ({client.email})")
    st.metric("Portfolio value", f"{summary.total_value:,.2f}")

    tabs = st.tabs(["Assets", "Holdings"])
    with tabs[0]:
        st.dataframe(summary_to_dataframe(summary))
    with tabs[1]:
        st.dataframe(holdings_to_dataframe(records))
        st.download_button(
            "Download CSV",
            data=render_csv(records),
            file_name=f"holdings_{depot_id}.csv",
            mime="text/csv",
        )
        st.download_button(
            "Download HTML",
            data=render_html(records).encode("utf-8"),
            file_name=f"holdings_{depot_id}.html",
            mime="text/html",
        )
        st.download_button(
            "Download Excel",
            data=render_xlsx(records, summary),
            file_name=f"holdings_{depot_id}.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )
