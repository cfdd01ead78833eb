"""Streamlit front-end for the geofeed verification pipeline."""
from __future__ import annotations

import pandas as pd
import streamlit as st

from geofeed_verifier import GeofeedError, GeofeedReport, VerificationOptions, verify_geofeed_content
from geofeed_verifier.config import SETTINGS
from geofeed_verifier.logging_config import configure_logging
from geofeed_verifier.presentation.diff_report import differences_to_rows, render_csv, render_html

configure_logging()

st.set_page_config(page_title="Geofeed Verifier", layout="wide")
st.title("Geofeed Verification Tool")


def run_verification(
    geofeed_bytes: bytes,
    city_db: str,
    isp_db: str,
    options: VerificationOptions,
) -> GeofeedReport:
    return verify_geofeed_content(geofeed_bytes, city_db, isp_db or None, options)


def asn_counts_to_dataframe(report: GeofeedReport) -> pd.DataFrame:
    return pd.DataFrame(report.asn_counts_by_frequency(), columns=["asn", "count"])


def invalid_samples_to_dataframe(report: GeofeedReport) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"type": str(kind), "first_occurrence": message}
            for kind, message in report.result.sample_invalid_rows.items()
        ],
        columns=["type", "first_occurrence"],
    )


if "view" not in st.session_state:
    st.session_state["view"] = "verify"
if "result" not in st.session_state:
    st.session_state["result"] = None


if st.session_state["view"] == "verify":
    geofeed_file = st.file_uploader("Upload geofeed", type=["csv", "txt"])

    col1, col2 = st.columns(2)
    with col1:
        city_db = st.text_input("City database (MMDB)", value=SETTINGS.city_db_path)
    with col2:
        isp_db = st.text_input("ISP database (MMDB, optional)", value="")

    col_opt1, col_opt2 = st.columns(2)
    with col_opt1:
        lax_mode = st.checkbox("Lax mode: accept region codes without country prefix", value=False)
    with col_opt2:
        empty_ok = st.checkbox("Treat an empty geofeed as valid", value=False)

    run_btn = st.button("Run Verification", disabled=not (geofeed_file and city_db))
    if run_btn and geofeed_file and city_db:
        options = VerificationOptions(
            lax_mode=lax_mode,
            empty_ok=empty_ok,
            hide_file_paths_in_errors=True,
        )
        try:
            with st.spinner("Verifying..."):
                report = run_verification(geofeed_file.read(), city_db.strip(), isp_db.strip(), options)
        except GeofeedError as exc:
            st.error(f"Unable to process geofeed: {exc}")
        else:
            st.session_state["result"] = {
                "name": geofeed_file.name,
                "report": report,
                "diff_csv": render_csv(report.differing_rows),
                "diff_html": render_html(report),
            }
            st.session_state["view"] = "results"
            st.rerun()
else:
    back_clicked = st.button("← Back", key="back_to_verify")
    if back_clicked:
        st.session_state["view"] = "verify"
        st.session_state["result"] = None
        st.rerun()

    result = st.session_state.get("result")
    if not result:
        st.info("No results available. Upload a geofeed and run verification first.")
    else:
        report: GeofeedReport = result["report"]
        summary = report.result

        st.subheader(f"Summary for {result['name']}")
        if report.error is not None:
            st.error(str(report.error))
        st.metric("Rows", summary.total)
        st.metric("Differences", summary.differences)
        st.metric("Invalid rows", summary.invalid)
        st.caption(f"SHA-256: {report.file_hash}")

        tabs = st.tabs(["Differences", "Invalid rows", "ASNs"])
        with tabs[0]:
            st.dataframe(pd.DataFrame(differences_to_rows(report.differing_rows)))
            st.download_button(
                "Download diff CSV",
                data=result["diff_csv"],
                file_name="geofeed_diff.csv",
                mime="text/csv",
            )
            st.download_button(
                "Download diff HTML",
                data=result["diff_html"].encode("utf-8"),
                file_name="geofeed_diff.html",
                mime="text/html",
            )
        with tabs[1]:
            st.dataframe(invalid_samples_to_dataframe(report))
        with tabs[2]:
            st.dataframe(asn_counts_to_dataframe(report))
