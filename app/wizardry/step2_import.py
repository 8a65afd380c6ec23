# app/wizardry/step2_import.py
import tempfile
from pathlib import Path

import streamlit as st

from app.session import run_async
from common import constants


def _upload_new_files(wizard, uploaded_files):
    seen = st.session_state.setdefault('uploaded_files_seen', set())
    new_files = [f for f in uploaded_files if f.file_id not in seen]
    if not new_files:
        return

    with tempfile.TemporaryDirectory() as tmp_dir:
        paths = []
        for uploaded in new_files:
            path = Path(tmp_dir) / uploaded.name
            path.write_bytes(uploaded.getvalue())
            paths.append(path)

        with st.spinner("Uploading files..."):
            upload_ids = run_async(wizard.add_files(paths))

    if upload_ids:
        seen.update(f.file_id for f in new_files)


def run(wizard):
    phase = wizard.import_phase
    props = phase.page_props

    uploaded_files = st.file_uploader(
        "Add files",
        type=[ext.lstrip('.') for ext in constants.SUPPORTED_IMPORT_EXTENSIONS],
        accept_multiple_files=True,
    )
    if uploaded_files:
        _upload_new_files(wizard, uploaded_files)

    if props.get("error"):
        st.error(props["error"])

    if props.get("pending_files"):
        st.write("Files ready to import:")
        for name in props["pending_files"]:
            st.write(f"• {name}")

    if props.get("needs_csv_handling") or props.get("csv_handling"):
        labels = {
            constants.CSV_HANDLING_TASKS: "List of tasks",
            constants.CSV_HANDLING_TIME_SERIES: "Time series or whole text file",
        }
        choice = st.radio(
            "Treat CSV/TSV as",
            options=constants.CSV_HANDLING_CHOICES,
            format_func=labels.get,
            index=None if props.get("csv_handling") is None
            else constants.CSV_HANDLING_CHOICES.index(props["csv_handling"]),
            key="csv_handling",
        )
        if choice != phase.csv_handling:
            phase.set_csv_handling(choice)
            st.rerun()

    if wizard.columns:
        st.caption(f"Detected columns: {', '.join(wizard.columns)}")
