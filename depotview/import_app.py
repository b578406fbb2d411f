import streamlit as st
import pandas as pd

from depotview.exceptions import DepotViewError
from depotview.export import bank_template, export_banks, export_positions, position_template
from depotview.files import read_upload
from depotview.importer import commit_banks, commit_positions
from depotview.models import MergeStrategy
from depotview.parsers.batch import BANK_KIND, ParseResult, parse_bank_csv, parse_position_csv
from depotview.store import InMemoryRecordStore

STAGED_RESULT_KEY = 'depotview_import_preview'
STORE_KEY = 'depotview_store'


def build_error_lines(result: ParseResult):
    """One line per row error, e.g. 'Row 3: Bank name is required'"""
    return [f"Row {error.row}: {error.error}" for error in result.errors]


def can_commit(result: ParseResult) -> bool:
    """A result may be committed only when it has rows and no errors"""
    return result is not None and not result.has_errors and bool(result.success)


def records_frame(records) -> pd.DataFrame:
    return pd.DataFrame([record.to_dict() for record in records])


def _get_store() -> InMemoryRecordStore:
    if STORE_KEY not in st.session_state:
        st.session_state[STORE_KEY] = InMemoryRecordStore()
    return st.session_state[STORE_KEY]


def _staged_result():
    payload = st.session_state.get(STAGED_RESULT_KEY)
    if payload is None:
        return None, None
    return ParseResult.from_dict(payload['result']), payload.get('bank_id')


def _stage_result(result: ParseResult, bank_id=None):
    # Staged as plain data so the decision survives reruns
    st.session_state[STAGED_RESULT_KEY] = {'result': result.to_dict(), 'bank_id': bank_id}


def _clear_staged():
    st.session_state.pop(STAGED_RESULT_KEY, None)


def _render_preview(store: InMemoryRecordStore):
    result, bank_id = _staged_result()
    if result is None:
        st.info("Upload a CSV file in the sidebar to preview an import.")
        return

    col1, col2, col3 = st.columns(3)
    col1.metric("Rows", result.total_rows)
    col2.metric("Valid", len(result.success))
    col3.metric("Errors", len(result.errors))

    if result.has_errors:
        st.error(f"❌ {len(result.errors)} row(s) have errors. Fix the file and upload it again.")
        for line in build_error_lines(result):
            st.markdown(f"- {line}")
    elif not result.success:
        st.warning("The file contains no data rows.")
    else:
        st.success("✅ All rows are valid.")

    st.subheader("📋 Preview")
    st.dataframe(result.to_frame(), width='stretch')

    target = "banks" if result.kind == BANK_KIND else f"positions of bank {bank_id}"
    replace_col, append_col, cancel_col = st.columns(3)
    committable = can_commit(result)

    strategy = None
    if replace_col.button(f"♻️ Replace all {target}", disabled=not committable):
        strategy = MergeStrategy.REPLACE
    if append_col.button(f"➕ Append to {target}", disabled=not committable):
        strategy = MergeStrategy.APPEND
    if cancel_col.button("✖️ Cancel"):
        _clear_staged()
        st.rerun()

    if strategy is not None:
        try:
            if result.kind == BANK_KIND:
                summary = commit_banks(store, result, strategy)
            else:
                summary = commit_positions(store, result, bank_id, strategy)
        except DepotViewError as e:
            st.error(f"❌ Import failed: {e}")
            return
        _clear_staged()
        st.success(f"✅ Imported {summary.imported} record(s) ({summary.strategy.value}).")


def create_import_dashboard():
    st.set_page_config(page_title="DepotView Import", page_icon="📥", layout="wide")

    st.title("📥 DepotView Import & Export")
    st.markdown("**Review spreadsheet imports before they touch your depots**")

    store = _get_store()
    banks = store.list_banks()

    # Sidebar: what to import
    st.sidebar.header("📂 Import")
    kind = st.sidebar.radio("Import type", ["Banks", "Positions"])

    bank_id = None
    if kind == "Positions":
        if not banks:
            st.sidebar.warning("Import banks first: positions belong to a bank.")
        else:
            names = {bank.id: bank.name for bank in banks}
            bank_id = st.sidebar.selectbox(
                "Target bank", list(names), format_func=lambda bid: names[bid]
            )

    uploaded = st.sidebar.file_uploader("Upload CSV", type=['csv'])
    if uploaded is not None and st.sidebar.button("🔍 Preview import"):
        try:
            content = read_upload(uploaded)
            if kind == "Banks":
                _stage_result(parse_bank_csv(content))
            elif bank_id is not None:
                _stage_result(parse_position_csv(content, bank_id), bank_id)
        except DepotViewError as e:
            st.sidebar.error(f"❌ Error reading file: {e}")

    # Sidebar: templates and exports
    st.sidebar.markdown("---")
    st.sidebar.header("📄 Templates & Export")
    for document in (bank_template(), position_template()):
        st.sidebar.download_button(
            f"Download {document.filename}", document.content,
            file_name=document.filename, mime=document.mime_type
        )

    if banks:
        document = export_banks(banks)
        st.sidebar.download_button(
            "💾 Export banks", document.content,
            file_name=document.filename, mime=document.mime_type
        )
        if bank_id is not None:
            bank = store.get_bank(bank_id)
            document = export_positions(store.list_positions(bank_id), bank.name)
            st.sidebar.download_button(
                "💾 Export positions", document.content,
                file_name=document.filename, mime=document.mime_type
            )

    _render_preview(store)

    st.markdown("---")
    st.subheader("🏦 Current depots")
    if banks:
        st.dataframe(records_frame(store.list_banks()), width='stretch')
        positions = store.list_positions()
        if positions:
            st.dataframe(records_frame(positions), width='stretch')
    else:
        st.caption("No banks yet.")


def launch_import_dashboard():
    create_import_dashboard()


if __name__ == "__main__":
    launch_import_dashboard()
