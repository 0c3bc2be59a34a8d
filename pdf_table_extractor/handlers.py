from __future__ import annotations

import logging

import gradio as gr

from .csv_export import CSV_MIME_TYPE, filename_for, to_csv
from .errors import ColumnlessTable, MalformedResponse
from .io_utils import emit_download, read_saved_response, resolve_upload_path
from .rendering import fields_to_rows, render_tables_html
from .session import SessionState

logger = logging.getLogger(__name__)


def new_session() -> SessionState:
    return SessionState()


def status_text(session: SessionState) -> str:
    if session.error:
        return session.error
    if not session.tables:
        return session.message or ""
    summary = f"Extracted {len(session.tables)} table(s)."
    columnless = sum(1 for t in session.tables if t.columnless)
    if columnless:
        summary += f" {columnless} without columns."
    if session.message:
        summary += f" {session.message}"
    return summary


def export_choices(session: SessionState):
    """Dropdown choices for CSV export; columnless tables are left out."""
    return [(t.title, idx) for idx, t in enumerate(session.tables) if not t.columnless]


def session_outputs(session: SessionState):
    choices = export_choices(session)
    dropdown = gr.update(choices=choices, value=choices[0][1] if choices else None)
    return (
        session,
        status_text(session),
        render_tables_html(session.tables),
        fields_to_rows(session.fields),
        dropdown,
    )


def lock_upload_button(session: SessionState):
    if session is not None and session.busy:
        return gr.update()
    return gr.update(interactive=False, value="Processing...")


def handle_pdf_upload(file_obj, session: SessionState, client):
    if session is None:
        session = new_session()
    path = resolve_upload_path(file_obj)
    if not session.run_upload(path, client):
        return session_outputs(session) + (gr.update(),)
    return session_outputs(session) + (gr.update(interactive=True, value="Upload PDF"),)


def handle_saved_response(file_obj, session: SessionState):
    """Display a previously saved extraction response (JSON file)."""
    if session is None:
        session = new_session()
    if file_obj is None:
        return session_outputs(session)

    try:
        raw = read_saved_response(file_obj)
    except MalformedResponse as e:
        session.clear()
        session.error = f"Error parsing JSON: {str(e)}"
        return session_outputs(session)
    except OSError as e:
        session.clear()
        session.error = f"Error reading file: {str(e)}"
        return session_outputs(session)

    session.load_payload(raw)
    return session_outputs(session)


def handle_clear(session: SessionState):
    if session is None:
        session = new_session()
    session.clear()
    return session_outputs(session) + (None,)


def export_table_handler(session: SessionState, table_index):
    if session is None or not session.tables:
        return None, "No tables loaded."
    if table_index is None:
        return None, "Select a table to export."

    index = int(table_index)
    table = session.table_at(index)
    if table is None:
        return None, "Selected table is no longer available."

    try:
        content = to_csv(table)
    except ColumnlessTable as exc:
        return None, str(exc)

    file_name = filename_for(table, index)
    try:
        path = emit_download(content, CSV_MIME_TYPE, file_name)
    except (OSError, ValueError) as e:
        logger.exception("CSV export of %r failed", table.title)
        return None, f"Error during export: {str(e)}"

    return path, f"Export successful! Saved {file_name} ({len(table.rows)} rows)."
