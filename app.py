import logging
from functools import partial

import gradio as gr

from pdf_table_extractor.config import load_settings
from pdf_table_extractor.handlers import (
    export_table_handler,
    handle_clear,
    handle_pdf_upload,
    handle_saved_response,
    lock_upload_button,
    new_session,
)
from pdf_table_extractor.transport import ExtractionClient

settings = load_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
client = ExtractionClient.from_settings(settings)

# --- UI Definition ---
with gr.Blocks(title="PDF Table Extractor") as demo:
    gr.Markdown("# PDF Table Extractor")
    gr.Markdown("Upload a PDF, review the tables the extraction service found, and download any of them as CSV.")

    # State
    session_state = gr.State(value=new_session)

    with gr.Row():
        # Left Panel: Upload
        with gr.Column(scale=1):
            gr.Markdown("### 1. Upload")
            pdf_input = gr.File(label="PDF File", file_types=[".pdf"])
            upload_btn = gr.Button("Upload PDF", variant="primary")
            with gr.Accordion("Open a saved response", open=False):
                saved_input = gr.File(label="Saved Response (JSON)", file_types=[".json"])
            clear_btn = gr.Button("Clear")
            status_msg = gr.Textbox(label="Status", interactive=False)

            gr.Markdown("### 2. Extracted Fields")
            fields_table = gr.Dataframe(
                headers=["Field", "Value"],
                datatype=["str", "str"],
                col_count=(2, "fixed"),
                interactive=False,
                label="Fields",
            )

            gr.Markdown("### 3. Export")
            table_selector = gr.Dropdown(label="Table", choices=[], value=None, interactive=True)
            export_btn = gr.Button("Download CSV")
            download_output = gr.File(label="Download Result")

        # Right Panel: Tables
        with gr.Column(scale=2):
            gr.Markdown("### Tables")
            tables_view = gr.HTML()

    session_outputs = [session_state, status_msg, tables_view, fields_table, table_selector]

    upload_btn.click(
        fn=lock_upload_button,
        inputs=[session_state],
        outputs=[upload_btn],
        queue=False,
    ).then(
        fn=partial(handle_pdf_upload, client=client),
        inputs=[pdf_input, session_state],
        outputs=session_outputs + [upload_btn],
    )

    saved_input.upload(
        fn=handle_saved_response,
        inputs=[saved_input, session_state],
        outputs=session_outputs,
    )

    clear_btn.click(
        fn=handle_clear,
        inputs=[session_state],
        outputs=session_outputs + [download_output],
    )

    export_btn.click(
        fn=export_table_handler,
        inputs=[session_state, table_selector],
        outputs=[download_output, status_msg],
    )

if __name__ == "__main__":
    demo.launch()
