"""Client-side logic for the PDF Table Extractor.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- normalize the extraction service's response shapes into canonical tables
- resolve display columns and format cell values
- serialize a table to CSV for download
plus the thin upload client and per-session state the UI drives.
"""
