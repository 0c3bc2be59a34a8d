from __future__ import annotations

import csv
import io
import re

from .columns import resolve_columns
from .errors import ColumnlessTable
from .formatting import cell_text
from .models import Table

CSV_MIME_TYPE = 'text/csv'

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')
_WHITESPACE = re.compile(r'\s+')


def to_csv(table: Table) -> str:
    """Serialize a table to CSV text: header line, then one line per row.

    Absent cells become empty fields. Fields holding commas, quotes or line
    breaks are quoted with embedded quotes doubled.
    """
    columns = resolve_columns(table)
    if not columns:
        raise ColumnlessTable(table.title)

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator='\n')
    writer.writerow(columns)
    for row in table.rows:
        writer.writerow([cell_text(row.get(col)) for col in columns])
    return buf.getvalue()


def filename_for(table: Table, index: int) -> str:
    title = (table.title or '').strip()
    if not title:
        return f"table_{index + 1}.csv"
    name = _WHITESPACE.sub('_', title)
    name = _UNSAFE_FILENAME_CHARS.sub('_', name)
    return f"{name}.csv"
