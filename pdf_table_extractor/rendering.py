from __future__ import annotations

import html
from typing import List, Optional

from .columns import resolve_columns
from .formatting import format_field_value, format_value
from .models import FieldSet, Table, field_label

NO_COLUMNS_MESSAGE = 'No columns found for this table.'
NO_ROWS_MESSAGE = 'No data available'


def render_table_html(table: Table) -> str:
    title = html.escape(table.title)
    columns = resolve_columns(table)
    if not columns:
        return (
            f'<div class="extracted-table"><h3>{title}</h3>'
            f'<p class="columnless-warning" style="color:#dc2626">{NO_COLUMNS_MESSAGE}</p></div>'
        )

    parts = [f'<div class="extracted-table"><h3>{title}</h3>', '<table><thead><tr>']
    for col in columns:
        parts.append(f'<th style="text-align:left">{html.escape(col)}</th>')
    parts.append('</tr></thead><tbody>')

    if not table.rows:
        parts.append(f'<tr><td colspan="{len(columns)}" style="text-align:center">{NO_ROWS_MESSAGE}</td></tr>')
    for row in table.rows:
        parts.append('<tr>')
        for col in columns:
            cell = format_value(row.get(col))
            text = html.escape(cell.text).replace('\n', '<br>')
            parts.append(f'<td style="text-align:{cell.align}">{text}</td>')
        parts.append('</tr>')

    parts.append('</tbody></table></div>')
    return ''.join(parts)


def render_tables_html(tables: List[Table]) -> str:
    if not tables:
        return ''
    return '\n'.join(render_table_html(table) for table in tables)


def fields_to_rows(fields: Optional[FieldSet]) -> List[List[str]]:
    if fields is None:
        return []
    return [[field_label(name), format_field_value(value)] for name, value in fields.entries()]
