from __future__ import annotations

from typing import Iterable, List, Mapping, Union

from .models import RESERVED_KEYS, Table


def resolve_columns(source: Union[Table, Iterable[Mapping]]) -> List[str]:
    """Union of row keys in first-seen order, reserved metadata keys excluded.

    Every row is scanned; sparse rows may introduce columns late in the table.
    For a table, its declared columns come first, so header-only tables keep
    their headers.
    """
    if isinstance(source, Table):
        rows = [dict.fromkeys(source.columns)] + list(source.rows)
    else:
        rows = source
    seen = set()
    columns: List[str] = []
    for row in rows:
        for key in row.keys():
            if key in RESERVED_KEYS or key in seen:
                continue
            seen.add(key)
            columns.append(key)
    return columns
