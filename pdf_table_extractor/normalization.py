from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Union

from .columns import resolve_columns
from .errors import MalformedResponse
from .formatting import is_numeric
from .models import (
    PAGE_NUMBER_KEY,
    SOURCE_TEXT_KEY,
    ExtractionResult,
    FieldSet,
    Table,
    TableMetadata,
    TableRow,
)

logger = logging.getLogger(__name__)

NO_TABLES_MESSAGE = 'No tables found.'

# Keys that identify a response body at the top level.
RESPONSE_KEYS = ('tables', 'tables_by_text', 'fields', 'message', 'error')

# Table-entry keys written by the pdfplumber-era service.
LEGACY_PROVENANCE_KEYS = ('source_text', 'page_number')
# Table-entry keys written by the current service.
PROVENANCE_KEYS = ('source', 'page', 'keyword', 'extractor')


def parse_response_body(body: Union[str, bytes]) -> Any:
    """Decode a raw response body, reporting undecodable text as malformed."""
    if isinstance(body, bytes):
        try:
            body = body.decode('utf-8')
        except UnicodeDecodeError as exc:
            raise MalformedResponse(f"Response body is not UTF-8: {exc}") from exc
    try:
        return json.loads(body)
    except (TypeError, ValueError) as exc:
        raise MalformedResponse(f"Response body is not JSON: {exc}") from exc


def normalize(raw: Any) -> ExtractionResult:
    """Reconcile any known response shape into canonical tables.

    Shapes are told apart by the keys they carry, never by a version tag:
    - ``{tables: [{source, page, keyword, extractor, data}], fields?, message?}``
    - ``{tables: [{source_text, page_number, data}], message?}``
    - ``{tables_by_text: {<search text>: {headers, rows}}}`` (earliest service)
    - ``{message?, fields?, error?}`` without tables: nothing was found.
    """
    if not isinstance(raw, dict):
        raise MalformedResponse(f"Expected a JSON object, got {type(raw).__name__}.")
    if not any(key in raw for key in RESPONSE_KEYS):
        raise MalformedResponse("Response carries none of the known keys.")

    message = _normalize_message(raw)
    fields = normalize_fields(raw.get('fields'))

    if raw.get('tables') is not None:
        tables = _normalize_table_list(raw['tables'])
    elif raw.get('tables_by_text') is not None:
        tables = _normalize_tables_by_text(raw['tables_by_text'])
    else:
        tables = []

    if not tables:
        message = message or NO_TABLES_MESSAGE

    logger.info(
        "Normalized response: %d table(s), %d row(s), fields=%s",
        len(tables),
        sum(len(t.rows) for t in tables),
        fields is not None,
    )
    return ExtractionResult(tables, fields, message)


def _normalize_message(raw: Dict[str, Any]) -> Optional[str]:
    for key in ('message', 'error'):
        value = raw.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise MalformedResponse(f"'{key}' must be text.")
        if value.strip():
            return value
    return None


def normalize_fields(raw_fields: Any) -> Optional[FieldSet]:
    if raw_fields is None:
        return None
    if not isinstance(raw_fields, dict):
        raise MalformedResponse("'fields' must be an object.")
    values: Dict[str, Optional[str]] = {}
    for name, value in raw_fields.items():
        values[str(name)] = None if value is None else _to_text(value)
    return FieldSet(**values)


def _normalize_table_list(raw_tables: Any) -> List[Table]:
    if not isinstance(raw_tables, list):
        raise MalformedResponse("'tables' must be a list.")
    return [_normalize_table_entry(index, entry) for index, entry in enumerate(raw_tables)]


def _normalize_table_entry(index: int, entry: Any) -> Table:
    if not isinstance(entry, dict):
        raise MalformedResponse(f"Table {index + 1} is not an object.")
    data = entry.get('data')
    if not isinstance(data, list):
        raise MalformedResponse(f"Table {index + 1} has no 'data' list.")

    rows = [_normalize_row(index, row) for row in data]

    if any(key in entry for key in LEGACY_PROVENANCE_KEYS):
        metadata = _legacy_metadata(entry, rows)
    elif any(key in entry for key in PROVENANCE_KEYS):
        metadata = TableMetadata(
            source=_optional_text(entry.get('source')),
            page=_optional_page(entry.get('page')),
            keyword=_optional_text(entry.get('keyword')),
            extractor=_optional_text(entry.get('extractor')),
        )
    else:
        metadata = _legacy_metadata({}, rows)

    if metadata is not None and metadata.extractor and not metadata.is_known_extractor:
        logger.debug("Table %d comes from unknown extractor %r", index + 1, metadata.extractor)

    return Table(
        id=index,
        title=derive_title(index, metadata),
        columns=resolve_columns(rows),
        rows=rows,
        metadata=metadata,
    )


def _legacy_metadata(entry: Dict[str, Any], rows: List[TableRow]) -> Optional[TableMetadata]:
    source = entry.get('source_text')
    page = entry.get('page_number')
    # pdfplumber rows repeat their provenance in reserved keys.
    if rows:
        if source is None:
            source = rows[0].get(SOURCE_TEXT_KEY)
        if page is None:
            page = rows[0].get(PAGE_NUMBER_KEY)
    if source is None and page is None:
        return None
    return TableMetadata(source=_optional_text(source), page=_optional_page(page))


def _normalize_row(index: int, row: Any) -> TableRow:
    if not isinstance(row, dict):
        raise MalformedResponse(f"Table {index + 1} contains a row that is not an object.")
    return {str(key): _to_cell(value) for key, value in row.items()}


def _normalize_tables_by_text(raw: Any) -> List[Table]:
    if not isinstance(raw, dict):
        raise MalformedResponse("'tables_by_text' must be an object.")
    tables: List[Table] = []
    for index, (search_text, entry) in enumerate(raw.items()):
        if not isinstance(entry, dict):
            raise MalformedResponse(f"Table '{search_text}' is not an object.")
        headers = entry.get('headers')
        raw_rows = entry.get('rows')
        if not isinstance(headers, list) or not isinstance(raw_rows, list):
            raise MalformedResponse(f"Table '{search_text}' needs 'headers' and 'rows' lists.")

        names = _dedupe_headers(headers)
        rows: List[TableRow] = []
        for raw_row in raw_rows:
            if not isinstance(raw_row, list):
                raise MalformedResponse(f"Table '{search_text}' contains a row that is not a list.")
            row: TableRow = dict.fromkeys(names)
            for position, value in enumerate(raw_row):
                name = names[position] if position < len(names) else f"Column_{position + 1}"
                row[name] = _to_cell(value)
            rows.append(row)

        metadata = TableMetadata(keyword=str(search_text))
        columns = resolve_columns([dict.fromkeys(names)] + rows)
        tables.append(Table(
            id=index,
            title=str(search_text).strip() or derive_title(index, None),
            columns=columns,
            rows=rows,
            metadata=metadata,
        ))
    return tables


def _dedupe_headers(headers: List[Any]) -> List[str]:
    names: List[str] = []
    counts: Dict[str, int] = {}
    for header in headers:
        name = '' if header is None else str(header).strip()
        name = name or 'Unnamed'
        counts[name] = counts.get(name, 0) + 1
        if counts[name] > 1:
            name = f"{name}_{counts[name]}"
        names.append(name)
    return names


def derive_title(index: int, metadata: Optional[TableMetadata]) -> str:
    if metadata is not None:
        has_page = metadata.page is not None and str(metadata.page) != ''
        if metadata.source and has_page:
            return f"Table from {metadata.source} (Page {metadata.page})"
        if metadata.source:
            return f"Table from {metadata.source}"
        if has_page:
            return f"Page {metadata.page}"
        if metadata.keyword:
            return f"Keyword: {metadata.keyword}"
    return f"Table {index + 1}"


def _to_cell(value: Any):
    if value is None or isinstance(value, str) or is_numeric(value):
        return value
    return _to_text(value)


def _to_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, dict, list)):
        try:
            return json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError):
            return str(value)
    return str(value)


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = _to_text(value).strip()
    return text or None


def _optional_page(value: Any):
    if value is None or is_numeric(value):
        return value
    text = _to_text(value).strip()
    return text or None
