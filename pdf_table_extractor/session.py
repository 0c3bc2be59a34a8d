from __future__ import annotations

import logging
from typing import Any, List, Optional

from .errors import MalformedResponse, TransportError
from .models import ExtractionResult, FieldSet, Table
from .normalization import normalize

logger = logging.getLogger(__name__)

EXTRACTION_FAILED_MESSAGE = 'Error extracting tables from the response.'


class SessionState:
    """Tables shown to one user, replaced wholesale by each upload.

    ``busy`` is set before a request is issued and cleared when it completes
    or fails; while it is set, further uploads are ignored.
    """

    def __init__(self):
        self.busy = False
        self.tables: List[Table] = []
        self.fields: Optional[FieldSet] = None
        self.message: Optional[str] = None
        self.error: Optional[str] = None

    def run_upload(self, path: Optional[str], client) -> bool:
        """Upload ``path`` and apply the normalized response.

        Returns ``False`` without doing anything when an upload is already in flight.
        """
        if self.busy:
            logger.info("Upload ignored: another upload is in progress")
            return False
        self.busy = True
        try:
            raw = client.upload_pdf(path)
            self.load_payload(raw)
        except TransportError as exc:
            self._fail(exc.detail)
        except MalformedResponse as exc:
            logger.warning("Undecodable extraction response: %s", exc)
            self._fail(EXTRACTION_FAILED_MESSAGE)
        finally:
            self.busy = False
        return True

    def load_payload(self, raw: Any) -> Optional[ExtractionResult]:
        """Normalize an already-decoded response and make it current."""
        try:
            result = normalize(raw)
        except MalformedResponse as exc:
            logger.warning("Malformed extraction response: %s", exc)
            self._fail(EXTRACTION_FAILED_MESSAGE)
            return None
        self._apply(result)
        return result

    def clear(self):
        self.tables = []
        self.fields = None
        self.message = None
        self.error = None

    def table_at(self, index: int) -> Optional[Table]:
        if 0 <= index < len(self.tables):
            return self.tables[index]
        return None

    def _apply(self, result: ExtractionResult):
        self.tables, self.fields, self.message = list(result.tables), result.fields, result.message
        self.error = None

    def _fail(self, message: str):
        self.clear()
        self.error = message
