from __future__ import annotations

import logging
import os
from typing import Any, Optional

import requests

from .errors import MalformedResponse, TransportError
from .normalization import parse_response_body

logger = logging.getLogger(__name__)

UPLOAD_FAILED_MESSAGE = 'Error uploading PDF.'
SELECT_PDF_MESSAGE = 'Please select a PDF file.'


class ExtractionClient:
    """Posts a PDF to the extraction service and returns the decoded JSON body."""

    def __init__(self, endpoint_url: str, timeout: float = 60.0, session: Optional[requests.Session] = None):
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings) -> 'ExtractionClient':
        return cls(settings.endpoint_url, timeout=settings.timeout)

    def upload_pdf(self, path: Optional[str]) -> Any:
        if not path or not os.path.isfile(path):
            raise TransportError(SELECT_PDF_MESSAGE)
        if not path.lower().endswith('.pdf'):
            raise TransportError(SELECT_PDF_MESSAGE)

        filename = os.path.basename(path)
        logger.info("Uploading %s to %s", filename, self.endpoint_url)
        try:
            with open(path, 'rb') as f:
                response = self.session.post(
                    self.endpoint_url,
                    files={'file': (filename, f, 'application/pdf')},
                    timeout=self.timeout,
                )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            detail = error_detail(exc.response) or UPLOAD_FAILED_MESSAGE
            logger.warning("Upload of %s failed with HTTP %s: %s", filename, status, detail)
            raise TransportError(detail, status_code=status) from exc
        except requests.RequestException as exc:
            logger.warning("Upload of %s failed: %s", filename, exc)
            raise TransportError(UPLOAD_FAILED_MESSAGE) from exc

        logger.info("Received %d bytes from %s", len(response.content), self.endpoint_url)
        return parse_response_body(response.content)


def error_detail(response: Optional[requests.Response]) -> Optional[str]:
    """Pull the server's ``detail`` message out of an error body, if there is one."""
    if response is None:
        return None
    try:
        body = parse_response_body(response.content)
    except MalformedResponse:
        return None
    if isinstance(body, dict):
        detail = body.get('detail')
        if isinstance(detail, str) and detail.strip():
            return detail
    return None
