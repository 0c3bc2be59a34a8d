from __future__ import annotations

from typing import Optional


class TableExtractorError(Exception):
    """Base class for every error raised by this package."""


class MalformedResponse(TableExtractorError):
    """The service answered with a body matching none of the known shapes."""


class ColumnlessTable(TableExtractorError):
    """A table whose rows contribute no data column; it cannot be exported."""

    def __init__(self, title: str):
        super().__init__(f"No columns found for table '{title}'.")
        self.title = title


class TransportError(TableExtractorError):
    """Network or HTTP failure while uploading the PDF."""

    def __init__(self, detail: str, status_code: Optional[int] = None):
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code
