from unittest.mock import Mock

import pytest

from pdf_table_extractor.errors import MalformedResponse, TransportError
from pdf_table_extractor.session import EXTRACTION_FAILED_MESSAGE, SessionState


def test_successful_upload_replaces_tables(session, current_payload, legacy_payload):
    client = Mock()
    client.upload_pdf.return_value = current_payload
    assert session.run_upload("a.pdf", client)
    assert len(session.tables) == 2
    assert session.fields is not None

    client.upload_pdf.return_value = legacy_payload
    session.run_upload("b.pdf", client)

    assert [t.title for t in session.tables] == ["Table from Summary of Benefits (Page 2)"]
    assert session.fields is None
    assert session.busy is False
    assert session.error is None


def test_upload_is_ignored_while_busy(session):
    client = Mock()
    session.busy = True

    assert session.run_upload("a.pdf", client) is False
    client.upload_pdf.assert_not_called()


def test_busy_is_set_during_request(session, current_payload):
    seen = []

    def upload(path):
        seen.append(session.busy)
        return current_payload

    client = Mock()
    client.upload_pdf.side_effect = upload

    session.run_upload("a.pdf", client)

    assert seen == [True]
    assert session.busy is False


def test_transport_error_clears_tables(session, current_payload):
    session.load_payload(current_payload)
    client = Mock()
    client.upload_pdf.side_effect = TransportError("File too large", status_code=413)

    session.run_upload("a.pdf", client)

    assert session.tables == []
    assert session.fields is None
    assert session.error == "File too large"
    assert session.busy is False


def test_malformed_response_clears_tables(session, current_payload):
    session.load_payload(current_payload)
    client = Mock()
    client.upload_pdf.return_value = ["not", "an", "object"]

    session.run_upload("a.pdf", client)

    assert session.tables == []
    assert session.error == EXTRACTION_FAILED_MESSAGE
    assert session.busy is False


def test_unexpected_error_still_releases_busy(session):
    client = Mock()
    client.upload_pdf.side_effect = RuntimeError("boom")

    with pytest.raises(RuntimeError):
        session.run_upload("a.pdf", client)

    assert session.busy is False


def test_no_tables_is_not_an_error(session):
    result = session.load_payload({"message": "Nothing here."})

    assert result.tables == []
    assert session.error is None
    assert session.message == "Nothing here."


def test_clear_and_table_at(current_payload):
    session = SessionState()
    session.load_payload(current_payload)

    assert session.table_at(1).title == "Keyword: Surrender Value"
    assert session.table_at(5) is None

    session.clear()

    assert session.tables == []
    assert session.table_at(0) is None


def test_undecodable_body_clears_tables(session, current_payload):
    session.load_payload(current_payload)
    client = Mock()
    client.upload_pdf.side_effect = MalformedResponse("Response body is not JSON")

    assert session.run_upload("a.pdf", client)

    assert session.tables == []
    assert session.fields is None
    assert session.error == EXTRACTION_FAILED_MESSAGE
    assert session.busy is False
