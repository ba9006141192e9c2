import io
from unittest import mock
import zipfile

import pytest
import requests

from faculty_portal.db import StorageError
from faculty_portal.errors import ValidationError
from faculty_portal.reports.attachments import attachment_filename, bundle_attachments


def response(content):
    downloaded = mock.Mock()
    downloaded.content = content
    downloaded.raise_for_status.return_value = None
    return downloaded


def archive_names(content):
    with zipfile.ZipFile(io.BytesIO(content)) as archive:
        return sorted(archive.namelist())


def test_downloads_go_under_one_folder():
    session = mock.Mock()
    session.get.side_effect = [response(b"pdf"), response(b"jpg")]

    content = bundle_attachments(
        ["https://files.example.com/report.pdf", "https://files.example.com/photos/day%201.jpg"],
        session=session, timeout=5
    )

    assert archive_names(content) == ["event_attachments/day 1.jpg", "event_attachments/report.pdf"]
    session.get.assert_any_call("https://files.example.com/report.pdf", timeout=5)


def test_failed_download_is_skipped():
    session = mock.Mock()
    session.get.side_effect = [requests.ConnectionError("refused"), response(b"ok")]

    content = bundle_attachments(
        ["https://files.example.com/a.pdf", "https://files.example.com/b.pdf"], session=session
    )

    assert archive_names(content) == ["event_attachments/b.pdf"]


def test_duplicate_names_are_numbered():
    session = mock.Mock()
    session.get.side_effect = [response(b"1"), response(b"2")]

    content = bundle_attachments(
        ["https://a.example.com/photo.jpg", "https://b.example.com/photo.jpg"], session=session
    )

    assert archive_names(content) == ["event_attachments/2_photo.jpg", "event_attachments/photo.jpg"]


def test_all_downloads_failing():
    session = mock.Mock()
    failed = response(b"")
    failed.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
    session.get.return_value = failed

    with pytest.raises(StorageError):
        bundle_attachments(["https://files.example.com/missing.pdf"], session=session)


def test_no_attachments():
    with pytest.raises(ValidationError):
        bundle_attachments(["", None])


def test_attachment_filename_fallback():
    assert attachment_filename("https://files.example.com/", 2) == "attachment_3"


def test_own_session_is_closed():
    with mock.patch('faculty_portal.reports.attachments.requests.Session') as session_class:
        opened = session_class.return_value
        opened.__enter__.return_value.get.return_value = response(b"pdf")

        bundle_attachments(["https://files.example.com/report.pdf"])

    opened.__exit__.assert_called_once()


def test_own_session_is_closed_when_nothing_downloads():
    with mock.patch('faculty_portal.reports.attachments.requests.Session') as session_class:
        opened = session_class.return_value
        opened.__enter__.return_value.get.side_effect = requests.ConnectionError("refused")

        with pytest.raises(StorageError):
            bundle_attachments(["https://files.example.com/report.pdf"])

    opened.__exit__.assert_called_once()


def test_given_session_stays_open():
    session = mock.Mock()
    session.get.return_value = response(b"pdf")

    bundle_attachments(["https://files.example.com/report.pdf"], session=session)

    session.close.assert_not_called()
