"""Bundling of event attachments into a zip archive."""

import io
import logging
import posixpath
from typing import Iterable, List, Optional
from urllib.parse import unquote, urlparse
import zipfile

import requests

from ..config.event_types import ATTACHMENT_DOWNLOAD_TIMEOUT
from ..db import StorageError
from ..errors import ValidationError

logger = logging.getLogger(__name__)

ARCHIVE_FOLDER = "event_attachments"


def attachment_filename(url: str, index: int) -> str:
    """File name of an attachment URL, falling back to a numbered name."""
    name = unquote(posixpath.basename(urlparse(url).path))
    return name or f"attachment_{index + 1}"


def bundle_attachments(
    urls: Iterable[str],
    session: Optional[requests.Session] = None,
    timeout: int = ATTACHMENT_DOWNLOAD_TIMEOUT
) -> bytes:
    """
    Download attachment URLs into one zip archive.

    Files are stored under 'event_attachments/'. A failed download is logged
    and left out of the archive.

    Args:
        urls: Attachment URLs
        session: HTTP session to download with; when omitted a new one is
            opened and closed around the downloads
        timeout: Seconds to wait for each download

    Returns:
        bytes: The zip archive

    Raises:
        ValidationError: If there are no URLs
        StorageError: If no attachment could be downloaded
    """
    urls = [url for url in urls if url]
    if not urls:
        raise ValidationError("This event has no attachments.")

    if session is not None:
        return _download_archive(session, urls, timeout)
    with requests.Session() as http:
        return _download_archive(http, urls, timeout)


def _download_archive(http: requests.Session, urls: List[str], timeout: int) -> bytes:
    buffer = io.BytesIO()
    used_names = set()
    downloaded = 0

    with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as archive:
        for index, url in enumerate(urls):
            try:
                response = http.get(url, timeout=timeout)
                response.raise_for_status()
            except requests.RequestException as e:
                logger.error(f"Failed to download attachment {url}: {e}")
                continue

            name = attachment_filename(url, index)
            if name in used_names:
                name = f"{index + 1}_{name}"
            used_names.add(name)
            archive.writestr(f"{ARCHIVE_FOLDER}/{name}", response.content)
            downloaded += 1

    if not downloaded:
        raise StorageError("None of the attachments could be downloaded.")

    logger.info(f"Bundled {downloaded} of {len(urls)} attachments")
    return buffer.getvalue()
