"""Resolve an image detail page to its full-size file and save it."""

from __future__ import annotations

import uuid
from pathlib import Path

from .config import DEFAULT_IMAGE_EXTENSION
from .extraction.images import find_image_url
from .logging_setup import log
from .session import SiteSession
from .utils.files import clean_path_component
from .utils.url import filename_from_url


def image_file_name(image_url: str) -> str:
    """Local file name for *image_url*: its last path segment, or a
    random unique name when the URL has none."""
    fallback = uuid.uuid4().hex + DEFAULT_IMAGE_EXTENSION
    return clean_path_component(filename_from_url(image_url), fallback)


def download_image(site: SiteSession, detail_url: str, album_folder: Path) -> Path | None:
    """
    Fetch the detail page at *detail_url*, find the full-size image on it
    and save that image into *album_folder*.

    Returns the saved path, or ``None`` when the page shows no image (logged,
    not an error).  Network and file-system failures propagate.  Existing
    files are overwritten.
    """
    html = site.fetch_page(detail_url)
    found = find_image_url(html)
    if not found:
        log.warning("[MISS] Could not find image URL in %s", detail_url)
        return None

    image_url = site.absolute(found)
    local_path = album_folder / image_file_name(image_url)
    size = site.download(image_url, local_path)
    log.info("[SAVE] %s (%d bytes)", local_path, size)
    return local_path
