"""
mojalbum_downloader.extraction
==============================
Sub-package for reading links out of MojAlbum pages.

Public API
----------
    from mojalbum_downloader.extraction import (
        AlbumRef, extract_album_links, extract_image_links,
        extract_next_page_link, find_image_url,
    )
"""

from .html_parser import parse_html
from .images import find_image_url
from .links import (
    AlbumRef,
    extract_album_links,
    extract_image_links,
    extract_next_page_link,
)

__all__ = [
    "AlbumRef",
    "parse_html",
    "extract_album_links",
    "extract_image_links",
    "extract_next_page_link",
    "find_image_url",
]
