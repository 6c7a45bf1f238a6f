"""
Link extraction from MojAlbum listing pages.

Three independent lookups, each a pure function of the markup and the URL
it was loaded from:

* album links on an album-list page,
* image detail-page links on an album page,
* the "next page" link of a pager.

A page that lacks the expected structure simply yields nothing.
"""

from __future__ import annotations

from typing import NamedTuple

from bs4 import BeautifulSoup

from ..config import (
    ALBUM_CONTAINER_SELECTOR,
    CONTENT_URL_ITEMPROP,
    ENLARGE_SEGMENT,
    PAGER_CURRENT_SELECTOR,
    PAGER_SELECTOR,
)
from ..logging_setup import log
from ..utils.url import append_segment, resolve
from .html_parser import parse_html


class AlbumRef(NamedTuple):
    """One album: the URL of its first listing page and its display name."""

    url: str
    name: str


def _soup(html: str | bytes | BeautifulSoup) -> BeautifulSoup:
    return html if isinstance(html, BeautifulSoup) else parse_html(html)


def _resolve_href(base_url: str, href: str) -> str | None:
    try:
        return resolve(base_url, href)
    except ValueError as exc:
        log.warning("[SKIP] Malformed link %r on %s: %s", href, base_url, exc)
        return None


def extract_album_links(html, base_url: str) -> list[AlbumRef]:
    """
    Return every album linked from an album-list page, in document order.

    Albums are the ``<a href>`` children of album containers.  The name is
    the anchor text, or its ``title`` when the text is blank; anchors with
    neither are skipped.  Duplicates are kept.
    """
    albums: list[AlbumRef] = []
    for container in _soup(html).select(ALBUM_CONTAINER_SELECTOR):
        for a in container.find_all("a", href=True, recursive=False):
            href = a["href"].strip()
            if not href:
                continue
            name = a.get_text().strip() or (a.get("title") or "").strip()
            if not name:
                continue
            url = _resolve_href(base_url, href)
            if url is None:
                continue
            albums.append(AlbumRef(url, name))
    return albums


def extract_image_links(
    html, base_url: str, enlarge_segment: str | None = ENLARGE_SEGMENT
) -> list[str]:
    """
    Return the detail-page URL of every image on an album page, in
    document order.

    Images are anchors marked ``itemprop="contentUrl"``.  With
    *enlarge_segment* set, each URL is pointed at the full-size view by
    appending that segment (URLs already ending with it are kept as is).
    """
    links: list[str] = []
    for a in _soup(html).find_all("a", attrs={"itemprop": CONTENT_URL_ITEMPROP}, href=True):
        href = a["href"].strip()
        if not href:
            continue
        url = _resolve_href(base_url, href)
        if url is None:
            continue
        if enlarge_segment:
            url = append_segment(url, enlarge_segment)
        links.append(url)
    return links


def extract_next_page_link(html, current_url: str) -> str | None:
    """
    Return the absolute URL of the page after the current one, or ``None``
    when this is the last page.

    The pager marks the current page with a dedicated class; the next page
    is the anchor immediately following it.
    """
    pager = _soup(html).select_one(PAGER_SELECTOR)
    if pager is None:
        return None
    current = pager.select_one(PAGER_CURRENT_SELECTOR)
    if current is None:
        return None
    nxt = current.find_next_sibling("a")
    if nxt is None:
        return None
    href = (nxt.get("href") or "").strip()
    if not href:
        return None
    return _resolve_href(current_url, href)
