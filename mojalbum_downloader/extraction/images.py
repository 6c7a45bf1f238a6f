"""Full-size image URL discovery on an image detail page."""

from __future__ import annotations

from typing import Callable

from bs4 import BeautifulSoup

from ..config import IMAGE_ELEMENT_ID, OG_IMAGE_PROPERTY
from .html_parser import parse_html


def _from_og_image(soup: BeautifulSoup) -> str | None:
    meta = soup.find("meta", attrs={"property": OG_IMAGE_PROPERTY, "content": True})
    return meta["content"] if meta else None


def _from_image_anchor(soup: BeautifulSoup) -> str | None:
    a = soup.find("a", id=IMAGE_ELEMENT_ID, href=True)
    return a["href"] if a else None


def _from_image_tag(soup: BeautifulSoup) -> str | None:
    img = soup.find("img", id=IMAGE_ELEMENT_ID, src=True)
    return img["src"] if img else None


# Tried in order; the first non-blank result wins.
IMAGE_URL_STRATEGIES: tuple[Callable[[BeautifulSoup], str | None], ...] = (
    _from_og_image,
    _from_image_anchor,
    _from_image_tag,
)


def find_image_url(html: str | bytes | BeautifulSoup) -> str | None:
    """
    Return the (possibly relative) URL of the full-size image shown on a
    detail page, or ``None`` if the page does not reveal one.
    """
    soup = html if isinstance(html, BeautifulSoup) else parse_html(html)
    for strategy in IMAGE_URL_STRATEGIES:
        url = (strategy(soup) or "").strip()
        if url:
            return url
    return None
