"""HTML document construction via BeautifulSoup with the lxml backend."""

from bs4 import BeautifulSoup

BS4_PARSER = "lxml"


def parse_html(html: str | bytes) -> BeautifulSoup:
    """Parse *html*.  Bytes are decoded by BeautifulSoup's charset sniffing."""
    return BeautifulSoup(html, BS4_PARSER)
