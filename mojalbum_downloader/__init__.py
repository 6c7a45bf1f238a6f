"""
mojalbum_downloader
===================
Python package for downloading every image of every album of a MojAlbum
account into a local folder tree.

Package structure
-----------------
mojalbum_downloader/
├── __init__.py       – package init and public API
├── config.py         – constants, markup conventions, settings loading
├── errors.py         – exception hierarchy
├── logging_setup.py  – colour console / file logging
├── session.py        – requests.Session factory and SiteSession context
├── auth.py           – login form exchange
├── downloader.py     – detail page → full-size image → file
├── crawler.py        – AlbumCrawler (album list / album page pagination)
├── cli.py            – argparse CLI (``python -m mojalbum_downloader``)
├── extraction/       – sub-package: link extraction from MojAlbum markup
│   ├── html_parser.py – BeautifulSoup document construction
│   ├── links.py       – album, image and next-page links
│   └── images.py      – full-size image URL strategies
└── utils/
    ├── url.py        – URL resolution and comparison
    └── files.py      – folder names, folder tree, atomic file writes

Quick start
-----------
    from pathlib import Path
    from mojalbum_downloader import AlbumCrawler

    crawler = AlbumCrawler(
        base_url="https://www.mojalbum.com",
        username="ana",
        password="your_password",
        output_dir=Path("downloads"),
    )
    crawler.run()
"""

from .auth import login
from .config import Settings, load_settings
from .crawler import AlbumCrawler
from .downloader import download_image
from .errors import (
    AuthConfigurationError,
    AuthenticationError,
    AuthRejectedError,
    AuthRequestError,
    ConfigurationError,
    CrawlCancelled,
    MojAlbumError,
)
from .extraction import (
    AlbumRef,
    extract_album_links,
    extract_image_links,
    extract_next_page_link,
    find_image_url,
)
from .session import SiteSession, build_session

__all__ = [
    "AlbumCrawler",
    "AlbumRef",
    "Settings",
    "SiteSession",
    "build_session",
    "load_settings",
    "login",
    "download_image",
    "extract_album_links",
    "extract_image_links",
    "extract_next_page_link",
    "find_image_url",
    "MojAlbumError",
    "ConfigurationError",
    "AuthConfigurationError",
    "AuthenticationError",
    "AuthRequestError",
    "AuthRejectedError",
    "CrawlCancelled",
]
