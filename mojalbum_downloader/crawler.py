"""
mojalbum_downloader.crawler
===========================
Album crawler for the MojAlbum site.

Walks two levels of pagination strictly one request at a time:

* the member's album list (``…/albumi``, ``…/albumi/2``, …), and
* inside every album, its image pages.

A sequence ends when its page has no "next" link, or when the next link
redirects back to the page just processed (the site sends out-of-range page
numbers back to the first page).

A broken album list page aborts the run.  A broken album page ends only that
album, and a broken image is just skipped.
"""

from __future__ import annotations

import threading
from pathlib import Path

import requests
from tqdm import tqdm

from .auth import login
from .config import (
    ALBUMS_SEGMENT,
    DEFAULT_USER_FOLDER,
    ENLARGE_SEGMENT,
    Settings,
)
from .downloader import download_image
from .errors import CrawlCancelled
from .extraction import (
    AlbumRef,
    extract_album_links,
    extract_image_links,
    extract_next_page_link,
    parse_html,
)
from .logging_setup import log
from .session import SiteSession
from .utils.files import ensure_tree, sanitize_folder_name
from .utils.url import append_segment, same_url

# Failures that cost one album page or one image, never the whole run
RECOVERABLE_ERRORS = (requests.RequestException, OSError, ValueError)


class AlbumCrawler:
    """
    Log in, then download every image of every album into
    ``output_dir/<user>/<album>/``.
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        output_dir: Path,
        verify_ssl: bool = True,
        enlarge_images: bool = True,
        follow_listing_pages: bool = True,
        progress: bool = True,
        cancel_event: threading.Event | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.username = username
        self.password = password
        self.output_dir = Path(output_dir)
        self.enlarge_segment = ENLARGE_SEGMENT if enlarge_images else None
        self.follow_listing_pages = follow_listing_pages
        self.progress = progress
        self.cancel_event = cancel_event
        self.site = SiteSession(base_url, session=session, verify_ssl=verify_ssl)

        self._bar: tqdm | None = None
        self._stats = {
            "listing_pages": 0,
            "albums": 0,
            "album_pages": 0,
            "saved": 0,
            "missing": 0,
            "errors": 0,
        }

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "AlbumCrawler":
        return cls(
            base_url=settings.base_url,
            username=settings.username,
            password=settings.password,
            output_dir=settings.output_dir,
            verify_ssl=settings.verify_ssl,
            enlarge_images=settings.enlarge_images,
            follow_listing_pages=settings.follow_listing_pages,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self) -> dict[str, int]:
        """Run the whole crawl and return its counters."""
        log.info("Output directory : %s", self.output_dir.resolve())
        log.info("Target site      : %s", self.site.base_url)
        log.info("Username         : %s", self.username)

        try:
            landing_url = login(self.site, self.username, self.password)
            albums_url = append_segment(landing_url, ALBUMS_SEGMENT)
            user_root = ensure_tree(
                self.output_dir,
                sanitize_folder_name(self.username, DEFAULT_USER_FOLDER),
            )
            with tqdm(
                desc="Downloading",
                unit="img",
                dynamic_ncols=True,
                disable=not self.progress,
            ) as bar:
                self._bar = bar
                self._crawl_listing(albums_url, user_root)
        except CrawlCancelled:
            log.warning("Crawl cancelled by the user.")
            raise
        finally:
            self._bar = None
            self.site.close()

        log.info(
            "Crawl complete. list_pages=%d  albums=%d  album_pages=%d  "
            "saved=%d  missing=%d  err=%d",
            self._stats["listing_pages"],
            self._stats["albums"],
            self._stats["album_pages"],
            self._stats["saved"],
            self._stats["missing"],
            self._stats["errors"],
        )
        log.info("Files saved in: %s", self.output_dir.resolve())
        return dict(self._stats)

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------

    def _check_cancelled(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise CrawlCancelled("Crawl cancelled")

    def _crawl_listing(self, start_url: str, user_root: Path) -> None:
        """Album-list pagination.  Any fetch failure here is fatal."""
        cursor = start_url
        while True:
            self._check_cancelled()
            log.info("[PAGE] Album list %s", cursor)
            try:
                html = self.site.fetch_page(cursor)
            except requests.RequestException as exc:
                log.error("[ERR] Failed to load album list page %s – %s", cursor, exc)
                raise
            self._stats["listing_pages"] += 1

            soup = parse_html(html)
            albums = extract_album_links(soup, cursor)
            log.info("  %d album(s) on this page", len(albums))

            for album in albums:
                self._check_cancelled()
                folder = ensure_tree(user_root, sanitize_folder_name(album.name))
                self._crawl_album(album, folder)

            next_url = extract_next_page_link(soup, cursor)
            if next_url is None:
                log.debug("No further album list pages after %s", cursor)
                return
            if not self.follow_listing_pages:
                log.debug("Album list pagination disabled – stopping at %s", cursor)
                return

            try:
                effective = self.site.resolve_effective(next_url)
            except requests.RequestException as exc:
                log.error("[ERR] Failed to resolve album list page %s – %s", next_url, exc)
                raise
            if same_url(effective, cursor):
                log.debug("Next album list page %s redirects back to %s – done", next_url, cursor)
                return
            cursor = effective

    def _crawl_album(self, album: AlbumRef, folder: Path) -> None:
        """Image-page pagination of one album.  Failures end this album only."""
        log.info("[ALBUM] %s → %s", album.name, folder)
        self._stats["albums"] += 1
        cursor = album.url

        while True:
            try:
                html = self.site.fetch_page(cursor)
            except RECOVERABLE_ERRORS as exc:
                log.error(
                    "[ERR] Failed to load album page '%s' (%s) – skipping album: %s",
                    album.name, cursor, exc,
                )
                self._stats["errors"] += 1
                return
            self._stats["album_pages"] += 1

            soup = None
            try:
                soup = parse_html(html)
                images = extract_image_links(soup, cursor, self.enlarge_segment)
            except RECOVERABLE_ERRORS as exc:
                log.error(
                    "[ERR] Failed to parse image links for album '%s' (%s) – "
                    "skipping page: %s",
                    album.name, cursor, exc,
                )
                self._stats["errors"] += 1
                images = []
            log.debug("  %d image(s) on %s", len(images), cursor)

            for image_url in images:
                self._check_cancelled()
                self._download(album, image_url, folder)

            if soup is None:
                return
            try:
                next_url = extract_next_page_link(soup, cursor)
            except RECOVERABLE_ERRORS as exc:
                log.error(
                    "[ERR] Failed to read pager of album '%s' (%s) – stopping album: %s",
                    album.name, cursor, exc,
                )
                self._stats["errors"] += 1
                return
            if next_url is None:
                return

            try:
                effective = self.site.resolve_effective(next_url)
            except RECOVERABLE_ERRORS as exc:
                log.error(
                    "[ERR] Failed to resolve next page of album '%s' (%s) – "
                    "stopping album: %s",
                    album.name, next_url, exc,
                )
                self._stats["errors"] += 1
                return
            if same_url(effective, cursor):
                log.debug("Album '%s': %s redirects back to %s – done", album.name, next_url, cursor)
                return
            cursor = effective

    def _download(self, album: AlbumRef, image_url: str, folder: Path) -> None:
        try:
            saved = download_image(self.site, image_url, folder)
        except RECOVERABLE_ERRORS as exc:
            log.error(
                "[ERR] Failed to download image from page %s (album '%s') – "
                "skipping image: %s",
                image_url, album.name, exc,
            )
            self._stats["errors"] += 1
        else:
            if saved is None:
                self._stats["missing"] += 1
            else:
                self._stats["saved"] += 1
        if self._bar is not None:
            self._bar.update(1)
            self._bar.set_postfix(
                album=album.name[:20],
                ok=self._stats["saved"],
                err=self._stats["errors"],
            )
