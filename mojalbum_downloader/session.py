"""HTTP session management for the MojAlbum downloader."""

from __future__ import annotations

import urllib.parse
from pathlib import Path

import requests
from requests.adapters import HTTPAdapter

from .config import ACCEPT_HTML, DOWNLOAD_CHUNK_SIZE, REQUEST_TIMEOUT, USER_AGENT
from .logging_setup import log
from .utils.files import stream_to_file


def build_session(verify_ssl: bool = True) -> requests.Session:
    """Return a ``requests.Session`` with keep-alive and browser-like headers.

    The session's cookie jar carries the login for the whole run.  Failed
    requests are never retried.
    """
    session = requests.Session()
    adapter = HTTPAdapter(max_retries=0)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = verify_ssl
    session.headers.update({
        "User-Agent": USER_AGENT,
        "Accept": ACCEPT_HTML,
        "Accept-Encoding": "gzip, deflate",
        "Connection": "keep-alive",
    })
    return session


class SiteSession:
    """
    The authenticated browsing context of one run.

    Wraps the single ``requests.Session`` (and therefore the single cookie
    jar) that every request of the run goes through, together with the
    site's base address.
    """

    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        verify_ssl: bool = True,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.http = session if session is not None else build_session(verify_ssl)
        self.timeout = timeout

    def absolute(self, ref: str) -> str:
        """Resolve *ref* against the site root."""
        return urllib.parse.urljoin(self.base_url + "/", ref.strip())

    def post_form(
        self, url: str, data: dict[str, str], referer: str | None = None
    ) -> requests.Response:
        """POST *data* form-encoded to *url*, following redirects."""
        headers = {"Accept": ACCEPT_HTML}
        if referer:
            headers["Referer"] = referer
        log.debug("POST %s", url)
        return self.http.post(
            url,
            data=data,
            headers=headers,
            timeout=self.timeout,
            allow_redirects=True,
        )

    def fetch_page(self, url: str) -> bytes:
        """GET *url* and return the body; non-success statuses raise."""
        log.debug("GET %s", url)
        resp = self.http.get(url, timeout=self.timeout, allow_redirects=True)
        resp.raise_for_status()
        return resp.content

    def resolve_effective(self, url: str) -> str:
        """
        Return the URL that a GET of *url* finally lands on after all
        redirects.  Only the headers are read; non-success statuses raise.
        """
        resp = self.http.get(
            url, timeout=self.timeout, allow_redirects=True, stream=True
        )
        try:
            resp.raise_for_status()
            effective = resp.url or url
        finally:
            resp.close()
        if effective != url:
            log.debug("Effective URL %s → %s", url, effective)
        return effective

    def download(self, url: str, local_path: Path) -> int:
        """Stream *url* into *local_path*; returns the number of bytes."""
        log.debug("GET %s", url)
        resp = self.http.get(
            url, timeout=self.timeout, allow_redirects=True, stream=True
        )
        try:
            resp.raise_for_status()
            return stream_to_file(local_path, resp.iter_content(DOWNLOAD_CHUNK_SIZE))
        finally:
            resp.close()

    def close(self) -> None:
        self.http.close()
