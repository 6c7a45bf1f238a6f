"""
mojalbum_downloader.auth
========================
Login to the MojAlbum site.

The login is a single form POST to ``/prijava``.  On success the server
sets its session cookies (kept in the shared ``requests.Session``) and
redirects to the member's landing page, whose URL is the starting point
of the crawl.
"""

from .config import (
    AUTO_LOGIN_FIELD,
    AUTO_LOGIN_VALUE,
    LOGIN_MARKERS,
    LOGIN_PATH,
    PASSWORD_FIELD,
    SUBMIT_FIELD,
    SUBMIT_VALUE,
    USERNAME_FIELD,
)
from .errors import AuthConfigurationError, AuthRejectedError, AuthRequestError
from .logging_setup import log
from .session import SiteSession


def login(site: SiteSession, username: str, password: str) -> str:
    """
    Authenticate *site*'s session and return the post-login landing URL.

    Raises
    ------
    AuthConfigurationError
        *username* or *password* is empty; nothing is sent.
    AuthRequestError
        The login endpoint answered with a non-success status.
    AuthRejectedError
        The login form came back, i.e. the credentials were not accepted.
    """
    if not (username or "").strip() or not (password or "").strip():
        raise AuthConfigurationError("Username or password is not configured.")

    login_url = site.absolute(LOGIN_PATH)
    payload = {
        USERNAME_FIELD: username,
        PASSWORD_FIELD: password,
        AUTO_LOGIN_FIELD: AUTO_LOGIN_VALUE,
        SUBMIT_FIELD: SUBMIT_VALUE,
    }

    log.info("[LOGIN] Signing in as %s at %s", username, login_url)
    resp = site.post_form(login_url, payload, referer=login_url)
    if not resp.ok:
        raise AuthRequestError(resp.status_code, login_url)

    body = resp.text or ""
    if all(marker in body for marker in LOGIN_MARKERS):
        raise AuthRejectedError(
            "Login failed – the site returned the login form. "
            "Check your username and password."
        )

    landing_url = resp.url or site.absolute("/")
    log.info(
        "[LOGIN] Login successful (HTTP %s). Landing page: %s",
        resp.status_code,
        landing_url,
    )
    log.debug("Active cookies: %s", list(site.http.cookies.keys()))
    return landing_url
