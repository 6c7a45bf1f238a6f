"""Configuration constants and settings loading for the MojAlbum downloader."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .errors import ConfigurationError

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DEFAULT_BASE_URL = "https://www.mojalbum.com"
DEFAULT_OUTPUT = "downloads"
DEFAULT_SETTINGS_FILE = "appsettings.json"

# Environment overrides
ENV_USER = "MOJALBUM_USER"
ENV_PASSWORD = "MOJALBUM_PASSWORD"
ENV_BASE_URL = "MOJALBUM_BASE_URL"
ENV_OUTPUT = "MOJALBUM_OUTPUT"

REQUEST_TIMEOUT = 30           # seconds per HTTP request
DOWNLOAD_CHUNK_SIZE = 64 * 1024

USER_AGENT = "MojAlbumDownloader/1.0 (+https://www.mojalbum.com)"
ACCEPT_HTML = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"

# ---------------------------------------------------------------------------
# Login form
# ---------------------------------------------------------------------------
LOGIN_PATH = "/prijava"
USERNAME_FIELD = "txtUserName"
PASSWORD_FIELD = "txtPassword"
AUTO_LOGIN_FIELD = "cbAutoLogin"
SUBMIT_FIELD = "btnLogin"
AUTO_LOGIN_VALUE = "1"
SUBMIT_VALUE = "prijava"

# Both field names still present on the landing page = credentials rejected
LOGIN_MARKERS = (USERNAME_FIELD, PASSWORD_FIELD)

# ---------------------------------------------------------------------------
# Site layout
# ---------------------------------------------------------------------------
ALBUMS_SEGMENT = "albumi"      # appended to the post-login landing URL
ENLARGE_SEGMENT = "povecaj"    # full-size detail page of a single image

# Site markup conventions.  Keep every structural selector here so that a
# change in the site's HTML touches only this block.
ALBUM_CONTAINER_SELECTOR = "div.CollectionLink"
CONTENT_URL_ITEMPROP = "contentUrl"
PAGER_SELECTOR = "div.Pager"
PAGER_CURRENT_SELECTOR = "a.PagerCurrent"
OG_IMAGE_PROPERTY = "og:image"
IMAGE_ELEMENT_ID = "image"

# ---------------------------------------------------------------------------
# Output layout
# ---------------------------------------------------------------------------
DEFAULT_USER_FOLDER = "user"
DEFAULT_ALBUM_FOLDER = "Album"
DEFAULT_IMAGE_EXTENSION = ".jpg"


@dataclass
class Settings:
    """Run settings after all configuration sources have been merged."""

    base_url: str = DEFAULT_BASE_URL
    output_dir: Path = Path(DEFAULT_OUTPUT)
    username: str = ""
    password: str = ""
    verify_ssl: bool = True
    enlarge_images: bool = True
    follow_listing_pages: bool = True


def _read_settings_file(path: Path) -> dict:
    try:
        data = json.loads(path.read_text(encoding="utf-8-sig"))
    except OSError as exc:
        raise ConfigurationError(f"Cannot read settings file {path}: {exc}") from exc
    except ValueError as exc:
        raise ConfigurationError(f"Malformed settings file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {path} must contain a JSON object")
    return data


def _section(data: Mapping, *keys: str) -> Mapping:
    for key in keys:
        value = data.get(key)
        if not isinstance(value, dict):
            return {}
        data = value
    return data


def load_settings(
    settings_file: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """
    Build :class:`Settings` from the built-in defaults, an optional JSON
    settings file and the environment (later sources win).

    The JSON layout is::

        {
          "MojAlbum": {"Authentication": {"Username": "...", "Password": "..."}},
          "DownloadSettings": {"BaseUrl": "...", "OutputDirectory": "..."}
        }

    When *settings_file* is None, ``appsettings.json`` in the working
    directory is used if it exists.  An explicitly named file must exist.
    """
    environ = os.environ if environ is None else environ
    settings = Settings()

    if settings_file is None:
        default = Path(DEFAULT_SETTINGS_FILE)
        settings_file = default if default.is_file() else None
    if settings_file is not None:
        data = _read_settings_file(settings_file)
        auth = _section(data, "MojAlbum", "Authentication")
        download = _section(data, "DownloadSettings")
        settings.username = auth.get("Username") or settings.username
        settings.password = auth.get("Password") or settings.password
        settings.base_url = download.get("BaseUrl") or settings.base_url
        if download.get("OutputDirectory"):
            settings.output_dir = Path(download["OutputDirectory"])

    settings.username = environ.get(ENV_USER) or settings.username
    settings.password = environ.get(ENV_PASSWORD) or settings.password
    settings.base_url = environ.get(ENV_BASE_URL) or settings.base_url
    if environ.get(ENV_OUTPUT):
        settings.output_dir = Path(environ[ENV_OUTPUT])

    settings.base_url = settings.base_url.strip().rstrip("/")
    return settings
