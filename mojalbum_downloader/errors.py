"""Exception hierarchy for the MojAlbum downloader."""


class MojAlbumError(Exception):
    """Base class for all downloader errors."""


class ConfigurationError(MojAlbumError):
    """Settings are missing or unreadable.  Raised before any network call."""


class AuthConfigurationError(ConfigurationError):
    """Username or password is empty."""


class AuthenticationError(MojAlbumError):
    """The login exchange did not produce an authenticated session."""


class AuthRequestError(AuthenticationError):
    """The login endpoint answered with a non-success HTTP status."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"Login request to {url} failed with HTTP {status_code}")
        self.status_code = status_code
        self.url = url


class AuthRejectedError(AuthenticationError):
    """The site answered the login with its login form again."""


class CrawlCancelled(MojAlbumError):
    """The crawl was cancelled at one of its checkpoints."""
