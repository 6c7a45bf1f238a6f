"""
Command-line interface for the MojAlbum downloader.

Provides argument parsing, settings resolution, credential prompting and
the process exit codes.
"""

import argparse
import getpass
import logging
import sys
from pathlib import Path

import requests
import urllib3

from .config import (
    DEFAULT_BASE_URL,
    DEFAULT_OUTPUT,
    ENV_PASSWORD,
    ENV_USER,
    Settings,
    load_settings,
)
from .crawler import AlbumCrawler
from .errors import (
    AuthenticationError,
    ConfigurationError,
    CrawlCancelled,
    MojAlbumError,
)
from .logging_setup import log, setup_logging

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2
EXIT_CANCELLED = 130


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mojalbum-downloader",
        description="Download every image of every album of a MojAlbum account.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            f"Credentials can also be provided via the {ENV_USER} and "
            f"{ENV_PASSWORD} env vars\n"
            "or an appsettings.json file.  Missing values are prompted for."
        ),
    )
    parser.add_argument(
        "--config", type=Path, default=None,
        help="JSON settings file (default: ./appsettings.json if present)",
    )
    parser.add_argument(
        "--base-url", default=None,
        help=f"Site address (default: {DEFAULT_BASE_URL})",
    )
    parser.add_argument("--user", default=None, help="MojAlbum username")
    parser.add_argument("--password", default=None, help="MojAlbum password")
    parser.add_argument(
        "--output", default=None,
        help=f"Output directory (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--no-verify-ssl", dest="verify_ssl", action="store_false", default=True,
        help="Disable TLS certificate verification",
    )
    parser.add_argument(
        "--no-enlarge", dest="enlarge_images", action="store_false", default=True,
        help="Do not rewrite image links to their full-size view",
    )
    parser.add_argument(
        "--single-page", dest="follow_listing_pages", action="store_false",
        default=True,
        help="Only process the first album list page",
    )
    parser.add_argument(
        "--no-progress", dest="progress", action="store_false", default=True,
        help="Hide the progress bar",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )
    parser.add_argument(
        "--log-file",
        help="Also write detailed logs to this file",
    )
    return parser.parse_args(argv)


def resolve_settings(args: argparse.Namespace) -> Settings:
    """Merge the settings file, environment and command-line flags."""
    settings = load_settings(args.config)
    if args.base_url:
        settings.base_url = args.base_url.strip().rstrip("/")
    if args.user:
        settings.username = args.user
    if args.password:
        settings.password = args.password
    if args.output:
        settings.output_dir = Path(args.output)
    settings.verify_ssl = args.verify_ssl
    settings.enlarge_images = args.enlarge_images
    settings.follow_listing_pages = args.follow_listing_pages
    return settings


def prompt_credentials(settings: Settings) -> None:
    """Ask for whichever of username/password is still missing."""
    if not settings.username.strip():
        settings.username = input("MojAlbum username: ").strip()
    if not settings.password.strip():
        settings.password = getpass.getpass("MojAlbum password: ")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(debug=args.debug, log_file=args.log_file)

    if args.debug:
        logging.getLogger("urllib3").setLevel(logging.DEBUG)

    if not args.verify_ssl:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        log.warning("TLS certificate verification is DISABLED (--no-verify-ssl)")

    try:
        settings = resolve_settings(args)
        prompt_credentials(settings)
        crawler = AlbumCrawler.from_settings(settings, progress=args.progress)
        crawler.run()
    except (CrawlCancelled, KeyboardInterrupt):
        log.warning("Operation was cancelled by the user.")
        return EXIT_CANCELLED
    except ConfigurationError as exc:
        log.error("Configuration error: %s", exc)
        return EXIT_CONFIG
    except AuthenticationError as exc:
        log.error("Authentication failed: %s", exc)
        return EXIT_FAILURE
    except requests.RequestException as exc:
        log.error("Failed to download all images: %s", exc)
        return EXIT_FAILURE
    except (OSError, MojAlbumError) as exc:
        log.error("Download aborted: %s", exc)
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
