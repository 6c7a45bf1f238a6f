"""
Main entry point for the mojalbum_downloader package.

Allows running the downloader as: python -m mojalbum_downloader
"""

import sys

from mojalbum_downloader.cli import main

if __name__ == "__main__":
    sys.exit(main())
