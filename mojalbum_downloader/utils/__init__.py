"""Utility subpackage: URL helpers and output folder layout."""

from .url import resolve, append_segment, same_url, filename_from_url
from .files import (
    clean_path_component,
    sanitize_folder_name,
    ensure_tree,
    stream_to_file,
)

__all__ = [
    "resolve",
    "append_segment",
    "same_url",
    "filename_from_url",
    "clean_path_component",
    "sanitize_folder_name",
    "ensure_tree",
    "stream_to_file",
]
