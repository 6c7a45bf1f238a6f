"""Output folder layout and file saving."""

import re
from pathlib import Path
from typing import Iterable

from ..config import DEFAULT_ALBUM_FOLDER
from ..logging_setup import log

# Characters that are illegal in a path component on at least one of the
# common file systems (Windows being the strictest).
INVALID_FS_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def clean_path_component(name: str, fallback: str) -> str:
    """Replace every illegal character in *name* with ``_`` and trim it.

    Returns *fallback* when nothing usable is left.
    """
    cleaned = INVALID_FS_CHARS.sub("_", name or "").strip()
    if not cleaned or cleaned in {".", ".."}:
        return fallback
    return cleaned


def sanitize_folder_name(name: str, default: str = DEFAULT_ALBUM_FOLDER) -> str:
    """Map an album (or user) name to a safe folder name."""
    return clean_path_component(name, default)


def ensure_tree(root: Path, *segments: str) -> Path:
    """Create ``root/segment/...`` recursively; existing folders are fine."""
    path = Path(root).joinpath(*segments)
    path.mkdir(parents=True, exist_ok=True)
    return path


def stream_to_file(local_path: Path, chunks: Iterable[bytes]) -> int:
    """Write *chunks* to *local_path*, replacing any existing file.

    Data goes to a sibling ``.part`` file first and is renamed into place
    only once every chunk has been written, so an interrupted download never
    leaves a truncated image behind.  Returns the number of bytes written.
    """
    local_path.parent.mkdir(parents=True, exist_ok=True)
    part = local_path.with_name(local_path.name + ".part")
    total = 0
    try:
        with part.open("wb") as fh:
            for chunk in chunks:
                if chunk:
                    fh.write(chunk)
                    total += len(chunk)
        part.replace(local_path)
    except BaseException:
        part.unlink(missing_ok=True)
        raise
    log.debug("Saved → %s (%d bytes)", local_path, total)
    return total
