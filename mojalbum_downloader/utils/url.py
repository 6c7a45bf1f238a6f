"""URL resolution helpers."""

import urllib.parse


def resolve(base: str, ref: str) -> str:
    """Resolve *ref* (absolute, root-relative or relative) against *base*."""
    return urllib.parse.urljoin(base, ref.strip())


def append_segment(url: str, segment: str) -> str:
    """
    Treat *url* as a directory and append a single path *segment*.

    ``https://x/u/ana`` + ``albumi``   → ``https://x/u/ana/albumi``
    ``https://x/u/ana/`` + ``/albumi/`` → ``https://x/u/ana/albumi``

    Query string and fragment are dropped.  A blank segment is a no-op, and
    so is a URL whose last path segment already equals *segment*
    (case-insensitive), which makes the call idempotent.
    """
    segment = segment.strip().strip("/")
    if not segment:
        return url

    parts = urllib.parse.urlsplit(url)
    last = parts.path.rstrip("/").rsplit("/", 1)[-1]
    if urllib.parse.unquote(last).lower() == segment.lower():
        return url

    path = parts.path if parts.path.endswith("/") else parts.path + "/"
    path += urllib.parse.quote(segment, safe="/")
    return urllib.parse.urlunsplit((parts.scheme, parts.netloc, path, "", ""))


def same_url(a: str, b: str) -> bool:
    """
    Compare two absolute URLs the way the pagination loop guard needs:
    scheme and host are case-insensitive, an empty path equals ``/`` and
    the fragment is ignored.
    """
    pa = urllib.parse.urlsplit(a)
    pb = urllib.parse.urlsplit(b)
    return (
        pa.scheme.lower() == pb.scheme.lower()
        and pa.netloc.lower() == pb.netloc.lower()
        and (pa.path or "/") == (pb.path or "/")
        and pa.query == pb.query
    )


def filename_from_url(url: str) -> str:
    """Return the percent-decoded last path segment of *url* ('' if none)."""
    path = urllib.parse.urlsplit(url).path
    return urllib.parse.unquote(path.rsplit("/", 1)[-1])
