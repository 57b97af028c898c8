import os
from pathlib import Path
from urllib.parse import unquote, urlsplit

from .logger import logger


def request_url_path(target: str) -> str:
    """Decoded path component of a request target, without query or fragment.

    Absolute-form targets (``http://host/a.txt``) are reduced to their path.
    """
    if target.startswith("/"):
        # urlsplit would read "//name/..." as a network location
        path = target.split("?", 1)[0].split("#", 1)[0]
    else:
        path = urlsplit(target).path
    if not path.startswith("/"):
        path = "/" + path
    return unquote(path, errors="surrogateescape")


def url_segments(request_path: str) -> list[str]:
    """Non-empty segments of ``request_path`` with ``.`` and ``..`` dropped."""
    segments = []
    for segment in request_path.split("/"):
        if not segment:
            continue
        if segment in (os.curdir, os.pardir):
            logger.debug("dropping %r segment from %s", segment, request_path)
            continue
        segments.append(segment)
    return segments


def resolve_path(request_path: str, base_directory: Path) -> Path:
    """
    Map a decoded URL path onto the filesystem below ``base_directory``.

    Each non-empty ``/`` separated segment is joined onto the base directory.
    ``.`` and ``..`` segments are dropped, so the result never climbs above
    the base directory.

    Parameters
    ----------
    request_path
        The percent-decoded URL path, e.g. ``/docs/index.html``.
    base_directory
        The absolute directory being served.

    Returns
    -------
    The filesystem path the request refers to.
    """
    return base_directory.joinpath(*url_segments(request_path))
