import dataclasses
import html
import os
from http import HTTPStatus
from pathlib import Path
from urllib.parse import quote

from .paths import url_segments
from .response import Response, error_response

LISTING_CONTENT_TYPE = "text/html; charset=utf-8"

LISTING_HEAD = (
    '<!DOCTYPE HTML PUBLIC "-//W3C//DTD HTML 4.01//EN" '
    '"http://www.w3.org/TR/html4/strict.dtd">\n'
    "<html>\n"
    "<head>"
    '<meta http-equiv="Content-Type" content="text/html; charset=utf-8">\n'
    "</head>\n"
    "<body>\n"
    "<hr>\n"
    "<ul>\n"
)

LISTING_TAIL = "</ul>\n<hr>\n</body>\n</html>\n"

# Reserved characters allowed unescaped inside a single path segment.
SEGMENT_SAFE_CHARS = ":@&=+$"


@dataclasses.dataclass(frozen=True)
class DirEntry:
    name: str
    is_dir: bool

    @property
    def display_name(self) -> str:
        return self.name + "/" if self.is_dir else self.name


def list_entries(directory: Path) -> list[DirEntry]:
    """Immediate children of ``directory``, sorted by name.

    Symlinks are not followed when deciding whether an entry is a directory.
    """
    with os.scandir(directory) as it:
        entries = [
            DirEntry(entry.name, entry.is_dir(follow_symlinks=False)) for entry in it
        ]
    return sorted(entries, key=lambda entry: entry.name)


def entry_link(url_path: str, display_name: str) -> str:
    """URL of a listed entry.

    The entry name is escaped as one path segment, so the trailing ``/`` of a
    directory name becomes ``%2F``. The request path is rebuilt from the same
    segments the resolver uses, so repeated slashes and ``.``/``..`` never
    reach the link (a leading ``//`` would name another host).
    """
    parent = "".join(
        "/" + quote(part, safe=SEGMENT_SAFE_CHARS, errors="surrogateescape")
        for part in url_segments(url_path)
    )
    segment = quote(display_name, safe=SEGMENT_SAFE_CHARS, errors="surrogateescape")
    return f"{parent}/{segment}"


def render_entries(url_path: str, entries: list[DirEntry]) -> str:
    items = []
    for entry in entries:
        name = entry.display_name
        link = entry_link(url_path, name)
        items.append(f'<li><a href="{link}">{html.escape(name)}</a></li>\n')
    return LISTING_HEAD + "".join(items) + LISTING_TAIL


def render_listing(directory: Path, url_path: str) -> Response:
    try:
        entries = list_entries(directory)
    except OSError as e:
        return error_response(e)

    body = render_entries(url_path, entries).encode("utf-8", "surrogateescape")
    headers = {
        "Content-Type": LISTING_CONTENT_TYPE,
        "Content-Length": str(len(body)),
    }
    return Response(HTTPStatus.OK, headers, body)
