# Response type and the error mapping shared by the dispatcher, the
# directory renderer and the file sender.
# This module should not import any other fileserve module except logger.

import dataclasses
import errno
from http import HTTPStatus
from typing import BinaryIO

from .logger import logger


@dataclasses.dataclass
class Response:
    """
    A response produced by the dispatcher.

    Either ``body`` holds the whole payload, or ``stream`` is an open binary
    file to be copied after the headers. ``Response`` owns the stream and
    closes it when used as a context manager.
    """

    status: HTTPStatus
    headers: dict[str, str] = dataclasses.field(default_factory=dict)
    body: bytes = b""
    stream: BinaryIO | None = None

    def close(self) -> None:
        if self.stream is not None:
            self.stream.close()
            self.stream = None

    def __enter__(self) -> "Response":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


# NotADirectoryError is raised for paths that go through a regular file
# (e.g. /a.txt/b), which do not exist either.
_NOT_FOUND_ERRNOS = {errno.ENOENT, errno.ENOTDIR}


def status_for_error(error: Exception) -> HTTPStatus:
    """Classify a filesystem error as not found, permission denied, or other."""
    if isinstance(error, (FileNotFoundError, NotADirectoryError)):
        return HTTPStatus.NOT_FOUND
    if isinstance(error, PermissionError):
        return HTTPStatus.UNAUTHORIZED
    if isinstance(error, OSError) and error.errno in _NOT_FOUND_ERRNOS:
        return HTTPStatus.NOT_FOUND
    return HTTPStatus.INTERNAL_SERVER_ERROR


def error_response(error: Exception) -> Response:
    """Log ``error`` and build the matching empty-bodied response."""
    status = status_for_error(error)
    logger.error("Error: %s (%d %s)", error, status.value, status.phrase)
    return Response(status, {"Content-Length": "0"})
