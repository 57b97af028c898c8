import os
from http import HTTPStatus
from pathlib import Path
from typing import BinaryIO

from .content_types import guess_content_type
from .logger import logger
from .response import Response, error_response

COPY_BUFFER_SIZE = 4096


def send_file(path: Path) -> Response:
    """Open ``path`` and build a streaming response for it.

    The returned response owns the open file; the caller copies it out with
    :func:`copy_stream`, which closes it.
    """
    try:
        stream = open(path, "rb")
    except OSError as e:
        return error_response(e)

    try:
        size = os.fstat(stream.fileno()).st_size
    except OSError as e:
        stream.close()
        return error_response(e)

    headers = {
        "Content-Type": guess_content_type(path),
        "Content-Length": str(size),
    }
    return Response(HTTPStatus.OK, headers, stream=stream)


def copy_stream(response: Response, wfile: BinaryIO) -> int:
    """
    Write the body of ``response`` to ``wfile``.

    Streams are copied in ``COPY_BUFFER_SIZE`` chunks and always closed.
    Headers have already been sent by the time this runs, so a failed copy
    only truncates the body: it is logged and the number of bytes written so
    far is returned.

    Returns
    -------
    The number of body bytes written.
    """
    with response:
        if response.stream is None:
            wfile.write(response.body)
            return len(response.body)

        written = 0
        try:
            while chunk := response.stream.read(COPY_BUFFER_SIZE):
                wfile.write(chunk)
                written += len(chunk)
        except OSError as e:
            logger.warning("Copy interrupted after %d bytes: %s", written, e)
        return written
