import os
import stat
from pathlib import Path

from .config import ServerConfig
from .listing import render_listing
from .logger import logger
from .paths import resolve_path
from .response import Response, error_response
from .sender import send_file


class Dispatcher:
    """Turn a request path into a directory listing, a file, or an error."""

    def __init__(self, config: ServerConfig):
        self.config = config

    @property
    def base_directory(self) -> Path:
        return self.config.directory

    def handle(self, request_path: str) -> Response:
        logger.info("getting %s", request_path)
        full_path = resolve_path(request_path, self.base_directory)

        try:
            st = os.stat(full_path)
        except (OSError, ValueError) as e:
            return error_response(e)

        if stat.S_ISDIR(st.st_mode):
            return render_listing(full_path, request_path)
        return send_file(full_path)
