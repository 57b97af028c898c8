import functools
import http.server

from . import __version__
from .config import ServerConfig
from .dispatch import Dispatcher
from .logger import logger
from .paths import request_url_path
from .sender import copy_stream


class Handler(http.server.BaseHTTPRequestHandler):
    """Serve every request method with GET semantics through a Dispatcher."""

    server_version = f"fileserve/{__version__}"
    protocol_version = "HTTP/1.1"

    def __init__(self, *args, dispatcher: Dispatcher, **kwargs):
        self.dispatcher = dispatcher
        super().__init__(*args, **kwargs)

    def do_GET(self) -> None:
        self._respond(send_body=True)

    def do_HEAD(self) -> None:
        self._respond(send_body=False)

    do_POST = do_GET
    do_PUT = do_GET
    do_DELETE = do_GET
    do_PATCH = do_GET
    do_OPTIONS = do_GET

    def _discard_request_body(self) -> None:
        # Request bodies are ignored, but must not leak into the next
        # request on a kept-alive connection.
        if "chunked" in self.headers.get("Transfer-Encoding", "").lower():
            self.close_connection = True
            return
        try:
            length = int(self.headers.get("Content-Length", 0))
        except ValueError:
            self.close_connection = True
            return
        if length > 0:
            self.rfile.read(length)

    def _respond(self, send_body: bool) -> None:
        self._discard_request_body()
        response = self.dispatcher.handle(request_url_path(self.path))
        with response:
            try:
                self.send_response(response.status)
                for name, value in response.headers.items():
                    self.send_header(name, value)
                self.end_headers()
            except ConnectionError as e:
                logger.warning("Client went away before the headers were sent: %s", e)
                self.close_connection = True
                return

            if send_body:
                copy_stream(response, self.wfile)

    def log_message(self, format: str, *args) -> None:
        logger.debug("%s - %s", self.address_string(), format % args)


class FileServer(http.server.ThreadingHTTPServer):
    allow_reuse_address = True
    daemon_threads = True


def server(config: ServerConfig) -> FileServer:
    handler = functools.partial(Handler, dispatcher=Dispatcher(config))
    return FileServer(config.address, handler)


def main(config: ServerConfig) -> None:
    httpd = server(config)
    logger.info(
        "bind: %s, port: %d, directory: %s",
        config.bind,
        httpd.server_address[1],
        config.directory,
    )
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        logger.info("...shutting down http server")
    finally:
        httpd.server_close()
