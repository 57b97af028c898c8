import io
import logging
import os
import threading

import pytest

from fileserve.config import CONFIG_VAR_TO_KEY, ServerConfig
from fileserve.dispatch import Dispatcher
from fileserve.logger import logger
from fileserve.response import Response
from fileserve.sender import copy_stream
from fileserve.serve import server

skip_if_root = pytest.mark.skipif(
    hasattr(os, "geteuid") and os.geteuid() == 0,
    reason="file permissions are not enforced for root",
)


def read_body(response: Response) -> bytes:
    out = io.BytesIO()
    copy_stream(response, out)
    return out.getvalue()


@pytest.fixture
def served_dir(tmp_path):
    base = tmp_path / "root"
    base.mkdir()

    (base / "a.txt").write_text("hi")
    (base / "sub").mkdir()

    yield base


@pytest.fixture
def server_config(served_dir):
    return ServerConfig(bind="127.0.0.1", port=0, directory=served_dir)


@pytest.fixture
def dispatcher(server_config):
    return Dispatcher(server_config)


@pytest.fixture
def live_server(server_config):
    httpd = server(server_config)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()

    host, port = httpd.server_address[:2]
    try:
        yield f"http://{host}:{port}"
    finally:
        httpd.shutdown()
        httpd.server_close()
        thread.join()


@pytest.fixture
def log_records():
    records: list[logging.LogRecord] = []

    class _Collect(logging.Handler):
        def emit(self, record):
            records.append(record)

    handler = _Collect()
    logger.addHandler(handler)
    try:
        yield records
    finally:
        logger.removeHandler(handler)


@pytest.fixture
def reset_env_vars(monkeypatch):
    for var in CONFIG_VAR_TO_KEY:
        monkeypatch.delenv(var, raising=False)
