"""
Pytest configuration and shared fixtures for outbound tests.
"""

import logging
import sys
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

import httpx
import pytest

_SRC_ROOT = Path(__file__).resolve().parent.parent / "src"
if str(_SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(_SRC_ROOT))

from outbound.config import ClientConfig, set_config  # noqa: E402
from outbound.http.client import Client  # noqa: E402


class RecordingHandler:
    """MockTransport handler that records requests and replays a canned response."""

    def __init__(
        self,
        status_code: int = 200,
        headers: list[tuple[str, str]] | None = None,
        content: bytes = b"",
        error: type[httpx.TransportError] | None = None,
    ):
        self.status_code = status_code
        self.headers = headers or []
        self.content = content
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error("simulated transport failure", request=request)
        return httpx.Response(self.status_code, headers=self.headers, content=self.content)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


class FakeClock:
    """Clock returning preset readings, then repeating the last one."""

    def __init__(self, *readings: float):
        self.readings = list(readings)
        self.calls = 0

    def __call__(self) -> float:
        idx = min(self.calls, len(self.readings) - 1)
        self.calls += 1
        return self.readings[idx]


def make_client(handler, config: ClientConfig | None = None, clock=None) -> Client:
    """Client whose engine is backed by a MockTransport."""
    engine = httpx.Client(transport=httpx.MockTransport(handler))
    if clock is None:
        return Client(config, engine=engine)
    return Client(config, engine=engine, clock=clock)


@pytest.fixture
def handler():
    return RecordingHandler()


@pytest.fixture
def api_config():
    return ClientConfig(base_url="https://api.example.com")


@pytest.fixture(autouse=True)
def _reset_state():
    """Undo package logger and global config changes between tests."""
    yield
    logger = logging.getLogger("outbound")
    for h in list(logger.handlers):
        h.close()
        logger.removeHandler(h)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    set_config(None)


class SlowHandler(BaseHTTPRequestHandler):
    """
    Local server routes with controlled pacing.

    /fast           10-byte body at once
    /slow-headers   waits 1s before the status line
    /drip           10-byte body, one byte every 100ms
    /stall          one byte, then waits 3s before the rest
    """

    def do_GET(self):
        try:
            if self.path == "/slow-headers":
                time.sleep(1.0)

            self.send_response(200)
            self.send_header("Content-Type", "text/plain")
            self.send_header("Content-Length", "10")
            self.end_headers()
            self.wfile.flush()

            if self.path == "/drip":
                for _ in range(10):
                    self.wfile.write(b"x")
                    self.wfile.flush()
                    time.sleep(0.1)
            elif self.path == "/stall":
                self.wfile.write(b"x")
                self.wfile.flush()
                time.sleep(3.0)
                self.wfile.write(b"x" * 9)
            else:
                self.wfile.write(b"x" * 10)
        except (BrokenPipeError, ConnectionResetError):
            pass

    def log_message(self, format, *args):
        pass


@pytest.fixture
def slow_server():
    """Base URL of a local HTTP server serving SlowHandler routes."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), SlowHandler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    try:
        yield f"http://{host}:{port}"
    finally:
        server.shutdown()
        server.server_close()
