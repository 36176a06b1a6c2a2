"""
Reusable request/response carriers handed to the transport engine.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import threading
import time
from contextlib import contextmanager
from typing import Iterator

import httpx


class RequestCarrier:
    """Mutable outgoing request state, reset between uses."""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.method = ""
        self.uri = ""
        self.headers = httpx.Headers()
        self.body = b""

    def set_method(self, method: str) -> None:
        self.method = method

    def set_content_type(self, content_type: str) -> None:
        self.headers["Content-Type"] = content_type

    def set_body_string(self, body: str) -> None:
        self.body = body.encode("utf-8")

    def set_request_uri(self, uri: str) -> None:
        self.uri = uri

    def set_header(self, name: str, value: str) -> None:
        """Set a header, replacing any value under the same name."""
        self.headers[name] = value

    def build(self, engine: httpx.Client, timeout: float) -> httpx.Request:
        """Build the engine-level request from the carrier state."""
        return engine.build_request(
            self.method,
            self.uri,
            headers=self.headers,
            content=self.body,
            timeout=timeout,
        )


class ResponseCarrier:
    """Mutable incoming response state, reset between uses."""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.status_code = 0
        self.raw_headers: list[tuple[bytes, bytes]] = []
        self.header_encoding = "utf-8"
        self.body = b""
        self.encoding = "utf-8"

    def fill(self, response: httpx.Response, deadline: float | None = None) -> None:
        """Copy status, headers and body out of an engine response.

        With a deadline (a time.monotonic() reading), the body is read in
        chunks and httpx.ReadTimeout is raised once the deadline passes.
        Each socket read is also capped at the time left, so a stalled
        body cannot outlast the deadline.
        """
        self.status_code = response.status_code
        self.raw_headers = list(response.headers.raw)
        self.header_encoding = response.headers.encoding

        if deadline is not None:
            remaining = _remaining(response.request, deadline)
            response.request.extensions["timeout"] = httpx.Timeout(remaining).as_dict()

        chunks = []
        for chunk in response.iter_bytes():
            chunks.append(chunk)
            if deadline is not None:
                _remaining(response.request, deadline)

        self.body = b"".join(chunks)
        self.encoding = response.encoding or "utf-8"

    def body_string(self) -> str:
        return self.body.decode(self.encoding, errors="replace")

    def visit_headers(self) -> Iterator[tuple[str, str]]:
        """Yield every header pair in the order the server sent them."""
        for key, value in self.raw_headers:
            yield key.decode(self.header_encoding), value.decode(self.header_encoding)


def _remaining(request: httpx.Request, deadline: float) -> float:
    """Seconds left before the deadline; ReadTimeout if none."""
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise httpx.ReadTimeout("Call deadline exceeded", request=request)
    return remaining


class CarrierPool:
    """Thread-safe pool of request/response carrier pairs."""

    def __init__(self, max_idle: int = 64):
        self.max_idle = max_idle
        self._requests: list[RequestCarrier] = []
        self._responses: list[ResponseCarrier] = []
        self._lock = threading.Lock()

    def acquire(self) -> tuple[RequestCarrier, ResponseCarrier]:
        """Take a carrier pair from the pool, creating one if empty."""
        with self._lock:
            req = self._requests.pop() if self._requests else None
            res = self._responses.pop() if self._responses else None

        return req or RequestCarrier(), res or ResponseCarrier()

    def release(self, req: RequestCarrier, res: ResponseCarrier) -> None:
        """Reset a carrier pair and return it to the pool."""
        req.reset()
        res.reset()

        with self._lock:
            if len(self._requests) < self.max_idle:
                self._requests.append(req)
            if len(self._responses) < self.max_idle:
                self._responses.append(res)

    @contextmanager
    def carriers(self) -> Iterator[tuple[RequestCarrier, ResponseCarrier]]:
        """Scoped carrier pair, released on every exit path."""
        req, res = self.acquire()
        try:
            yield req, res
        finally:
            self.release(req, res)

    @property
    def idle(self) -> int:
        with self._lock:
            return len(self._requests)
