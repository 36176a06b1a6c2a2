"""
Outbound HTTP client.

Wraps an httpx engine with a base URL, a default content type, a fixed
per-call timeout and a transport retry count, and reports latency.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
import threading
import time
from typing import Callable

import httpx

from outbound.config import ClientConfig
from outbound.http.carriers import CarrierPool, ResponseCarrier
from outbound.http.models import Method, Request, Response
from outbound.http.url import build_url

logger = logging.getLogger(__name__)


class Client:
    """
    HTTP client bound to one configuration and one transport engine.

    Usage:
        client = Client(ClientConfig(base_url="https://api.example.com"))
        resp = client.do(Request(url="/users", query={"id": "42"}))
        print(resp.status_code, resp.time)

    Transport failures raise the engine's exception (httpx.TransportError
    and subclasses) unchanged. The timeout bounds each call as a whole;
    a body still arriving when it runs out raises httpx.ReadTimeout.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        engine: httpx.Client | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config or ClientConfig()
        self.engine = engine or self._build_engine(self.config)
        self._clock = clock
        self._pool = CarrierPool()

    @staticmethod
    def _build_engine(config: ClientConfig) -> httpx.Client:
        """Create the transport engine with the configured retry count."""
        # tls_cert is not applied to the transport.
        return httpx.Client(
            transport=httpx.HTTPTransport(retries=config.attempts),
            timeout=httpx.Timeout(config.timeout),
        )

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def content_type(self) -> str:
        return self.config.default_content_type

    @property
    def timeout(self) -> float:
        return self.config.timeout

    def close(self) -> None:
        """Close the transport engine."""
        if not self.engine.is_closed:
            self.engine.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def do(
        self,
        request: Request,
        *,
        start_time: float | None = None,
        cancel: threading.Event | None = None,
    ) -> Response:
        """Execute a request and return the assembled response.

        Args:
            request: Request to send
            start_time: Clock reading to measure latency from; defaults to
                the reading taken on entry
            cancel: Accepted for call-site compatibility; not consulted.
                The configured timeout is the only bound on the call.

        Returns:
            Response with status, body, headers and elapsed milliseconds
        """
        if start_time is None:
            start_time = self._clock()

        with self._pool.carriers() as (req, res):
            uri = build_url(self.base_url, request.url, request.query)

            content_type = self.content_type
            if request.content_type:
                content_type = request.content_type

            req.set_request_uri(uri)
            method = _method_value(request.method)
            req.set_method(method)
            req.set_content_type(content_type)
            req.set_body_string(request.body)

            for name, value in request.headers.items():
                req.set_header(name, value)

            logger.debug("%s %s (timeout=%ss)", method, uri, self.timeout)

            # One deadline for the whole call: connect, send, headers, body.
            deadline = time.monotonic() + self.timeout
            try:
                response = self.engine.send(req.build(self.engine, self.timeout), stream=True)
                try:
                    res.fill(response, deadline)
                finally:
                    response.close()
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                logger.debug("%s %s failed: %s", method, uri, e)
                raise

            end = self._clock()

            result = Response(
                status_code=res.status_code,
                body=res.body_string(),
                headers=merge_response_headers(res),
                time=response_time(start_time, end),
            )

        logger.debug("%s %s -> %d in %dms", method, uri, result.status_code, result.time)
        return result

    def get(self, url: str, **kwargs) -> Response:
        """Make a GET request."""
        return self.do(Request(url=url, method=Method.GET, **kwargs))

    def post(self, url: str, **kwargs) -> Response:
        """Make a POST request."""
        return self.do(Request(url=url, method=Method.POST, **kwargs))

    def put(self, url: str, **kwargs) -> Response:
        """Make a PUT request."""
        return self.do(Request(url=url, method=Method.PUT, **kwargs))

    def patch(self, url: str, **kwargs) -> Response:
        """Make a PATCH request."""
        return self.do(Request(url=url, method=Method.PATCH, **kwargs))

    def delete(self, url: str, **kwargs) -> Response:
        """Make a DELETE request."""
        return self.do(Request(url=url, method=Method.DELETE, **kwargs))


def _method_value(method: Method | str) -> str:
    if isinstance(method, Method):
        return method.value
    return method


def merge_response_headers(res: ResponseCarrier) -> dict[str, str]:
    """Collect response headers; a repeated name keeps its last value."""
    headers = {}
    for name, value in res.visit_headers():
        headers[name] = value
    return headers


def response_time(start: float, end: float) -> int:
    """Elapsed whole milliseconds between two clock readings, never negative."""
    return max(0, int((end - start) * 1000))
