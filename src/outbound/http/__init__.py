"""
Outbound HTTP client module.

Provides a uniform request/response model over an httpx engine with:
- Base URL resolution for relative paths
- Default content type with per-request override
- Fixed per-call timeout and transport-level retries
- Round-trip latency reporting

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from outbound.http.client import Client
from outbound.http.models import Method, Request, Response
from outbound.http.url import build_url, encode_query, resolve_url

__all__ = [
    "Client",
    "Method",
    "Request",
    "Response",
    "build_url",
    "encode_query",
    "resolve_url",
]
