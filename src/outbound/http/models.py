"""
Request and response models for outbound HTTP calls.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Method(str, Enum):
    """HTTP methods accepted by the client."""
    POST = "POST"
    GET = "GET"
    PUT = "PUT"
    # Legacy name kept for existing callers; same wire value as POST,
    # so Method.PATH is Method.POST.
    PATH = "POST"
    PATCH = "PATCH"
    DELETE = "DELETE"


@dataclass
class Request:
    """Outbound request description."""
    url: str
    method: Method = Method.GET
    content_type: str = ""  # empty: use the client default
    headers: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)
    body: str = ""


@dataclass
class Response:
    """Result of a completed call."""
    status_code: int
    body: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    time: int = 0  # elapsed milliseconds

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_redirect(self) -> bool:
        return 300 <= self.status_code < 400

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        return 500 <= self.status_code < 600

    @property
    def content_type(self) -> str | None:
        for name, value in self.headers.items():
            if name.lower() == "content-type":
                return value
        return None

    @property
    def is_json(self) -> bool:
        ct = self.content_type or ""
        return "json" in ct.lower()

    def json(self) -> Any:
        """Parse the body as JSON."""
        return json.loads(self.body)
