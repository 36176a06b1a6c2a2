"""
Final request URL construction.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from urllib.parse import urlencode


def resolve_url(base_url: str, url: str) -> str:
    """Return url verbatim when it looks absolute, else base_url + url.

    The absolute check is a plain prefix test on "http"/"https", so any
    string starting with those four characters is used as-is. No slash
    is inserted or removed when joining.
    """
    if url.startswith("http") or url.startswith("https"):
        return url

    return base_url + url


def encode_query(query: dict[str, str]) -> str:
    """Form-encode query parameters, sorted by key."""
    return urlencode(sorted((k, str(v)) for k, v in query.items()))


def build_url(base_url: str, url: str, query: dict[str, str] | None = None) -> str:
    """Resolve url against base_url and append the encoded query.

    An existing query string in url is not merged with; the new
    parameters always follow a fresh "?".
    """
    final = resolve_url(base_url, url)

    if query:
        final = f"{final}?{encode_query(query)}"

    return final
