"""
Tests for final URL construction.
"""

from urllib.parse import parse_qsl

import pytest

from outbound.http.url import build_url, encode_query, resolve_url


class TestResolveUrl:

    @pytest.mark.parametrize("path", ["/users", "users", "/a/b?x=1", ""])
    def test_relative_is_concatenated(self, path):
        assert resolve_url("https://api.example.com", path) == "https://api.example.com" + path

    def test_no_slash_normalisation(self):
        assert resolve_url("https://api.example.com/", "/users") == "https://api.example.com//users"
        assert resolve_url("https://api.example.com", "users") == "https://api.example.comusers"

    @pytest.mark.parametrize("url", [
        "http://other.example.com/x",
        "https://other.example.com/x",
    ])
    def test_absolute_ignores_base(self, url):
        assert resolve_url("https://api.example.com", url) == url

    def test_http_prefix_is_a_literal_match(self):
        # Not a scheme, but starts with "http"
        assert resolve_url("https://api.example.com/", "httpbin/status") == "httpbin/status"

    def test_empty_base(self):
        assert resolve_url("", "/users") == "/users"


class TestEncodeQuery:

    def test_percent_encoding(self):
        encoded = encode_query({"q": "a b&c", "path": "/x=y"})
        assert dict(parse_qsl(encoded)) == {"q": "a b&c", "path": "/x=y"}
        assert "q=a+b%26c" in encoded.split("&")

    def test_each_pair_once(self):
        query = {f"k{i}": str(i) for i in range(10)}
        pairs = parse_qsl(encode_query(query))
        assert len(pairs) == 10
        assert dict(pairs) == query

    def test_sorted_by_key(self):
        assert encode_query({"b": "2", "a": "1"}) == "a=1&b=2"


class TestBuildUrl:

    def test_scenario_relative_with_query(self):
        assert build_url("https://api.example.com", "/users", {"id": "42"}) == \
            "https://api.example.com/users?id=42"

    def test_no_query(self):
        assert build_url("https://api.example.com", "/users", {}) == "https://api.example.com/users"
        assert build_url("https://api.example.com", "/users") == "https://api.example.com/users"

    def test_existing_query_string_is_not_merged(self):
        assert build_url("", "https://h.example.com/p?a=1", {"b": "2"}) == \
            "https://h.example.com/p?a=1?b=2"
