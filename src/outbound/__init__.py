"""
outbound - HTTP client abstraction for backend services

A small, uniform request/response layer over httpx that applies a base
URL, default content type, timeout and transport retry count, and
reports round-trip latency.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

__version__ = "0.1.0"
__author__ = "DNS Science.io"
__copyright__ = "Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company"
