"""Middleware package for request processing.

This package contains the standard request middleware for fetch pipelines:
header and auth injection, query string and body encoding, response
decoding, and tracing and request logging.
"""

from __future__ import annotations

from fetch_pipeline.src.middleware.headers import (
    accept,
    accept_html,
    accept_json,
    accept_text,
    auth,
    bearer_token,
    header,
    set_header,
)
from fetch_pipeline.src.middleware.request_body import (
    content,
    json,
    params,
    query,
    stringify_query,
)
from fetch_pipeline.src.middleware.request_logging import log_requests
from fetch_pipeline.src.middleware.response import (
    enhance_response,
    get_json,
    get_text,
    request_info,
)
from fetch_pipeline.src.middleware.trace_middleware import trace

__all__ = [
    "accept",
    "accept_html",
    "accept_json",
    "accept_text",
    "auth",
    "bearer_token",
    "content",
    "enhance_response",
    "get_json",
    "get_text",
    "header",
    "json",
    "log_requests",
    "params",
    "query",
    "request_info",
    "set_header",
    "stringify_query",
    "trace",
]
