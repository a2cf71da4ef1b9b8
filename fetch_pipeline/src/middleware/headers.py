"""Header-setting middleware.

Every factory here is expressed in terms of :func:`header`; the derived ones
only fix the header name or a value prefix.
"""

from __future__ import annotations

from typing import Any, Optional

from fetch_pipeline.utils.constants import ACCEPT_HEADER, AUTHORIZATION_HEADER


def set_header(options: dict, name: str, value: Any) -> None:
    """Set a header on the options, creating the header map on first use."""
    headers = options.get("headers")
    if headers is None:
        headers = options["headers"] = {}
    headers[name] = value


def header(name: str, value: Any):
    """Adds a header to the request."""

    async def middleware(fetch, url: str, options: Optional[dict] = None):
        if options is None:
            options = {}
        set_header(options, name, value)
        return await fetch(url, options)

    return middleware


def auth(value: str):
    """Adds an Authorization header to the request."""
    return header(AUTHORIZATION_HEADER, value)


def bearer_token(token: str):
    """Adds an OAuth2 bearer token to the request."""
    return auth("Bearer " + token)


def accept(content_type: str):
    """Adds an Accept header to the request."""
    return header(ACCEPT_HEADER, content_type)


def accept_text():
    """Shorthand for ``accept("text/plain")``."""
    return accept("text/plain")


def accept_json():
    """Shorthand for ``accept("application/json")``."""
    return accept("application/json")


def accept_html():
    """Shorthand for ``accept("text/html")``."""
    return accept("text/html")
