"""Base executors backed by httpx.

The base executor is the innermost stage of every pipeline. It maps the
options dict threaded through the middleware onto an ``httpx`` request and
returns the ``httpx.Response``. Non-2xx statuses are returned like any other
response; only transport failures raise.
"""

from __future__ import annotations

from typing import Optional

import httpx

from fetch_pipeline.src.settings import settings
from fetch_pipeline.utils.pylogger import get_python_logger

logger = get_python_logger(__name__)

# Options keys forwarded to httpx as keyword arguments when present
PASSTHROUGH_OPTIONS = ("timeout", "follow_redirects")


def _request_kwargs(options: Optional[dict]) -> dict:
    options = options or {}
    kwargs = {
        "headers": {
            name: str(value) for name, value in (options.get("headers") or {}).items()
        },
    }
    if options.get("body") is not None:
        kwargs["content"] = options["body"]
    for key in PASSTHROUGH_OPTIONS:
        if key in options:
            kwargs[key] = options[key]
    return kwargs


def create_httpx_fetch(client: Optional[httpx.AsyncClient] = None):
    """Create a base executor that sends requests with httpx.

    Args:
        client: Client to send every request with. The caller owns it and is
            responsible for closing it. When omitted, a short-lived client is
            opened for each request.

    Returns:
        An executor ``async (url, options) -> httpx.Response``.
    """

    async def fetch(url: str, options: Optional[dict] = None) -> httpx.Response:
        method = ((options or {}).get("method") or "GET").upper()
        kwargs = _request_kwargs(options)
        logger.debug("Sending %s %s", method, url)

        if client is not None:
            return await client.request(method, url, **kwargs)

        async with httpx.AsyncClient(timeout=settings.DEFAULT_TIMEOUT) as session:
            return await session.request(method, url, **kwargs)

    return fetch


default_fetch = create_httpx_fetch()
