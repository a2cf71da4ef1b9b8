"""Middleware that shape the outgoing request: query string and body."""

from __future__ import annotations

from json import dumps
from typing import Any, Mapping, Optional, Union
from urllib.parse import quote

from fetch_pipeline.src.core.exceptions.exceptions import InvalidContentException
from fetch_pipeline.src.middleware.headers import set_header
from fetch_pipeline.utils.constants import (
    APPLICATION_JSON,
    CONTENT_LENGTH_HEADER,
    CONTENT_TYPE_HEADER,
    FORM_URLENCODED,
)

QueryObject = Union[str, Mapping[str, Any]]


def _encode(value: Any) -> str:
    if isinstance(value, bool):
        value = "true" if value else "false"
    elif isinstance(value, float) and value.is_integer():
        value = int(value)
    return quote(str(value), safe="")


def stringify_query(query: QueryObject) -> str:
    """Encode a mapping as a query string.

    Strings are returned unchanged. Keys are sorted, list and tuple values
    repeat the key once per item and ``None`` renders as a bare key.
    """
    if isinstance(query, str):
        return query

    parts = []
    for key in sorted(query):
        value = query[key]
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            if item is None:
                parts.append(_encode(key))
            else:
                parts.append(f"{_encode(key)}={_encode(item)}")
    return "&".join(parts)


def query(obj: QueryObject):
    """Adds the given object to the query string in the request."""
    query_string = stringify_query(obj)

    async def middleware(fetch, url: str, options: Optional[dict] = None):
        separator = "&" if "?" in url else "?"
        return await fetch(url + separator + query_string, options)

    return middleware


def content(body: str, content_type: str):
    """Adds the given body to the request.

    Raises:
        InvalidContentException: If ``body`` is not a string.
    """
    if not isinstance(body, str):
        raise InvalidContentException(
            f"content(body) must be a string, got {type(body).__name__}"
        )
    content_length = str(len(body.encode("utf-8")))

    async def middleware(fetch, url: str, options: Optional[dict] = None):
        if options is None:
            options = {}
        options["body"] = body

        set_header(options, CONTENT_TYPE_HEADER, content_type)
        set_header(options, CONTENT_LENGTH_HEADER, content_length)

        return await fetch(url, options)

    return middleware


def json(obj: Any):
    """Adds an application/json payload to the request."""
    return content(obj if isinstance(obj, str) else dumps(obj), APPLICATION_JSON)


def params(obj: QueryObject):
    """Adds the given object to the query string of GET/HEAD requests
    and as an x-www-form-urlencoded payload on all others.
    """
    query_string = stringify_query(obj)

    async def middleware(fetch, url: str, options: Optional[dict] = None):
        if options is None:
            options = {}
        method = (options.get("method") or "GET").upper()
        if method in ("GET", "HEAD"):
            delegate = query(query_string)
        else:
            delegate = content(query_string, FORM_URLENCODED)

        return await delegate(fetch, url, options)

    return middleware
