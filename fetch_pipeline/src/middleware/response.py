"""Middleware that observe or decorate the outcome of a request."""

from __future__ import annotations

import inspect
from typing import Any, Callable, Optional

from fetch_pipeline.src.core.exceptions.exceptions import ResponseDecodeException
from fetch_pipeline.utils.pylogger import get_python_logger

logger = get_python_logger(__name__)


def enhance_response(callback: Callable[[Any], Any]):
    """Pass every successful response through ``callback``.

    The callback may be a plain function or a coroutine function and must
    return the response (or a replacement) to hand back up the chain.
    """

    async def middleware(fetch, url: str, options: Optional[dict] = None):
        response = await fetch(url, options)
        result = callback(response)
        if inspect.isawaitable(result):
            result = await result
        return result

    return middleware


def get_text(property_name: str = "text_string"):
    """Adds the text of the response to ``response.<property_name>``."""

    async def read_text(response):
        await response.aread()
        setattr(response, property_name, response.text)
        return response

    return enhance_response(read_text)


def get_json(property_name: str = "json_string"):
    """Adds the decoded JSON of the response to ``response.<property_name>``.

    Raises:
        ResponseDecodeException: If the body is not valid JSON.
    """

    async def read_json(response):
        await response.aread()
        try:
            data = response.json()
        except ValueError as e:
            logger.warning(
                "Failed to decode JSON response: status=%s error=%s",
                response.status_code,
                e,
            )
            raise ResponseDecodeException(f"Invalid JSON in response body: {e}") from e
        setattr(response, property_name, data)
        return response

    return enhance_response(read_json)


def request_info():
    """Adds the request_url and request_options attributes to the
    response/error. Mainly useful in testing/debugging.
    """

    async def middleware(fetch, url: str, options: Optional[dict] = None):
        try:
            response = await fetch(url, options)
        except Exception as e:
            e.request_url = url
            e.request_options = options
            raise

        response.request_url = url
        response.request_options = options
        return response

    return middleware
