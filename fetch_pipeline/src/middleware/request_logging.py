"""Request logging middleware.

Logs every outgoing request and the response that comes back, with headers
and body included according to the ``REQUEST_LOG_*`` settings.
"""

from __future__ import annotations

import time
from typing import Optional
from urllib.parse import parse_qs, urlsplit

from fetch_pipeline.src.settings import settings
from fetch_pipeline.utils.pylogger import get_python_logger

logger = get_python_logger(__name__)


def _describe_body(body) -> dict:
    body_bytes = body.encode("utf-8") if isinstance(body, str) else bytes(body)
    body_size = len(body_bytes)
    if body_size == 0:
        return {}

    described = {"body_size": body_size}
    if (
        settings.REQUEST_LOG_BODY_MAX_SIZE == 0
        or body_size <= settings.REQUEST_LOG_BODY_MAX_SIZE
    ):
        try:
            described["body"] = body_bytes.decode("utf-8")
        except UnicodeDecodeError:
            described["body"] = "<binary data>"
    else:
        described["body"] = f"<truncated: {body_size} bytes>"
    return described


def log_requests():
    """Log outgoing requests and incoming responses."""

    async def middleware(fetch, url: str, options: Optional[dict] = None):
        if not settings.REQUEST_LOGGING_ENABLED:
            return await fetch(url, options)

        start_time = time.time()
        request_options = options or {}
        parts = urlsplit(url)

        request_data = {
            "method": (request_options.get("method") or "GET").upper(),
            "url": parts._replace(query="", fragment="").geturl(),
            "query_params": parse_qs(parts.query) if parts.query else None,
        }

        if settings.REQUEST_LOG_HEADERS:
            request_data["headers"] = dict(request_options.get("headers") or {})

        if settings.REQUEST_LOG_BODY and request_options.get("body") is not None:
            try:
                request_data.update(_describe_body(request_options["body"]))
            except Exception as e:
                logger.warning("Failed to read request body: %s", str(e))

        logger.info("Outgoing request: %s", request_data)

        try:
            response = await fetch(url, options)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.warning(
                "Request error: method=%s url=%s error=%s duration_ms=%s",
                request_data["method"],
                request_data["url"],
                e,
                round(duration_ms, 2),
            )
            raise

        duration_ms = (time.time() - start_time) * 1000
        response_data = {
            "method": request_data["method"],
            "url": request_data["url"],
            "status_code": getattr(response, "status_code", None),
            "duration_ms": round(duration_ms, 2),
        }

        if settings.REQUEST_LOG_HEADERS and getattr(response, "headers", None) is not None:
            response_data["headers"] = dict(response.headers)

        logger.info("Incoming response: %s", response_data)

        return response

    return middleware
