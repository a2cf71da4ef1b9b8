from __future__ import annotations

import time
from typing import Optional
from urllib.parse import urlsplit

import jwt

from fetch_pipeline.src.middleware.headers import set_header
from fetch_pipeline.src.settings import settings
from fetch_pipeline.utils.pylogger import get_python_logger
from fetch_pipeline.utils.trace_context import (
    generate_trace_id,
    reset_log_context,
    reset_trace_id,
    set_log_context,
    set_trace_id,
)

logger = get_python_logger(__name__)


def _get_header(options: dict, name: str) -> Optional[str]:
    """Case-insensitive lookup in the options header map."""
    lowered = name.lower()
    for key, value in (options.get("headers") or {}).items():
        if key.lower() == lowered:
            return value
    return None


def _extract_jwt_claims(options: dict) -> dict:
    """Extract JWT claims from the outgoing Authorization header without validation."""
    try:
        auth_header = _get_header(options, "authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            return {}

        token = auth_header[7:]  # Remove "Bearer " prefix

        # Claims are only used for logging, so nothing is verified
        claims = jwt.decode(
            token,
            options={
                "verify_signature": False,
                "verify_exp": False,
                "verify_iat": False,
                "verify_aud": False,
                "verify_iss": False,
            },
        )
        return claims
    except Exception as e:
        logger.debug(f"Failed to extract JWT claims for logging: {e}")
        return {}


def _create_log_context(url: str, options: dict) -> dict:
    """Create logging context with all required fields."""
    jwt_claims = _extract_jwt_claims(options)

    log_context = {
        "client_name": settings.CLIENT_NAME,
        "client_version": settings.CLIENT_VERSION,
        "jwt_client_id": jwt_claims.get("azp")
        or jwt_claims.get("client_id")
        or jwt_claims.get("clientId")
        or "unknown",
        "jwt_username": jwt_claims.get("preferred_username") or "unknown",
        "http_method": (options.get("method") or "GET").upper(),
        "http_url": urlsplit(url)._replace(query="", fragment="").geturl(),
        "user_agent": _get_header(options, "user-agent") or "unknown",
    }

    return log_context


def trace(header_name: Optional[str] = None):
    """Generate a trace ID per request, send it as a header and log the exchange.

    The trace ID and a log context are stored in context variables for the duration
    of the call, so every log line emitted further down the chain carries them. The response
    gets a ``trace_id`` attribute. Errors are logged and re-raised unchanged.
    Place it after any auth middleware to have JWT claims in the log context.
    """

    async def middleware(fetch, url: str, options: Optional[dict] = None):
        if options is None:
            options = {}

        trace_id = generate_trace_id()
        set_header(options, header_name or settings.TRACE_HEADER_NAME, trace_id)
        log_context = _create_log_context(url, options)

        # Restored on exit so the caller's own trace context survives the call
        trace_token = set_trace_id(trace_id)
        context_token = set_log_context(log_context)
        try:
            method = log_context["http_method"]
            path = log_context["http_url"]

            start_time = time.time()
            logger.info(f"Request started: {method} {path}")

            try:
                response = await fetch(url, options)
            except Exception as e:
                process_time = time.time() - start_time
                logger.error(
                    f"Request failed: {method} {path} - Error: {str(e)} - Duration: {process_time:.3f}s"
                )
                raise

            response.trace_id = trace_id
            status = getattr(response, "status_code", "unknown")

            process_time = time.time() - start_time
            logger.info(
                f"Request completed: {method} {path} - Status: {status} - Duration: {process_time:.3f}s"
            )

            return response
        finally:
            reset_log_context(context_token)
            reset_trace_id(trace_token)

    return middleware
