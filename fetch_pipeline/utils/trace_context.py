"""Trace context management utilities.

This module provides context variable management for tracing outgoing
requests and carrying logging context across concurrent pipeline invocations.
"""

from __future__ import annotations

import contextvars
import os
import uuid
from typing import Any, Dict, Optional

from fetch_pipeline.utils.constants import AGENT

# Context variable to store trace ID for the current request
trace_id_context: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "trace_id", default=None
)

# Context variable to store log context for the current request
log_context_var: contextvars.ContextVar[Optional[Dict[str, Any]]] = (
    contextvars.ContextVar("log_context", default=None)
)

DEFAULT_LOG_CONTEXT = {
    "client_name": "unknown",
    "client_version": "unknown",
    "jwt_client_id": "unknown",
    "jwt_username": "unknown",
    "http_method": "unknown",
    "http_url": "unknown",
    "user_agent": "unknown",
}


def generate_trace_id() -> str:
    """Generate a new trace ID using UUID4."""
    app_env = os.environ.get("APP_ENV", "local")
    return AGENT + "-" + app_env + "-" + str(uuid.uuid4())


def set_trace_id(trace_id: Optional[str]) -> contextvars.Token:
    """Set the trace ID for the current context.

    Returns the token to pass to ``reset_trace_id`` to restore the previous value.
    """
    return trace_id_context.set(trace_id)


def reset_trace_id(token: contextvars.Token) -> None:
    """Restore the trace ID that was current before ``set_trace_id``."""
    trace_id_context.reset(token)


def get_trace_id() -> Optional[str]:
    """Get the trace ID from the current context."""
    return trace_id_context.get()


def get_trace_id_or_generate() -> str:
    """Get the current trace ID or generate a new one if none exists."""
    trace_id = get_trace_id()
    if trace_id is None:
        trace_id = generate_trace_id()
        set_trace_id(trace_id)
    return trace_id


def set_log_context(log_context: Dict[str, Any]) -> contextvars.Token:
    """Set the log context for the current request."""
    return log_context_var.set(log_context)


def reset_log_context(token: contextvars.Token) -> None:
    """Restore the log context that was current before ``set_log_context``."""
    log_context_var.reset(token)


def get_log_context() -> Dict[str, Any]:
    """Get the log context from the current context."""
    context = log_context_var.get()
    if context is None:
        return dict(DEFAULT_LOG_CONTEXT)
    return context
