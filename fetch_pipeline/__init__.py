"""Composable asynchronous HTTP request pipelines built from middleware."""

from __future__ import annotations

from fetch_pipeline.src.pipeline import Executor, Middleware, compose, create_fetch

__all__ = ["Executor", "Middleware", "compose", "create_fetch"]
__version__ = "0.1.0"
