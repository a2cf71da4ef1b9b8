"""Application constants.

This module defines global constants used throughout the fetch pipeline package.
"""

from __future__ import annotations

LOGGER = "fetch-pipeline-logger"
AGENT = "fetch-pipeline"
DEFAULT_LOG_FORMAT = "timestamp=%(asctime)s.%(msecs)03d log_level=%(levelname)s hostname=%(hostname)s environment=%(environment)s trace_id=%(trace_id)s client.name=%(client_name)s client.version=%(client_version)s jwt.client_id=%(jwt_client_id)s jwt.username=%(jwt_username)s http.method=%(http_method)s http.url=%(http_url)s user_agent=%(user_agent)s class=%(module)s function=%(funcName)s log_message=%(message)s"
DEFAULT_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_ROTATION_CONFIG = {"maxBytes": 52428800, "backupCount": 5, "encoding": "utf-8"}
VALID_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")

AUTHORIZATION_HEADER = "Authorization"
CONTENT_TYPE_HEADER = "Content-Type"
CONTENT_LENGTH_HEADER = "Content-Length"
ACCEPT_HEADER = "Accept"
FORM_URLENCODED = "application/x-www-form-urlencoded"
APPLICATION_JSON = "application/json"
