# 📄 File: marketplace/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# This file sets up the logging system that records what happens in the service in a structured way,
# so every log line says which request and which user it belongs to.

# 🧪 Purpose (Technical Summary):
# Structured logging with python-json-logger JSON output, contextvars based request/user
# correlation, a text fallback format and helpers for startup/shutdown events.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Request context tracking

# 🔄 Connected Modules / Calls From:
# Used by: marketplace.main (setup at startup), request logging middleware (log_context),
# authentication middleware (user id binding)

import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Dict, Optional
from uuid import uuid4

from pythonjsonlogger.json import JsonFormatter

from marketplace.shared.config.settings import get_settings

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar('request_id', default='')
user_id_var: ContextVar[str] = ContextVar('user_id', default='')

_logging_configured = False

SERVICE_NAME = 'marketplace-user-service'


class ContextFilter(logging.Filter):
    """
    Adds request ID, user ID and host information to every log record.
    """

    def __init__(self):
        super().__init__()
        self.hostname = os.uname().nodename if hasattr(os, 'uname') else 'unknown'

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get('')
        record.user_id = user_id_var.get('')
        record.hostname = self.hostname
        record.service = SERVICE_NAME
        record.timestamp = datetime.now(timezone.utc).isoformat()
        return True


class ContextualFormatter(logging.Formatter):
    """Plain text formatter that includes the request id when present."""

    def format(self, record):
        request_id = getattr(record, 'request_id', '')
        record.request_tag = f" [{request_id}]" if request_id else ''
        return super().format(record)


class JSONFormatter(JsonFormatter):
    """
    JSON formatter for structured logging.

    Outputs logs in JSON format with consistent structure for
    log aggregation and analysis tools.
    """

    def __init__(self):
        super().__init__(
            '%(timestamp)s %(levelname)s %(name)s %(message)s',
            rename_fields={'levelname': 'level', 'name': 'logger'},
            json_ensure_ascii=False,
        )

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record['service'] = getattr(record, 'service', SERVICE_NAME)
        log_record['module'] = record.module
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno

        request_id = getattr(record, 'request_id', '')
        if request_id:
            log_record['request_id'] = request_id
        user_id = getattr(record, 'user_id', '')
        if user_id:
            log_record['user_id'] = user_id


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_console: bool = True
) -> logging.Logger:
    """
    Setup application logging configuration.

    Args:
        log_level: Override for LOG_LEVEL
        log_format: Override for LOG_FORMAT ("json" or "text")
        enable_console: Attach a stdout handler

    Returns:
        The startup logger
    """
    global _logging_configured

    if _logging_configured:
        return logging.getLogger("startup")

    settings = get_settings()
    log_level = log_level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format.lower() == 'json':
        formatter = JSONFormatter()
    else:
        formatter = ContextualFormatter(
            '%(timestamp)s - %(name)s - %(levelname)s%(request_tag)s - %(message)s'
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(ContextFilter())
        root_logger.addHandler(console_handler)

    logging.getLogger('aiohttp').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.engine').setLevel(
        logging.INFO if settings.DB_ECHO else logging.WARNING
    )

    _logging_configured = True
    return logging.getLogger("startup")


@contextmanager
def log_context(request_id: Optional[str] = None, user_id: Optional[str] = None):
    """
    Context manager for adding contextual information to logs.

    Args:
        request_id: Request identifier, generated when omitted
        user_id: Authenticated user identifier
    """
    if request_id is None:
        request_id = str(uuid4())

    request_token = request_id_var.set(request_id)
    user_token = user_id_var.set(user_id or '')

    try:
        yield {'request_id': request_id, 'user_id': user_id}
    finally:
        request_id_var.reset(request_token)
        user_id_var.reset(user_token)


def bind_user_id(user_id: Optional[str]) -> None:
    """Attach the authenticated user id to the current logging context."""
    user_id_var.set(user_id or '')


def log_startup_event(service_name: str, version: str, extra: Optional[Dict] = None):
    """Log application startup event."""
    logging.getLogger('startup').info(
        f"Service {service_name} v{version} starting up",
        extra={'event_type': 'service_startup', **(extra or {})}
    )


def log_shutdown_event(service_name: str):
    """Log application shutdown event."""
    logging.getLogger('shutdown').info(
        f"Service {service_name} shutting down",
        extra={'event_type': 'service_shutdown'}
    )
