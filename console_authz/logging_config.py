# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

import logging
import sys
from contextvars import ContextVar

from console_authz.config import settings

# Set per request by the HTTP middleware
request_id_context: ContextVar[str | None] = ContextVar("request_id", default=None)
username_context: ContextVar[str | None] = ContextVar("username", default=None)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(request_context)s%(message)s"


class HealthcheckFilter(logging.Filter):
    """Drops uvicorn access lines for the health check endpoint."""

    def filter(self, record: logging.LogRecord) -> bool:
        return "/health" not in record.getMessage()


class RequestContextFormatter(logging.Formatter):
    """Prefixes records with ``[request-id user=<name>]`` inside a request."""

    def format(self, record: logging.LogRecord) -> str:
        request_id = request_id_context.get()
        username = username_context.get()
        parts = []
        if request_id:
            parts.append(request_id)
        if username:
            parts.append(f"user={username}")
        record.request_context = f"[{' '.join(parts)}] " if parts else ""
        return super().format(record)


def setup_logging():
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(RequestContextFormatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logging.basicConfig(level=log_level, handlers=[handler], force=True)

    # Kubernetes API traffic goes through httpx
    http_level = logging.DEBUG if settings.http_debug_logs else logging.WARNING
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(http_level)

    logging.getLogger("uvicorn.access").addFilter(HealthcheckFilter())
