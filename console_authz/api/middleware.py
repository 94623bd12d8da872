# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

import logging
import time
import uuid

from fastapi import Request

from console_authz.config import settings
from console_authz.logging_config import request_id_context, username_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


async def request_context_middleware(request: Request, call_next):
    """Tag log lines with the request id and gateway user, and time the request."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
    id_token = request_id_context.set(request_id)
    user_token = username_context.set(request.headers.get(settings.username_header))
    start_time = time.perf_counter()
    try:
        response = await call_next(request)
    finally:
        elapsed = time.perf_counter() - start_time
        if request.url.path != "/health":
            logger.info("%s %s took %.3fs", request.method, request.url.path, elapsed)
        username_context.reset(user_token)
        request_id_context.reset(id_token)

    response.headers[REQUEST_ID_HEADER] = request_id
    return response
