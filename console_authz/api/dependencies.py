# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

import logging

from fastapi import HTTPException, Request

from console_authz.config import settings
from console_authz.core.service import CapabilityService
from console_authz.models.rbac import Principal

logger = logging.getLogger(__name__)


def get_capability_service(request: Request) -> CapabilityService:
    return request.app.state.capability_service


def require_principal(request: Request) -> Principal:
    username = request.headers.get(settings.username_header)
    if not username:
        logger.warning("Request without %s header", settings.username_header)
        raise HTTPException(
            status_code=401,
            detail={
                "error": "MISSING_USER",
                "message": f"{settings.username_header} header required",
            },
        )
    return Principal(username=username)
