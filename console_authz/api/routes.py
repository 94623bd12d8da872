# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path
from pydantic import BaseModel

from console_authz.api.dependencies import get_capability_service, require_principal
from console_authz.constants import (
    DNS1123_LABEL_MAX_LENGTH,
    DNS1123_LABEL_PATTERN,
    rules_mapping_scopes,
)
from console_authz.core.service import CapabilityService
from console_authz.models.policy import Category, SimpleRule
from console_authz.models.rbac import Principal, ScopeKind

logger = logging.getLogger(__name__)

router = APIRouter()

Service = Annotated[CapabilityService, Depends(get_capability_service)]
CurrentPrincipal = Annotated[Principal, Depends(require_principal)]
Label = Annotated[str, Path(pattern=DNS1123_LABEL_PATTERN, max_length=DNS1123_LABEL_MAX_LENGTH)]

_MAPPING_SCOPES = {
    rules_mapping_scopes.ROLES: ScopeKind.NAMESPACE,
    rules_mapping_scopes.CLUSTER_ROLES: ScopeKind.CLUSTER,
    rules_mapping_scopes.WORKSPACE_ROLES: ScopeKind.WORKSPACE,
}


class WorkspaceRoleResponse(BaseModel):
    workspace: str
    role: str | None = None


@router.get("/health")
def health(service: Service):
    if not service.aggregator.store.check_connection():
        logger.error("Health check failed: binding store unreachable")
        raise HTTPException(
            status_code=503,
            detail={"status": "unhealthy", "error": "binding store unreachable"},
        )
    return {"status": "healthy"}


@router.get("/api/v1/namespaces/{namespace}/rules", response_model=list[SimpleRule])
def namespace_rules(namespace: Label, principal: CurrentPrincipal, service: Service):
    rules = service.namespace_rules(principal, namespace)
    logger.info(
        "Namespace rules: user=%s namespace=%s categories=%d",
        principal.username,
        namespace,
        len(rules),
    )
    return rules


@router.get("/api/v1/workspaces/{workspace}/rules", response_model=list[SimpleRule])
def workspace_rules(workspace: Label, principal: CurrentPrincipal, service: Service):
    rules = service.workspace_rules(principal, workspace)
    logger.info(
        "Workspace rules: user=%s workspace=%s categories=%d",
        principal.username,
        workspace,
        len(rules),
    )
    return rules


@router.get("/api/v1/workspaces/{workspace}/role", response_model=WorkspaceRoleResponse)
def workspace_role(workspace: Label, principal: CurrentPrincipal, service: Service):
    return WorkspaceRoleResponse(
        workspace=workspace, role=service.workspace_role(principal, workspace)
    )


@router.get("/api/v1/clusterrules", response_model=list[SimpleRule])
def cluster_rules(principal: CurrentPrincipal, service: Service):
    rules = service.cluster_rules(principal)
    logger.info("Cluster rules: user=%s categories=%d", principal.username, len(rules))
    return rules


@router.get("/api/v1/rulesmapping/{scope}", response_model=list[Category])
def rules_mapping(scope: str, service: Service):
    kind = _MAPPING_SCOPES.get(scope)
    if kind is None:
        raise HTTPException(
            status_code=404,
            detail={"error": "NOT_FOUND", "message": f"Unknown rules mapping: {scope}"},
        )
    return list(service.rules_mapping(kind))
