# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

# Matches anything in the dimension it appears in
WILDCARD = "*"

USER_KIND = "User"
WORKSPACE_KIND = "Workspace"


class RbacKinds:
    ROLE = "Role"
    CLUSTER_ROLE = "ClusterRole"
    ROLE_BINDING = "RoleBinding"
    CLUSTER_ROLE_BINDING = "ClusterRoleBinding"


rbac_kinds = RbacKinds()


class WorkspaceRoles:
    ADMIN = "workspace-admin"
    REGULAR = "workspace-regular"
    VIEWER = "workspace-viewer"


workspace_roles = WorkspaceRoles()

WORKSPACE_ROLE_NAMES = (
    workspace_roles.ADMIN,
    workspace_roles.REGULAR,
    workspace_roles.VIEWER,
)

# ClusterRoles backing a workspace role are named system:<workspace>:<role>
WORKSPACE_ROLE_PREFIX = "system:"


class RulesMappingScopes:
    """Path names under which each catalog list is published."""

    ROLES = "roles"
    CLUSTER_ROLES = "clusterroles"
    WORKSPACE_ROLES = "workspaceroles"


rules_mapping_scopes = RulesMappingScopes()

RBAC_API_PREFIX = "/apis/rbac.authorization.k8s.io/v1"

# Namespaces and workspaces are DNS-1123 labels
DNS1123_LABEL_PATTERN = r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$"
DNS1123_LABEL_MAX_LENGTH = 63
