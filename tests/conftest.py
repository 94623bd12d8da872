# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

from typing import Any

import pytest

from console_authz.clients.snapshot import SnapshotBindingStore
from console_authz.core.catalog import Catalog, default_catalog
from console_authz.core.service import CapabilityService


def _binding(
    kind: str,
    name: str,
    users: list[str],
    role_kind: str,
    role_name: str,
    namespace: str | None = None,
    workspace: str | None = None,
) -> dict[str, Any]:
    metadata: dict[str, Any] = {"name": name}
    if namespace:
        metadata["namespace"] = namespace
    if workspace:
        metadata["ownerReferences"] = [
            {"apiVersion": "tenant.kubesphere.io/v1alpha1", "kind": "Workspace", "name": workspace}
        ]
    return {
        "kind": kind,
        "metadata": metadata,
        "subjects": [
            {"kind": "User", "apiGroup": "rbac.authorization.k8s.io", "name": user}
            for user in users
        ],
        "roleRef": {"apiGroup": "rbac.authorization.k8s.io", "kind": role_kind, "name": role_name},
    }


def _role(kind: str, name: str, rules: list[dict[str, Any]], namespace: str | None = None):
    metadata: dict[str, Any] = {"name": name}
    if namespace:
        metadata["namespace"] = namespace
    return {"kind": kind, "metadata": metadata, "rules": rules}


@pytest.fixture()
def rbac_objects() -> list[dict[str, Any]]:
    return [
        _role(
            "ClusterRole",
            "cluster-admin",
            [{"verbs": ["*"], "apiGroups": ["*"], "resources": ["*"]}],
        ),
        _role(
            "ClusterRole",
            "system:ws-a:workspace-admin",
            [
                {
                    "verbs": ["*"],
                    "apiGroups": ["kubesphere.io"],
                    "resources": ["workspaces", "workspaces/*"],
                    "resourceNames": ["ws-a"],
                }
            ],
        ),
        _role(
            "ClusterRole",
            "system:ws-b:workspace-viewer",
            [
                {
                    "verbs": ["get"],
                    "apiGroups": ["kubesphere.io"],
                    "resources": ["workspaces/members", "workspaces/namespaces"],
                    "resourceNames": ["ws-b"],
                }
            ],
        ),
        _role(
            "Role",
            "viewer",
            [
                {
                    "verbs": ["get", "list"],
                    "apiGroups": ["apps", "extensions", "resources.kubesphere.io"],
                    "resources": ["deployments", "deployments/scale"],
                },
                {"verbs": ["get", "list"], "apiGroups": [""], "resources": ["pods", "pods/*"]},
            ],
            namespace="demo",
        ),
        _role(
            "Role",
            "deployer",
            [
                {
                    "verbs": ["create"],
                    "apiGroups": ["apps", "extensions"],
                    "resources": ["deployments"],
                }
            ],
            namespace="demo",
        ),
        _binding("RoleBinding", "alice-viewer", ["alice"], "Role", "viewer", namespace="demo"),
        _binding("RoleBinding", "alice-deployer", ["alice"], "Role", "deployer", namespace="demo"),
        _binding("RoleBinding", "alice-stale", ["alice"], "Role", "removed", namespace="demo"),
        _binding(
            "RoleBinding", "bob-admin", ["bob"], "ClusterRole", "cluster-admin", namespace="demo"
        ),
        _binding(
            "ClusterRoleBinding",
            "ws-a-admin",
            ["alice"],
            "ClusterRole",
            "system:ws-a:workspace-admin",
            workspace="ws-a",
        ),
        _binding(
            "ClusterRoleBinding",
            "ws-b-viewer",
            ["alice"],
            "ClusterRole",
            "system:ws-b:workspace-viewer",
            workspace="ws-b",
        ),
        _binding("ClusterRoleBinding", "root", ["admin"], "ClusterRole", "cluster-admin"),
        _binding("ClusterRoleBinding", "carol-stale", ["carol"], "ClusterRole", "deleted-role"),
    ]


@pytest.fixture()
def store(rbac_objects) -> SnapshotBindingStore:
    return SnapshotBindingStore.from_objects(rbac_objects)


@pytest.fixture()
def catalog() -> Catalog:
    return default_catalog()


@pytest.fixture()
def service(store, catalog) -> CapabilityService:
    return CapabilityService(store, catalog)
