# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

"""Built-in capability catalogs, in the same schema as the override documents."""

from typing import Any


def _rule(
    verbs: list[str],
    api_groups: list[str],
    resources: list[str],
    resource_names: list[str] | None = None,
) -> dict[str, Any]:
    rule = {"verbs": verbs, "apiGroups": api_groups, "resources": resources}
    if resource_names:
        rule["resourceNames"] = resource_names
    return rule


def _action(name: str, *rules: dict[str, Any]) -> dict[str, Any]:
    return {"name": name, "rules": list(rules)}


_POD_READ = _rule(["get", "list"], [""], ["pods", "pods/*"])

_APP_CATALOG_READ = [
    _rule(["list"], ["openpitrix.io"], ["repos", "app_versions"]),
    _rule(["get"], ["openpitrix.io"], ["app_version/*"]),
]


def _crud(
    api_groups: list[str],
    resource: str,
    view_groups: list[str] | None = None,
    view_verbs: list[str] | None = None,
) -> list[dict[str, Any]]:
    # view/create/edit/delete over a single resource, as most namespace categories are
    return [
        _action(
            "view",
            _rule(view_verbs or ["get", "list"], view_groups or api_groups, [resource]),
        ),
        _action("create", _rule(["create"], api_groups, [resource])),
        _action("edit", _rule(["update", "patch"], api_groups, [resource])),
        _action("delete", _rule(["delete"], api_groups, [resource])),
    ]


CLUSTER_RULES: list[dict[str, Any]] = [
    {
        "name": "workspaces",
        "actions": [
            {
                "name": "manage",
                "rules": [
                    _rule(["*"], ["*"], ["workspaces", "workspaces/*"]),
                ],
            },
        ],
    },
    {
        "name": "monitoring",
        "actions": [
            {
                "name": "view",
                "rules": [
                    _rule(["get", "list"], ["monitoring.kubesphere.io"], ["*"]),
                    _rule(["get", "list"], ["resources.kubesphere.io"], ["health"]),
                ],
            },
        ],
    },
    {
        "name": "alerting",
        "actions": [
            _action("view", _rule(["get", "list"], ["alerting.kubesphere.io"], ["*"])),
            _action("create", _rule(["create"], ["alerting.kubesphere.io"], ["*"])),
            _action("delete", _rule(["delete"], ["alerting.kubesphere.io"], ["*"])),
        ],
    },
    {
        "name": "logging",
        "actions": [
            _action("view", _rule(["get", "list"], ["logging.kubesphere.io"], ["*"])),
        ],
    },
    {
        "name": "accounts",
        "actions": [
            {
                "name": "view",
                "rules": [
                    _rule(["get", "watch", "list"], ["iam.kubesphere.io"], ["users", "users/*"]),
                    _rule(
                        ["get"],
                        ["iam.kubesphere.io"],
                        ["rulesmapping"],
                        resource_names=["clusterroles"],
                    ),
                    _rule(
                        ["get", "watch", "list"],
                        ["rbac.authorization.k8s.io"],
                        ["clusterrolebindings"],
                    ),
                ],
            },
            {
                "name": "create",
                "rules": [
                    _rule(["create", "get", "list"], ["iam.kubesphere.io"], ["users"]),
                    _rule(
                        ["get"],
                        ["iam.kubesphere.io"],
                        ["clusterrules"],
                        resource_names=["mapping"],
                    ),
                    _rule(
                        ["create", "delete", "deletecollection"],
                        ["rbac.authorization.k8s.io"],
                        ["clusterrolebindings"],
                    ),
                ],
            },
            {
                "name": "edit",
                "rules": [
                    _rule(["get", "list", "update", "patch"], ["iam.kubesphere.io"], ["users"]),
                    _rule(
                        ["create", "delete", "deletecollection"],
                        ["rbac.authorization.k8s.io"],
                        ["clusterrolebindings"],
                    ),
                ],
            },
            {
                "name": "delete",
                "rules": [
                    _rule(["delete", "deletecollection"], ["iam.kubesphere.io"], ["users"]),
                ],
            },
        ],
    },
    {
        "name": "roles",
        "actions": [
            {
                "name": "view",
                "rules": [
                    _rule(
                        ["get", "watch", "list"],
                        ["rbac.authorization.k8s.io"],
                        ["clusterroles"],
                    ),
                    _rule(
                        ["get", "list"],
                        ["iam.kubesphere.io"],
                        ["clusterroles", "clusterroles/*"],
                    ),
                ],
            },
            _action("create", _rule(["create"], ["rbac.authorization.k8s.io"], ["clusterroles"])),
            _action(
                "edit",
                _rule(["update", "patch"], ["rbac.authorization.k8s.io"], ["clusterroles"]),
            ),
            {
                "name": "delete",
                "rules": [
                    _rule(
                        ["delete", "deletecollection"],
                        ["rbac.authorization.k8s.io"],
                        ["clusterroles"],
                    ),
                ],
            },
        ],
    },
    {
        "name": "storageclasses",
        "actions": [
            {
                "name": "view",
                "rules": [
                    _rule(["get", "watch", "list"], ["storage.k8s.io"], ["storageclasses"]),
                    _rule(
                        ["get", "list"],
                        ["resources.kubesphere.io"],
                        ["storageclasses", "storageclasses/*"],
                    ),
                ],
            },
            _action("create", _rule(["create"], ["storage.k8s.io"], ["storageclasses"])),
            _action("edit", _rule(["update", "patch"], ["storage.k8s.io"], ["storageclasses"])),
            {
                "name": "delete",
                "rules": [
                    _rule(["delete", "deletecollection"], ["storage.k8s.io"], ["storageclasses"]),
                ],
            },
        ],
    },
    {
        "name": "nodes",
        "actions": [
            {
                "name": "view",
                "rules": [
                    _rule(["get", "watch", "list"], [""], ["nodes", "events"]),
                    _rule(["get", "list"], ["resources.kubesphere.io"], ["nodes", "nodes/*"]),
                    _rule(["get", "list"], ["monitoring.kubesphere.io"], ["nodes"]),
                ],
            },
            _action("edit", _rule(["update", "patch"], [""], ["nodes"])),
        ],
    },
    {
        "name": "repos",
        "actions": [
            _action("view", _rule(["get", "watch", "list"], ["openpitrix.io"], ["repos"])),
            _action("create", _rule(["create"], ["openpitrix.io"], ["repos"])),
            _action("edit", _rule(["update", "patch"], ["openpitrix.io"], ["repos"])),
            {
                "name": "delete",
                "rules": [_rule(["delete", "deletecollection"], ["openpitrix.io"], ["repos"])],
            },
        ],
    },
    {
        "name": "apps",
        "actions": [
            {
                "name": "view",
                "rules": [
                    *_APP_CATALOG_READ,
                    _rule(["*"], ["openpitrix.io"], ["apps", "clusters"]),
                ],
            },
        ],
    },
    {
        "name": "components",
        "actions": [
            {
                "name": "view",
                "rules": [
                    _rule(
                        ["list", "get"],
                        ["resources.kubesphere.io"],
                        ["components", "components/*"],
                    ),
                ],
            },
        ],
    },
]


NAMESPACE_RULES: list[dict[str, Any]] = [
    {
        "name": "projects",
        "actions": [
            {
                "name": "view",
                "rules": [
                    _rule(["get"], ["*"], ["namespaces"]),
                    _rule(["list"], ["*"], ["events"]),
                ],
            },
            _action("edit", _rule(["update", "patch"], [""], ["namespaces"])),
            _action("delete", _rule(["delete"], [""], ["namespaces"])),
        ],
    },
    {
        "name": "monitoring",
        "actions": [
            {
                "name": "view",
                "rules": [
                    _rule(["get", "list"], ["monitoring.kubesphere.io"], ["*"]),
                    _rule(["get", "list"], ["resources.kubesphere.io"], ["health"]),
                ],
            },
        ],
    },
    {
        "name": "alerting",
        "actions": [
            _action("view", _rule(["get", "list"], ["alerting.kubesphere.io"], ["*"])),
            _action("create", _rule(["create"], ["alerting.kubesphere.io"], ["*"])),
            _action("delete", _rule(["delete"], ["alerting.kubesphere.io"], ["*"])),
        ],
    },
    {
        "name": "members",
        "actions": [
            {
                "name": "view",
                "rules": [
                    _rule(
                        ["get", "list"],
                        ["rbac.authorization.k8s.io", "resources.kubesphere.io"],
                        ["rolebindings"],
                    ),
                    _rule(["get", "list"], ["iam.kubesphere.io"], ["users"]),
                ],
            },
            _action("create", _rule(["create"], ["rbac.authorization.k8s.io"], ["rolebindings"])),
            {
                "name": "edit",
                "rules": [
                    _rule(
                        ["get", "watch", "list", "create", "update", "patch"],
                        ["rbac.authorization.k8s.io"],
                        ["rolebindings"],
                    ),
                ],
            },
            _action("delete", _rule(["delete"], ["rbac.authorization.k8s.io"], ["rolebindings"])),
        ],
    },
    {
        "name": "roles",
        "actions": [
            {
                "name": "view",
                "rules": [
                    _rule(
                        ["get", "list"],
                        ["rbac.authorization.k8s.io", "resources.kubesphere.io"],
                        ["roles"],
                    ),
                ],
            },
            _action("create", _rule(["create"], ["rbac.authorization.k8s.io"], ["roles"])),
            _action("edit", _rule(["patch", "update"], ["rbac.authorization.k8s.io"], ["roles"])),
            _action("delete", _rule(["delete"], ["rbac.authorization.k8s.io"], ["roles"])),
        ],
    },
    {
        "name": "deployments",
        "actions": [
            {
                "name": "view",
                "rules": [
                    _rule(
                        ["get", "list"],
                        ["apps", "extensions", "resources.kubesphere.io"],
                        ["deployments", "deployments/scale"],
                    ),
                    _POD_READ,
                ],
            },
            _action("create", _rule(["create"], ["apps", "extensions"], ["deployments"])),
            {
                "name": "edit",
                "rules": [
                    _rule(
                        ["update", "patch"],
                        ["apps", "extensions"],
                        ["deployments", "deployments/*"],
                    ),
                ],
            },
            _action("delete", _rule(["delete"], ["apps", "extensions"], ["deployments"])),
            {
                "name": "scale",
                "rules": [
                    _rule(["update", "patch"], ["apps", "extensions"], ["deployments/scale"]),
                ],
            },
        ],
    },
    {
        "name": "statefulsets",
        "actions": [
            {
                "name": "view",
                "rules": [
                    _rule(["get", "list"], ["apps", "resources.kubesphere.io"], ["statefulsets"]),
                    _POD_READ,
                ],
            },
            _action("create", _rule(["create"], ["apps"], ["statefulsets"])),
            _action("edit", _rule(["update", "patch"], ["apps"], ["statefulsets"])),
            _action("delete", _rule(["delete"], ["apps"], ["statefulsets"])),
            _action("scale", _rule(["patch"], ["apps"], ["statefulsets"])),
        ],
    },
    {
        "name": "daemonsets",
        "actions": [
            {
                "name": "view",
                "rules": [
                    _rule(
                        ["get", "list"],
                        ["apps", "extensions", "resources.kubesphere.io"],
                        ["daemonsets"],
                    ),
                    _POD_READ,
                ],
            },
            _action("create", _rule(["create"], ["apps", "extensions"], ["daemonsets"])),
            _action("edit", _rule(["update", "patch"], ["apps", "extensions"], ["daemonsets"])),
            _action("delete", _rule(["delete"], ["apps", "extensions"], ["daemonsets"])),
        ],
    },
    {
        "name": "pods",
        "actions": [
            _action("terminal", _rule(["get"], ["terminal.kubesphere.io"], ["pods"])),
            _action("view", _rule(["get", "list"], ["resources.kubesphere.io"], ["pods"])),
            _action("delete", _rule(["delete"], ["*"], ["pods"])),
        ],
    },
    {
        "name": "services",
        "actions": _crud(
            [""],
            "services",
            view_groups=["", "resources.kubesphere.io"],
            view_verbs=["list", "get"],
        ),
    },
    {
        "name": "internet",
        "actions": _crud(["resources.kubesphere.io"], "router"),
    },
    {
        "name": "routes",
        "actions": _crud(
            ["extensions"],
            "ingresses",
            view_groups=["extensions", "resources.kubesphere.io"],
        ),
    },
    {
        "name": "volumes",
        "actions": _crud(
            [""],
            "persistentvolumeclaims",
            view_groups=["", "resources.kubesphere.io"],
        ),
    },
    {
        "name": "applications",
        "actions": [
            {
                "name": "view",
                "rules": [
                    _rule(["get", "list"], ["resources.kubesphere.io"], ["applications"]),
                    *_APP_CATALOG_READ,
                ],
            },
            _action("edit", _rule(["update", "patch"], ["openpitrix.io"], ["apps"])),
            {
                "name": "delete",
                "rules": [
                    _rule(["create"], ["openpitrix.io"], ["clusters"], resource_names=["delete"]),
                ],
            },
        ],
    },
    # "view" is not a Kubernetes verb; these view actions are only reachable
    # through a verb wildcard.
    {
        "name": "jobs",
        "actions": _crud(
            ["batch"],
            "jobs",
            view_groups=["batch", "resources.kubesphere.io"],
            view_verbs=["view", "list"],
        ),
    },
    {
        "name": "cronjobs",
        "actions": _crud(
            ["batch"],
            "cronjobs",
            view_groups=["batch", "resources.kubesphere.io"],
            view_verbs=["view", "list"],
        ),
    },
    {
        "name": "secrets",
        "actions": _crud(
            [""],
            "secrets",
            view_groups=["", "resources.kubesphere.io"],
            view_verbs=["view", "list"],
        ),
    },
    {
        "name": "configmaps",
        "actions": _crud(
            [""],
            "configmaps",
            view_groups=["", "resources.kubesphere.io"],
            view_verbs=["view", "list"],
        ),
    },
]


def _workspace_crud(api_group: str, resource: str) -> list[dict[str, Any]]:
    return [
        _action("view", _rule(["get"], [api_group], [resource])),
        _action("create", _rule(["create"], [api_group], [resource])),
        _action("edit", _rule(["update", "patch"], [api_group], [resource])),
        _action("delete", _rule(["delete"], [api_group], [resource])),
    ]


WORKSPACE_RULES: list[dict[str, Any]] = [
    {
        "name": "workspaces",
        "actions": [
            {
                "name": "edit",
                "rules": [
                    _rule(["*"], ["kubesphere.io"], ["workspaces"]),
                    _rule(["*"], ["kubesphere.io"], ["workspaces/*"]),
                    _rule(["*"], ["jenkins.kubesphere.io"], ["*"]),
                    _rule(["*"], ["devops.kubesphere.io"], ["*"]),
                ],
            },
            _action("delete", _rule(["delete"], ["kubesphere.io"], ["workspaces"])),
        ],
    },
    {
        "name": "members",
        "actions": [
            _action("view", _rule(["get"], ["kubesphere.io"], ["workspaces/members"])),
            _action("create", _rule(["create"], ["kubesphere.io"], ["workspaces/members"])),
            _action("edit", _rule(["patch", "update"], ["kubesphere.io"], ["workspaces/members"])),
            _action("delete", _rule(["delete"], ["kubesphere.io"], ["workspaces/members"])),
        ],
    },
    {"name": "devops", "actions": _workspace_crud("kubesphere.io", "workspaces/devops")},
    {"name": "projects", "actions": _workspace_crud("kubesphere.io", "workspaces/namespaces")},
    {
        "name": "organizations",
        "actions": _workspace_crud("account.kubesphere.io", "workspaces/organizations"),
    },
    {
        "name": "roles",
        "actions": [
            _action("view", _rule(["get"], ["kubesphere.io"], ["workspaces/roles"])),
        ],
    },
]
