# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

from console_authz.core.resolver import merge_simple_rules, resolve, resolve_by_namespace
from console_authz.models.policy import Action, Category, PolicyRule, SimpleRule
from console_authz.models.rbac import ObjectMeta, Role

NAMESPACE_VIEW = PolicyRule(verbs=["get", "list"], api_groups=[""], resources=["namespaces"])

NAMESPACES = Category(
    name="namespaces",
    actions=(
        Action(name="view", rules=(NAMESPACE_VIEW,)),
        Action(
            name="create",
            rules=(PolicyRule(verbs=["create"], api_groups=[""], resources=["namespaces"]),),
        ),
    ),
)

SECRETS = Category(
    name="secrets",
    actions=(
        Action(
            name="view",
            rules=(PolicyRule(verbs=["get"], api_groups=[""], resources=["secrets"]),),
        ),
    ),
)


def test_exact_grant_permits_only_matching_action():
    assert resolve([NAMESPACE_VIEW], [NAMESPACES]) == [
        SimpleRule(name="namespaces", actions=["view"])
    ]


def test_full_wildcard_permits_every_action(catalog):
    grant = PolicyRule(verbs=["*"], api_groups=["*"], resources=["*"])

    for categories in (
        catalog.namespace_categories,
        catalog.cluster_categories,
        catalog.workspace_categories,
    ):
        expected = [
            SimpleRule(name=c.name, actions=[a.name for a in c.actions]) for c in categories
        ]
        assert resolve([grant], categories) == expected


def test_categories_without_permitted_actions_are_omitted():
    rules = resolve([NAMESPACE_VIEW], [SECRETS, NAMESPACES])

    assert [r.name for r in rules] == ["namespaces"]
    assert resolve([], [SECRETS, NAMESPACES]) == []


def test_output_follows_catalog_order():
    grant = PolicyRule(verbs=["*"], api_groups=[""], resources=["*"])

    assert [r.name for r in resolve([grant], [SECRETS, NAMESPACES])] == ["secrets", "namespaces"]
    assert resolve([grant], [NAMESPACES])[0].actions == ["view", "create"]


def test_adding_grants_never_removes_actions(catalog):
    grants = [
        PolicyRule(verbs=["get", "list"], api_groups=["apps"], resources=["deployments"]),
        PolicyRule(verbs=["get", "list"], api_groups=[""], resources=["pods", "pods/*"]),
        PolicyRule(verbs=["create"], api_groups=["apps", "extensions"], resources=["deployments"]),
        PolicyRule(verbs=["get", "list"], api_groups=["*"], resources=["deployments"]),
        PolicyRule(verbs=["delete"], api_groups=["*"], resources=["pods"]),
        PolicyRule(verbs=["*"], api_groups=[""], resources=["*"]),
    ]
    categories = catalog.namespace_categories

    previous: set[tuple[str, str]] = set()
    for size in range(len(grants) + 1):
        permitted = {
            (rule.name, action)
            for rule in resolve(grants[:size], categories)
            for action in rule.actions
        }
        assert previous <= permitted
        previous = permitted


def test_resolve_does_not_depend_on_grant_order(catalog):
    grants = [
        PolicyRule(
            verbs=["get", "list"], api_groups=["*"], resources=["deployments", "deployments/scale"]
        ),
        PolicyRule(verbs=["get", "list"], api_groups=[""], resources=["pods", "pods/*"]),
        PolicyRule(
            verbs=["update", "patch"],
            api_groups=["apps", "extensions"],
            resources=["deployments/*"],
        ),
    ]

    forward = resolve(grants, catalog.namespace_categories)

    assert forward == resolve(list(reversed(grants)), catalog.namespace_categories)
    assert forward == [SimpleRule(name="deployments", actions=["view", "edit", "scale"])]


def test_resolve_by_namespace_groups_role_rules():
    roles = [
        Role(metadata=ObjectMeta(name="viewer", namespace="dev"), rules=[NAMESPACE_VIEW]),
        Role(
            metadata=ObjectMeta(name="creator", namespace="dev"),
            rules=[PolicyRule(verbs=["create"], api_groups=[""], resources=["namespaces"])],
        ),
        Role(metadata=ObjectMeta(name="viewer", namespace="prod"), rules=[NAMESPACE_VIEW]),
        Role(metadata=ObjectMeta(name="global"), rules=[NAMESPACE_VIEW]),
    ]

    assert resolve_by_namespace(roles, [NAMESPACES]) == {
        "dev": [SimpleRule(name="namespaces", actions=["view", "create"])],
        "prod": [SimpleRule(name="namespaces", actions=["view"])],
    }


def test_merge_simple_rules_unions_actions():
    base = [
        SimpleRule(name="members", actions=["view"]),
        SimpleRule(name="roles", actions=["view"]),
    ]
    extra = [
        SimpleRule(name="projects", actions=["view"]),
        SimpleRule(name="members", actions=["create", "view"]),
    ]

    merged = merge_simple_rules(base, extra)

    assert merged == [
        SimpleRule(name="members", actions=["view", "create"]),
        SimpleRule(name="roles", actions=["view"]),
        SimpleRule(name="projects", actions=["view"]),
    ]
    assert base[0].actions == ["view"]
    assert merge_simple_rules([], []) == []
