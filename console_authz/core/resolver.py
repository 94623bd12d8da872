# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

from collections.abc import Iterable, Sequence

from console_authz.core.matcher import action_permitted
from console_authz.models.policy import Category, PolicyRule, SimpleRule
from console_authz.models.rbac import Role


def resolve(grants: Sequence[PolicyRule], categories: Iterable[Category]) -> list[SimpleRule]:
    """Project grants onto the catalog.

    Categories and actions keep catalog order. A category with no
    permitted action is left out of the result.
    """
    rules: list[SimpleRule] = []
    for category in categories:
        actions = [action.name for action in category.actions if action_permitted(grants, action)]
        if actions:
            rules.append(SimpleRule(name=category.name, actions=actions))
    return rules


def resolve_by_namespace(
    roles: Iterable[Role], categories: Sequence[Category]
) -> dict[str, list[SimpleRule]]:
    grouped: dict[str, list[PolicyRule]] = {}
    for role in roles:
        if role.namespace is None:
            continue
        grouped.setdefault(role.namespace, []).extend(role.rules)

    return {namespace: resolve(grants, categories) for namespace, grants in grouped.items()}


def merge_simple_rules(base: Sequence[SimpleRule], extra: Sequence[SimpleRule]) -> list[SimpleRule]:
    merged = [rule.model_copy(deep=True) for rule in base]
    by_name = {rule.name: rule for rule in merged}

    for rule in extra:
        existing = by_name.get(rule.name)
        if existing is None:
            existing = SimpleRule(name=rule.name)
            merged.append(existing)
            by_name[rule.name] = existing
        for action in rule.actions:
            if action not in existing.actions:
                existing.actions.append(action)

    return merged
