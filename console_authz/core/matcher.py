# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

"""Wildcard-aware matching of granted policy rules against required ones."""

from collections.abc import Sequence

from console_authz.constants import WILDCARD
from console_authz.models.policy import Action, PolicyRule


def satisfies(grants: Sequence[PolicyRule], required: PolicyRule) -> bool:
    """Check that every combination implied by ``required`` is granted.

    Each (apiGroup, resource, resourceName, verb) combination, or
    (apiGroup, nonResourceURL, verb) when the requirement names URLs,
    must be covered by at least one grant on its own. Values listed in
    one dimension are ANDed, so ``apiGroups=["apps", ""]`` needs both
    groups granted.
    """
    for api_group in required.api_groups:
        if required.non_resource_urls:
            for url in required.non_resource_urls:
                for verb in required.verbs:
                    if not any(_grants_non_resource(g, url, verb) for g in grants):
                        return False
            continue

        names = required.resource_names or (None,)
        for resource in required.resources:
            for resource_name in names:
                for verb in required.verbs:
                    if not any(
                        _grants_resource(g, api_group, resource, resource_name, verb)
                        for g in grants
                    ):
                        return False
    return True


def action_permitted(grants: Sequence[PolicyRule], action: Action) -> bool:
    return all(satisfies(grants, required) for required in action.rules)


def _has(values: Sequence[str], value: str) -> bool:
    return value in values or WILDCARD in values


def _grants_resource(
    grant: PolicyRule,
    api_group: str,
    resource: str,
    resource_name: str | None,
    verb: str,
) -> bool:
    if not _has(grant.verbs, verb):
        return False
    if not _has(grant.api_groups, api_group):
        return False
    if not _resource_matches(grant.resources, resource):
        return False
    if resource_name is None or not grant.resource_names:
        return True
    return _has(grant.resource_names, resource_name) or WILDCARD in grant.resources


def _resource_matches(granted: Sequence[str], resource: str) -> bool:
    if _has(granted, resource):
        return True
    if not resource:
        return False

    base, _, subresource = resource.partition("/")
    for res in granted:
        # "*/scale" covers the scale subresource of anything
        if subresource and res.startswith("*/") and res[2:] == subresource:
            return True
        # "deployments/*" covers deployments and all of its subresources
        if res.endswith("/*") and res[:-2] == base:
            return True
    return False


def _grants_non_resource(grant: PolicyRule, url: str, verb: str) -> bool:
    if not _has(grant.verbs, verb):
        return False
    return any(_path_matches(url, pattern) for pattern in grant.non_resource_urls)


def _path_matches(path: str, pattern: str) -> bool:
    if pattern == WILDCARD or pattern == path:
        return True
    return pattern.endswith("*") and path.startswith(pattern[:-1])
