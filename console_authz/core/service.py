# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

import logging
import re

from console_authz.clients.store import BindingStore
from console_authz.constants import WORKSPACE_ROLE_NAMES, WORKSPACE_ROLE_PREFIX
from console_authz.core.aggregator import GrantAggregator
from console_authz.core.catalog import Catalog
from console_authz.core.resolver import merge_simple_rules, resolve, resolve_by_namespace
from console_authz.models.policy import Category, SimpleRule
from console_authz.models.rbac import Principal, Scope, ScopeKind

logger = logging.getLogger(__name__)

_WORKSPACE_ROLE_PATTERN = re.compile(
    rf"^{re.escape(WORKSPACE_ROLE_PREFIX)}(\S+):({'|'.join(WORKSPACE_ROLE_NAMES)})$"
)


class CapabilityService:
    """Answers "what may this user do here" for the console, per scope."""

    def __init__(self, store: BindingStore, catalog: Catalog):
        self.catalog = catalog
        self.aggregator = GrantAggregator(store)

    def namespace_rules(self, principal: Principal, namespace: str) -> list[SimpleRule]:
        roles = self.aggregator.bound_roles(principal, Scope.namespace(namespace))
        # Cluster-wide grants apply inside every namespace; workspace-owned ones do not
        roles += [
            role.in_namespace(namespace)
            for role in self.aggregator.bound_roles(principal, Scope.cluster(), include_owned=False)
        ]
        by_namespace = resolve_by_namespace(roles, self.catalog.namespace_categories)
        return by_namespace.get(namespace, [])

    def cluster_rules(self, principal: Principal) -> list[SimpleRule]:
        grants = self.aggregator.aggregate(principal, Scope.cluster())
        return resolve(grants, self.catalog.cluster_categories)

    def workspace_rules(self, principal: Principal, workspace: str) -> list[SimpleRule]:
        categories = self.catalog.workspace_categories

        # Ownership already confines these grants to the workspace, so the
        # resource names naming it are dropped before matching.
        workspace_grants = [
            rule.without_resource_names()
            for rule in self.aggregator.aggregate(principal, Scope.workspace(workspace))
        ]
        cluster_grants = self.aggregator.aggregate(
            principal, Scope.cluster(), include_owned=False
        )

        return merge_simple_rules(
            resolve(workspace_grants, categories),
            resolve(cluster_grants, categories),
        )

    def workspace_role(self, principal: Principal, workspace: str) -> str | None:
        for role in self.aggregator.bound_roles(principal, Scope.cluster()):
            match = _WORKSPACE_ROLE_PATTERN.match(role.name)
            if match and match.group(1) == workspace:
                return match.group(2)
        return None

    def rules_mapping(self, kind: ScopeKind) -> tuple[Category, ...]:
        return self.catalog.categories(kind)
