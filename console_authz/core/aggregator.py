# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

import logging

from console_authz.clients.store import BindingStore, NotFoundError
from console_authz.constants import rbac_kinds
from console_authz.models.policy import PolicyRule
from console_authz.models.rbac import Binding, Principal, Role, Scope, ScopeKind

logger = logging.getLogger(__name__)


class GrantAggregator:
    """Collects the roles bound to a principal within one scope.

    Store failures propagate. A binding whose role no longer exists is
    skipped with a warning, since bindings and roles are not updated
    atomically.
    """

    def __init__(self, store: BindingStore):
        self.store = store

    def aggregate(
        self, principal: Principal, scope: Scope, include_owned: bool = True
    ) -> list[PolicyRule]:
        roles = self.bound_roles(principal, scope, include_owned=include_owned)
        return [rule for role in roles for rule in role.rules]

    def bound_roles(
        self, principal: Principal, scope: Scope, include_owned: bool = True
    ) -> list[Role]:
        """Roles bound to the principal in ``scope``.

        With ``include_owned=False`` a cluster scope leaves out bindings owned
        by a workspace, keeping only truly cluster-wide grants.
        """
        if scope.kind == ScopeKind.NAMESPACE:
            return self._namespace_roles(principal.username, scope.name)

        bindings = self.store.list_cluster_role_bindings()
        if scope.kind == ScopeKind.WORKSPACE:
            bindings = [b for b in bindings if scope.name in b.workspaces]
        elif not include_owned:
            bindings = [b for b in bindings if not b.workspaces]
        return self._cluster_roles(principal.username, bindings)

    def _namespace_roles(self, username: str, namespace: str) -> list[Role]:
        roles: list[Role] = []
        for binding in self.store.list_role_bindings(namespace):
            if not binding.binds_user(username):
                continue

            ref = binding.role_ref
            try:
                if ref.kind == rbac_kinds.CLUSTER_ROLE:
                    role = self.store.get_cluster_role(ref.name).in_namespace(namespace)
                else:
                    role = self.store.get_role(namespace, ref.name)
            except NotFoundError as e:
                _warn_stale(binding, e)
                continue
            roles.append(role)

        logger.debug(
            "Resolved %d roles for user=%s in namespace=%s", len(roles), username, namespace
        )
        return roles

    def _cluster_roles(self, username: str, bindings: list[Binding]) -> list[Role]:
        roles: list[Role] = []
        for binding in bindings:
            if binding.role_ref.kind != rbac_kinds.CLUSTER_ROLE:
                continue
            if not binding.binds_user(username):
                continue

            try:
                roles.append(self.store.get_cluster_role(binding.role_ref.name))
            except NotFoundError as e:
                _warn_stale(binding, e)

        logger.debug("Resolved %d cluster roles for user=%s", len(roles), username)
        return roles


def _warn_stale(binding: Binding, error: NotFoundError) -> None:
    logger.warning(
        "Skipping binding %s: %s",
        binding.name,
        error,
        extra={"binding": binding.name, "role": binding.role_ref.name},
    )
