# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from console_authz.clients.store import BindingStore, NotFoundError, StoreUnavailableError
from console_authz.constants import rbac_kinds
from console_authz.models.rbac import Binding, Role

logger = logging.getLogger(__name__)


class SnapshotBindingStore(BindingStore):
    """In-memory RBAC objects, indexed once at construction."""

    def __init__(
        self,
        role_bindings: Iterable[Binding] = (),
        cluster_role_bindings: Iterable[Binding] = (),
        roles: Iterable[Role] = (),
        cluster_roles: Iterable[Role] = (),
    ) -> None:
        self._role_bindings: dict[str, list[Binding]] = {}
        for binding in role_bindings:
            self._role_bindings.setdefault(binding.namespace or "", []).append(binding)

        self._cluster_role_bindings = list(cluster_role_bindings)
        self._roles = {(role.namespace or "", role.name): role for role in roles}
        self._cluster_roles = {role.name: role for role in cluster_roles}

    @classmethod
    def from_objects(cls, objects: Iterable[dict[str, Any]]) -> "SnapshotBindingStore":
        role_bindings: list[Binding] = []
        cluster_role_bindings: list[Binding] = []
        roles: list[Role] = []
        cluster_roles: list[Role] = []

        for obj in _flatten(objects):
            kind = obj.get("kind")
            if kind == rbac_kinds.ROLE_BINDING:
                role_bindings.append(Binding.model_validate(obj))
            elif kind == rbac_kinds.CLUSTER_ROLE_BINDING:
                cluster_role_bindings.append(Binding.model_validate(obj))
            elif kind == rbac_kinds.ROLE:
                roles.append(Role.model_validate(obj))
            elif kind == rbac_kinds.CLUSTER_ROLE:
                cluster_roles.append(Role.model_validate(obj))
            else:
                logger.debug("Ignoring snapshot object of kind %s", kind)

        logger.info(
            "Snapshot loaded: %d role bindings, %d cluster role bindings, "
            "%d roles, %d cluster roles",
            len(role_bindings),
            len(cluster_role_bindings),
            len(roles),
            len(cluster_roles),
        )
        return cls(role_bindings, cluster_role_bindings, roles, cluster_roles)

    @classmethod
    def from_file(cls, path: str | Path) -> "SnapshotBindingStore":
        try:
            data = json.loads(Path(path).read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise StoreUnavailableError(f"Cannot read RBAC snapshot {path}: {e}") from e

        objects = data if isinstance(data, list) else [data]
        try:
            return cls.from_objects(objects)
        except ValidationError as e:
            raise StoreUnavailableError(f"Invalid RBAC snapshot {path}: {e}") from e

    def list_role_bindings(self, namespace: str) -> list[Binding]:
        return list(self._role_bindings.get(namespace, []))

    def list_cluster_role_bindings(self) -> list[Binding]:
        return list(self._cluster_role_bindings)

    def get_role(self, namespace: str, name: str) -> Role:
        role = self._roles.get((namespace, name))
        if role is None:
            raise NotFoundError(rbac_kinds.ROLE, name, namespace)
        return role

    def get_cluster_role(self, name: str) -> Role:
        role = self._cluster_roles.get(name)
        if role is None:
            raise NotFoundError(rbac_kinds.CLUSTER_ROLE, name)
        return role


def _flatten(objects: Iterable[dict[str, Any]]) -> Iterable[dict[str, Any]]:
    for obj in objects:
        kind = str(obj.get("kind", ""))
        if not kind.endswith("List"):
            yield obj
            continue
        # Items of a typed list (RoleBindingList) may omit their own kind
        item_kind = kind.removesuffix("List")
        for item in obj.get("items") or []:
            yield {"kind": item_kind, **item} if item_kind else item
