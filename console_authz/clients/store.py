# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

from abc import ABC, abstractmethod

from console_authz.models.rbac import Binding, Role


class StoreError(Exception):
    pass


class NotFoundError(StoreError):
    def __init__(self, kind: str, name: str, namespace: str | None = None):
        self.kind = kind
        self.name = name
        self.namespace = namespace
        where = f"{namespace}/{name}" if namespace else name
        super().__init__(f"{kind} {where} not found")


class StoreUnavailableError(StoreError):
    pass


class BindingStore(ABC):
    """Read access to role bindings and roles.

    Lookups of a missing Role/ClusterRole raise ``NotFoundError``; any
    failure of the backing store raises ``StoreUnavailableError``.
    """

    @abstractmethod
    def list_role_bindings(self, namespace: str) -> list[Binding]: ...

    @abstractmethod
    def list_cluster_role_bindings(self) -> list[Binding]: ...

    @abstractmethod
    def get_role(self, namespace: str, name: str) -> Role: ...

    @abstractmethod
    def get_cluster_role(self, name: str) -> Role: ...

    def check_connection(self) -> bool:
        return True

    def close(self) -> None:
        return None
