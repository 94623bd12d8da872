# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

from console_authz.clients.bearer import BearerTokenAuth
from console_authz.clients.factory import create_binding_store
from console_authz.clients.kubernetes import KubernetesBindingStore
from console_authz.clients.snapshot import SnapshotBindingStore
from console_authz.clients.store import (
    BindingStore,
    NotFoundError,
    StoreError,
    StoreUnavailableError,
)

__all__ = [
    "BearerTokenAuth",
    "BindingStore",
    "KubernetesBindingStore",
    "NotFoundError",
    "SnapshotBindingStore",
    "StoreError",
    "StoreUnavailableError",
    "create_binding_store",
]
