# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

import logging

from console_authz.clients.bearer import BearerTokenAuth
from console_authz.clients.kubernetes import KubernetesBindingStore
from console_authz.clients.snapshot import SnapshotBindingStore
from console_authz.clients.store import BindingStore
from console_authz.config import Settings

logger = logging.getLogger(__name__)


def create_binding_store(settings: Settings) -> BindingStore:
    if settings.store_backend == "snapshot":
        if not settings.snapshot_path:
            raise ValueError("SNAPSHOT_PATH is required for the snapshot store backend")
        logger.info("Using RBAC snapshot from %s", settings.snapshot_path)
        return SnapshotBindingStore.from_file(settings.snapshot_path)

    if settings.kube_token:
        auth = BearerTokenAuth(token=settings.kube_token)
    else:
        auth = BearerTokenAuth(token_path=settings.kube_token_path)

    return KubernetesBindingStore(
        base_url=settings.kube_api_url,
        auth=auth,
        timeout=settings.kube_timeout_seconds,
        verify_ssl=not settings.tls_insecure_skip_verify,
    )
