# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

import logging
import re
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from console_authz.clients.store import BindingStore, NotFoundError, StoreUnavailableError
from console_authz.constants import (
    DNS1123_LABEL_MAX_LENGTH,
    DNS1123_LABEL_PATTERN,
    RBAC_API_PREFIX,
    rbac_kinds,
)
from console_authz.models.rbac import Binding, Role

logger = logging.getLogger(__name__)

_PAGE_SIZE = 500

_NAMESPACE_RE = re.compile(DNS1123_LABEL_PATTERN)


class KubernetesBindingStore(BindingStore):
    def __init__(
        self,
        base_url: str,
        auth: httpx.Auth | None = None,
        timeout: float = 10.0,
        verify_ssl: bool = True,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            auth=auth,
            timeout=httpx.Timeout(timeout),
            verify=verify_ssl,
            transport=transport,
        )

        logger.info(
            "Kubernetes binding store initialized",
            extra={"api_url": self.base_url, "timeout": timeout},
        )

    def close(self) -> None:
        self._client.close()

    def check_connection(self) -> bool:
        try:
            response = self._client.get(RBAC_API_PREFIX)
        except (httpx.HTTPError, OSError) as e:
            logger.error("Kubernetes API unreachable: %s", e)
            return False
        return response.status_code == 200

    def list_role_bindings(self, namespace: str) -> list[Binding]:
        if not _is_namespace(namespace):
            # No such namespace can exist, so it holds no bindings
            logger.warning("Refusing to list role bindings in invalid namespace %r", namespace)
            return []
        items = self._list(f"/namespaces/{namespace}/rolebindings")
        return _validate_all(Binding, items, rbac_kinds.ROLE_BINDING)

    def list_cluster_role_bindings(self) -> list[Binding]:
        items = self._list("/clusterrolebindings")
        return _validate_all(Binding, items, rbac_kinds.CLUSTER_ROLE_BINDING)

    def get_role(self, namespace: str, name: str) -> Role:
        if not _is_namespace(namespace) or not _is_name(name):
            raise NotFoundError(rbac_kinds.ROLE, name, namespace)
        body = self._get(f"/namespaces/{namespace}/roles/{_segment(name)}")
        if body is None:
            raise NotFoundError(rbac_kinds.ROLE, name, namespace)
        return _validate_all(Role, [body], rbac_kinds.ROLE)[0]

    def get_cluster_role(self, name: str) -> Role:
        if not _is_name(name):
            raise NotFoundError(rbac_kinds.CLUSTER_ROLE, name)
        body = self._get(f"/clusterroles/{_segment(name)}")
        if body is None:
            raise NotFoundError(rbac_kinds.CLUSTER_ROLE, name)
        return _validate_all(Role, [body], rbac_kinds.CLUSTER_ROLE)[0]

    def _list(self, path: str) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        params: dict[str, Any] = {"limit": _PAGE_SIZE}

        while True:
            body = self._get(path, params=params)
            if body is None:
                raise StoreUnavailableError(f"Kubernetes API returned 404 for list {path}")

            items.extend(body.get("items") or [])

            token = (body.get("metadata") or {}).get("continue")
            if not token:
                return items
            params = {"limit": _PAGE_SIZE, "continue": token}

    def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any] | None:
        url = f"{RBAC_API_PREFIX}{path}"

        try:
            response = self._client.get(url, params=params)
        except (httpx.HTTPError, OSError) as e:
            logger.error("Kubernetes API unavailable", extra={"url": url, "error": str(e)})
            raise StoreUnavailableError(f"Kubernetes API unavailable: {e}") from e

        if response.status_code == 404:
            return None

        if response.status_code != 200:
            logger.error(
                "Kubernetes API error",
                extra={"url": url, "status": response.status_code, "response_body": response.text},
            )
            raise StoreUnavailableError(
                f"Kubernetes API error {response.status_code} for {url}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise StoreUnavailableError(f"Invalid response from Kubernetes API for {url}") from e


def _validate_all(model, items: list[dict[str, Any]], kind: str) -> list:
    try:
        return [model.model_validate(item) for item in items]
    except ValidationError as e:
        raise StoreUnavailableError(f"Malformed {kind} from Kubernetes API: {e}") from e


def _is_namespace(namespace: str) -> bool:
    return len(namespace) <= DNS1123_LABEL_MAX_LENGTH and bool(_NAMESPACE_RE.match(namespace))


def _is_name(name: str) -> bool:
    # Object names are single path segments; "." and ".." would be collapsed by the URL
    return name not in ("", ".", "..") and "/" not in name


def _segment(name: str) -> str:
    # RBAC names may carry ":" (system:<workspace>:<role>)
    return quote(name, safe=":@")
