# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

import pytest
from fastapi.testclient import TestClient

from console_authz.clients.snapshot import SnapshotBindingStore
from console_authz.clients.store import StoreUnavailableError
from console_authz.main import create_app

ALICE = {"X-Token-Username": "alice"}


class BrokenStore(SnapshotBindingStore):
    def check_connection(self):
        return False

    def list_role_bindings(self, namespace):
        raise StoreUnavailableError("connection refused")

    def list_cluster_role_bindings(self):
        raise StoreUnavailableError("connection refused")


@pytest.fixture()
def client(store, catalog):
    with TestClient(create_app(store=store, catalog=catalog)) as client:
        yield client


@pytest.fixture()
def broken_client(catalog):
    with TestClient(create_app(store=BrokenStore(), catalog=catalog)) as client:
        yield client


def test_namespace_rules(client):
    response = client.get("/api/v1/namespaces/demo/rules", headers=ALICE)

    assert response.status_code == 200
    assert response.json() == [{"name": "deployments", "actions": ["view", "create"]}]


def test_missing_user_header(client):
    response = client.get("/api/v1/namespaces/demo/rules")

    assert response.status_code == 401
    assert response.json()["detail"]["error"] == "MISSING_USER"


def test_cluster_rules(client, catalog):
    response = client.get("/api/v1/clusterrules", headers={"X-Token-Username": "admin"})

    assert response.status_code == 200
    assert [r["name"] for r in response.json()] == [c.name for c in catalog.cluster_categories]
    assert client.get("/api/v1/clusterrules", headers=ALICE).json() == []


def test_invalid_names_are_rejected(client):
    assert client.get("/api/v1/namespaces/Not_Valid/rules", headers=ALICE).status_code == 422
    assert client.get("/api/v1/workspaces/ws.a/rules", headers=ALICE).status_code == 422
    assert client.get("/api/v1/workspaces/-ws/role", headers=ALICE).status_code == 422


def test_workspace_rules(client):
    response = client.get("/api/v1/workspaces/ws-b/rules", headers=ALICE)

    assert response.json() == [
        {"name": "members", "actions": ["view"]},
        {"name": "projects", "actions": ["view"]},
    ]


def test_workspace_role(client):
    response = client.get("/api/v1/workspaces/ws-a/role", headers=ALICE)
    assert response.json() == {"workspace": "ws-a", "role": "workspace-admin"}

    response = client.get("/api/v1/workspaces/ws-c/role", headers=ALICE)
    assert response.json() == {"workspace": "ws-c", "role": None}


def test_rules_mapping_uses_wire_names(client, catalog):
    response = client.get("/api/v1/rulesmapping/roles")

    assert response.status_code == 200
    body = response.json()
    assert [c["name"] for c in body] == [c.name for c in catalog.namespace_categories]
    assert "apiGroups" in body[0]["actions"][0]["rules"][0]

    workspace = client.get("/api/v1/rulesmapping/workspaceroles").json()
    assert [c["name"] for c in workspace] == [c.name for c in catalog.workspace_categories]


def test_unknown_rules_mapping(client):
    response = client.get("/api/v1/rulesmapping/everything")

    assert response.status_code == 404
    assert response.json()["detail"]["error"] == "NOT_FOUND"


def test_store_unavailable(broken_client):
    response = broken_client.get("/api/v1/namespaces/demo/rules", headers=ALICE)

    assert response.status_code == 500
    assert response.json()["detail"]["error"] == "STORE_UNAVAILABLE"


def test_health(client, broken_client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert broken_client.get("/health").status_code == 503


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "abc123"})

    assert response.headers["X-Request-ID"] == "abc123"
    assert len(client.get("/health").headers["X-Request-ID"]) == 12
