# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow",
    )

    # Logging
    log_level: str = "INFO"
    # Log every Kubernetes API request made through httpx
    http_debug_logs: bool = False

    # Capability catalog override documents (optional; defaults are built in)
    rules_config_path: str = "/etc/console/rules/rules.json"
    cluster_rules_config_path: str = "/etc/console/rules/clusterrules.json"
    workspace_rules_config_path: str = "/etc/console/rules/workspacerules.json"

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 8080

    # Where bindings and roles are read from
    store_backend: Literal["kubernetes", "snapshot"] = "kubernetes"

    # Kubernetes API (in-cluster defaults)
    kube_api_url: str = "https://kubernetes.default.svc"
    kube_token: str = ""
    kube_token_path: str = "/var/run/secrets/kubernetes.io/serviceaccount/token"
    kube_timeout_seconds: float = 10.0

    # Skip TLS certificate verification (for self-signed certificates)
    tls_insecure_skip_verify: bool = False

    # JSON file of RBAC objects, used when store_backend is "snapshot"
    snapshot_path: str = ""

    # Header set by the gateway with the authenticated user name
    username_header: str = "X-Token-Username"


settings = Settings()
