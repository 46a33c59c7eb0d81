"""Shared fixtures for kubeimport tests.

Provides kubeconfig documents on disk, client configurations and an httpx
mock transport serving a small discovery tree, so tests never touch a real
cluster or Terraform.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx
import pytest
import yaml

from kubeimport.catalog.discovery import DiscoveryClient
from kubeimport.models.client import ClientConfiguration

# ---------------------------------------------------------------------------
# Kubeconfig documents
# ---------------------------------------------------------------------------


def make_kubeconfig(
    server: str = "https://k8s.example.test:6443",
    token: str = "dev-token",
    namespace: str | None = None,
) -> dict[str, Any]:
    """Return a two-context kubeconfig document."""
    dev_context: dict[str, Any] = {"cluster": "dev", "user": "dev-user"}
    if namespace:
        dev_context["namespace"] = namespace
    return {
        "apiVersion": "v1",
        "kind": "Config",
        "current-context": "dev",
        "clusters": [
            {"name": "dev", "cluster": {"server": server, "insecure-skip-tls-verify": True}},
            {
                "name": "prod",
                "cluster": {
                    "server": "https://prod.example.test:6443",
                    "insecure-skip-tls-verify": True,
                    "tls-server-name": "api.prod.internal",
                },
            },
        ],
        "users": [
            {"name": "dev-user", "user": {"token": token}},
            {
                "name": "prod-user",
                "user": {
                    "username": "admin",
                    "password": "s3cret",
                    "as": "auditor",
                    "as-groups": ["viewers"],
                },
            },
        ],
        "contexts": [
            {"name": "dev", "context": dev_context},
            {"name": "prod", "context": {"cluster": "prod", "user": "prod-user", "namespace": "ops"}},
        ],
    }


@pytest.fixture
def kubeconfig_path(tmp_path: Path) -> Path:
    path = tmp_path / "config"
    path.write_text(yaml.safe_dump(make_kubeconfig()), encoding="utf-8")
    return path


@pytest.fixture
def client_config() -> ClientConfiguration:
    return ClientConfiguration(host="https://k8s.example.test:6443", bearer_token="dev-token")


# ---------------------------------------------------------------------------
# Discovery API
# ---------------------------------------------------------------------------

CORE_V1 = {
    "kind": "APIResourceList",
    "groupVersion": "v1",
    "resources": [
        {"name": "configmaps", "kind": "ConfigMap", "namespaced": True,
         "verbs": ["create", "delete", "get", "list", "patch", "update", "watch"]},
        {"name": "namespaces", "kind": "Namespace", "namespaced": False,
         "verbs": ["create", "delete", "get", "list", "patch", "update", "watch"]},
        {"name": "pods", "kind": "Pod", "namespaced": True,
         "verbs": ["create", "delete", "get", "list", "patch", "update", "watch"]},
        {"name": "pods/log", "kind": "Pod", "namespaced": True, "verbs": ["get"]},
        {"name": "bindings", "kind": "Binding", "namespaced": True, "verbs": ["create"]},
        {"name": "componentstatuses", "kind": "ComponentStatus", "namespaced": False,
         "verbs": ["get"]},
    ],
}

APPS_V1 = {
    "kind": "APIResourceList",
    "groupVersion": "apps/v1",
    "resources": [
        {"name": "deployments", "kind": "Deployment", "namespaced": True,
         "verbs": ["create", "delete", "get", "list", "patch", "update", "watch"]},
        {"name": "deployments/scale", "kind": "Scale", "namespaced": True,
         "verbs": ["get", "patch", "update"]},
        {"name": "controllerrevisions", "kind": "ControllerRevision", "namespaced": True,
         "verbs": ["get", "list"]},
    ],
}

RBAC_V1 = {
    "kind": "APIResourceList",
    "groupVersion": "rbac.authorization.k8s.io/v1",
    "resources": [
        {"name": "clusterroles", "kind": "ClusterRole", "namespaced": False,
         "verbs": ["get", "list"]},
    ],
}

API_GROUPS = {
    "kind": "APIGroupList",
    "groups": [
        {
            "name": "apps",
            "versions": [{"groupVersion": "apps/v1", "version": "v1"}],
            "preferredVersion": {"groupVersion": "apps/v1", "version": "v1"},
        },
        {
            "name": "rbac.authorization.k8s.io",
            "versions": [
                {"groupVersion": "rbac.authorization.k8s.io/v1", "version": "v1"},
                {"groupVersion": "rbac.authorization.k8s.io/v1beta1", "version": "v1beta1"},
            ],
            "preferredVersion": {"groupVersion": "rbac.authorization.k8s.io/v1", "version": "v1"},
        },
    ],
}

DISCOVERY_DOCUMENTS: dict[str, dict[str, Any]] = {
    "/api": {"kind": "APIVersions", "versions": ["v1"]},
    "/apis": API_GROUPS,
    "/api/v1": CORE_V1,
    "/apis/apps/v1": APPS_V1,
    "/apis/rbac.authorization.k8s.io/v1": RBAC_V1,
}


def discovery_transport(
    documents: dict[str, dict[str, Any]] | None = None,
    seen: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """Serve *documents* by path; unknown paths return 404."""
    docs = DISCOVERY_DOCUMENTS if documents is None else documents

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        body = docs.get(request.url.path)
        if body is None:
            return httpx.Response(404, json={"kind": "Status", "code": 404})
        return httpx.Response(200, content=json.dumps(body).encode())

    return httpx.MockTransport(handler)


def make_discovery_client(
    documents: dict[str, dict[str, Any]] | None = None,
    seen: list[httpx.Request] | None = None,
) -> DiscoveryClient:
    http = httpx.AsyncClient(
        base_url="https://k8s.example.test:6443",
        transport=discovery_transport(documents, seen),
    )
    return DiscoveryClient(http)
