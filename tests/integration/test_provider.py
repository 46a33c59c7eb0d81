"""Integration tests for KubernetesProvider: kubeconfig -> discovery -> catalog."""

from __future__ import annotations

from pathlib import Path

import pytest

from kubeimport.catalog.discovery import DiscoveryClient
from kubeimport.catalog.schema import StaticSchemaProvider
from kubeimport.errors import UnsupportedService
from kubeimport.models.config import GlobalOptions, KubeImportConfig, ProviderConfig
from kubeimport.models.kinds import Kind
from kubeimport.provider import KubernetesProvider
from tests.conftest import make_discovery_client

pytestmark = pytest.mark.integration

_SCHEMA = StaticSchemaProvider(
    "kubernetes",
    {"kubernetes_pod": {}, "kubernetes_config_map": {}, "kubernetes_deployment": {}},
)


@pytest.fixture(autouse=True)
def _fake_discovery(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(DiscoveryClient, "from_configuration", lambda config: make_discovery_client())


def _provider(kubeconfig_path: Path, **kwargs: object) -> KubernetesProvider:
    options = GlobalOptions(kubeconfig_file=str(kubeconfig_path), platform="linux")
    return KubernetesProvider(options, schema_provider=_SCHEMA, **kwargs)  # type: ignore[arg-type]


class TestSupportedServices:
    async def test_catalog_from_kubeconfig(self, kubeconfig_path: Path) -> None:
        catalog = await _provider(kubeconfig_path).get_supported_services()
        assert set(catalog) == {"pods", "configmaps", "deployments"}
        assert catalog["configmaps"] == Kind("", "v1", "ConfigMap", True)

    async def test_config_failure_yields_empty(self) -> None:
        provider = KubernetesProvider(GlobalOptions(platform="linux"), schema_provider=_SCHEMA)
        assert await provider.get_supported_services() == {}


class TestInitService:
    async def test_binds_kind(self, kubeconfig_path: Path) -> None:
        provider = _provider(kubeconfig_path)
        service = await provider.init_service("deployments", verbose=True)
        assert service.kind == Kind("apps", "v1", "Deployment", True)
        assert service.provider_name == "kubernetes"
        assert service.verbose is True
        assert provider.service is service

    async def test_unknown_service(self, kubeconfig_path: Path) -> None:
        with pytest.raises(UnsupportedService, match="kubernetes: widgets not supported resource"):
            await _provider(kubeconfig_path).init_service("widgets")


class TestProviderMetadata:
    def test_init_sets_verbose(self, kubeconfig_path: Path) -> None:
        provider = _provider(kubeconfig_path)
        provider.init(["true"])
        assert provider.verbose is True
        provider.init(["false"])
        assert provider.verbose is False

    def test_provider_data(self, kubeconfig_path: Path) -> None:
        config = KubeImportConfig(provider=ProviderConfig(version="2.31.0"))
        provider = _provider(kubeconfig_path, config=config)
        assert provider.get_provider_data() == {"provider": {"kubernetes": {"version": "2.31.0"}}}
        assert provider.get_resource_connections() == {}
