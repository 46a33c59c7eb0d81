"""Kubernetes provider facade consumed by the import pipeline."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog

from kubeimport.catalog.builder import ResourceCatalogBuilder
from kubeimport.catalog.schema import SchemaProvider, TerraformSchemaProvider
from kubeimport.errors import KubeImportError, UnsupportedService
from kubeimport.models.config import GlobalOptions, KubeImportConfig
from kubeimport.models.kinds import Catalog, KindService
from kubeimport.resolver import resolve_client_configuration

_log = structlog.get_logger(component="provider")


class KubernetesProvider:
    """Exposes the cluster's importable kinds as services.

    Args:
        options:         kubectl global options captured at startup.
        config:          Application configuration.
        schema_provider: Overrides the Terraform schema provider built from
                         ``config.provider``.
    """

    name = "kubernetes"

    def __init__(
        self,
        options: GlobalOptions,
        config: KubeImportConfig | None = None,
        schema_provider: SchemaProvider | None = None,
    ) -> None:
        self._options = options
        self._config = config or KubeImportConfig()
        self.verbose = self._config.verbose
        if schema_provider is None:
            provider_cfg = self._config.provider
            schema_provider = TerraformSchemaProvider(
                source=provider_cfg.source,
                terraform_bin=provider_cfg.terraform_bin,
                working_dir=provider_cfg.terraform_dir,
                schema_file=provider_cfg.schema_file,
            )
        self._builder = ResourceCatalogBuilder(schema_provider)
        self.service: KindService | None = None

    def init(self, args: Sequence[str]) -> None:
        """Apply positional provider arguments; ``args[0]`` is the verbose flag."""
        if args:
            self.verbose = args[0] == "true"

    async def get_supported_services(self) -> Catalog:
        """Return the catalog for the configured cluster.

        Configuration failures are logged and yield an empty catalog.
        """
        try:
            client_config = await resolve_client_configuration(self._options)
        except KubeImportError as exc:
            _log.warning("client_config_unavailable", error=str(exc))
            return {}
        return await self._builder.build(client_config, verbose=self.verbose)

    async def init_service(self, service_name: str, verbose: bool = False) -> KindService:
        """Select *service_name* from the catalog for extraction.

        Raises:
            UnsupportedService: *service_name* is not in the catalog.
        """
        catalog = await self.get_supported_services()
        kind = catalog.get(service_name)
        if kind is None:
            raise UnsupportedService(self.name, service_name)
        self.service = KindService(
            service_name=service_name,
            kind=kind,
            provider_name=self.name,
            verbose=verbose,
        )
        return self.service

    def get_provider_data(self) -> dict[str, Any]:
        """Return the provider block for generated configuration."""
        return {
            "provider": {
                self.name: {
                    "version": self._config.provider.version,
                },
            },
        }

    def get_resource_connections(self) -> dict[str, dict[str, list[str]]]:
        return {}
