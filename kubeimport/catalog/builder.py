"""Resource catalog builder.

A resource type enters the catalog when the API server serves it with the
``list`` verb and the schema provider declares a type under the normalized
kind name.  Discovery and schema failures are logged and produce an empty
catalog rather than an error.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

import structlog

from kubeimport.catalog.discovery import DiscoveryClient, parse_group_version
from kubeimport.catalog.schema import (
    KindNormalizer,
    ProviderSchema,
    SchemaProvider,
    terraform_resource_name,
)
from kubeimport.errors import DiscoveryUnavailable, SchemaUnavailable, UnsupportedGroupVersion
from kubeimport.models.client import ClientConfiguration
from kubeimport.models.kinds import APIResourceList, Catalog, Kind

_log = structlog.get_logger(component="catalog.builder")

DiscoveryFactory = Callable[[ClientConfiguration], DiscoveryClient]


def select_kinds(
    resource_lists: Iterable[APIResourceList],
    schema: ProviderSchema,
    normalizer: KindNormalizer = terraform_resource_name,
) -> Catalog:
    """Intersect discovered resources with the provider schema."""
    catalog: Catalog = {}
    for resource_list in resource_lists:
        if not resource_list.resources:
            continue
        try:
            group, version = parse_group_version(resource_list.group_version)
        except UnsupportedGroupVersion as exc:
            _log.debug("group_version_skipped", group_version=exc.group_version)
            continue

        for resource in resource_list.resources:
            if not resource.verbs:
                continue
            if "list" not in resource.verbs:
                continue
            if not schema.declares(normalizer(resource.kind)):
                continue
            catalog[resource.name] = Kind(
                group=group,
                version=version,
                name=resource.kind,
                namespaced=resource.namespaced,
            )
    return catalog


class ResourceCatalogBuilder:
    """Builds the catalog of importable kinds for one cluster.

    Args:
        schema_provider:   Declares which resource types can be represented.
        normalizer:        Maps a kind name to the provider's type name.
        discovery_factory: Opens a discovery client for a configuration;
                           defaults to ``DiscoveryClient.from_configuration``.
    """

    def __init__(
        self,
        schema_provider: SchemaProvider,
        normalizer: KindNormalizer = terraform_resource_name,
        discovery_factory: DiscoveryFactory | None = None,
    ) -> None:
        self._schema_provider = schema_provider
        self._normalizer = normalizer
        self._discovery_factory = discovery_factory or DiscoveryClient.from_configuration

    async def build(self, config: ClientConfiguration, verbose: bool = False) -> Catalog:
        """Return the catalog for the cluster described by *config*.

        Never raises for discovery or schema failures; those yield ``{}``.
        """
        try:
            discovery = self._discovery_factory(config)
        except DiscoveryUnavailable as exc:
            _log.warning("discovery_unavailable", host=config.host, error=str(exc))
            return {}

        try:
            resource_lists = await discovery.server_preferred_resources()
        except DiscoveryUnavailable as exc:
            _log.warning("server_preferred_resources_failed", host=config.host, error=str(exc))
            return {}
        finally:
            await discovery.close()

        provider = self._schema_provider.provider_name
        try:
            session = await self._schema_provider.open_session(verbose)
        except SchemaUnavailable as exc:
            _log.warning("schema_unavailable", provider=provider, error=str(exc))
            return {}

        try:
            schema = await session.get_schema()
        except SchemaUnavailable as exc:
            _log.warning("schema_unavailable", provider=provider, error=str(exc))
            return {}
        finally:
            await session.close()

        catalog = select_kinds(resource_lists, schema, self._normalizer)
        _log.info(
            "catalog_built",
            host=config.host,
            provider=provider,
            group_versions=len(resource_lists),
            kinds=len(catalog),
        )
        return catalog


async def build_catalog(
    config: ClientConfiguration,
    schema_provider: SchemaProvider,
    verbose: bool = False,
    normalizer: KindNormalizer = terraform_resource_name,
) -> Catalog:
    """Convenience wrapper around ``ResourceCatalogBuilder.build``."""
    builder = ResourceCatalogBuilder(schema_provider, normalizer=normalizer)
    return await builder.build(config, verbose=verbose)
