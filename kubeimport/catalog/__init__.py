"""Resource catalog for kubeimport.

Submodules:
    discovery -- httpx client for the API server discovery endpoints.
    schema    -- schema providers and kind-name normalizers.
    builder   -- ResourceCatalogBuilder: discovery x schema intersection.
"""

from kubeimport.catalog.builder import ResourceCatalogBuilder, build_catalog, select_kinds
from kubeimport.catalog.discovery import DiscoveryClient, parse_group_version
from kubeimport.catalog.schema import (
    ProviderSchema,
    SchemaProvider,
    SchemaSession,
    StaticSchemaProvider,
    TerraformSchemaProvider,
    terraform_resource_name,
)

__all__ = [
    "DiscoveryClient",
    "ProviderSchema",
    "ResourceCatalogBuilder",
    "SchemaProvider",
    "SchemaSession",
    "StaticSchemaProvider",
    "TerraformSchemaProvider",
    "build_catalog",
    "parse_group_version",
    "select_kinds",
    "terraform_resource_name",
]
