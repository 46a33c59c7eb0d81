"""Core data structures for kubeimport."""

from kubeimport.models.client import ClientConfiguration
from kubeimport.models.config import GlobalOptions, KubeImportConfig
from kubeimport.models.kinds import (
    APIResource,
    APIResourceList,
    Catalog,
    Kind,
    KindService,
)

__all__ = [
    "APIResource",
    "APIResourceList",
    "Catalog",
    "ClientConfiguration",
    "GlobalOptions",
    "Kind",
    "KindService",
    "KubeImportConfig",
]
