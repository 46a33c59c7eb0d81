"""Discovery and catalog data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class APIResource:
    """One resource entry from an API server resource list."""

    name: str
    kind: str
    namespaced: bool = False
    verbs: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class APIResourceList:
    """Resources served under one group/version string (e.g. ``apps/v1``)."""

    group_version: str
    resources: tuple[APIResource, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Kind:
    """An importable resource type.

    ``name`` is the kind as reported by the API server (``ConfigMap``), not
    the schema provider's normalized spelling.
    """

    group: str
    version: str
    name: str
    namespaced: bool

    @property
    def api_version(self) -> str:
        """Return the ``apiVersion`` string for manifests of this kind."""
        return f"{self.group}/{self.version}" if self.group else self.version


# Keyed by plural resource name (``configmaps``)
Catalog = dict[str, Kind]


@dataclass(frozen=True)
class KindService:
    """A catalog Kind selected for extraction by the import pipeline."""

    service_name: str
    kind: Kind
    provider_name: str
    verbose: bool = False
