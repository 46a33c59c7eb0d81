"""Kubeconfig loading and materialization.

``load_credentials`` parses the raw file, ``build_client_config`` attaches the
namespace/context overrides, and ``materialize`` runs the kubernetes-asyncio
kubeconfig loader to produce a concrete ``ClientConfiguration``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import structlog
import yaml
from kubernetes_asyncio.client import Configuration  # type: ignore[import-untyped]
from kubernetes_asyncio.config import ConfigException  # type: ignore[import-untyped]
from kubernetes_asyncio.config.kube_config import KubeConfigLoader  # type: ignore[import-untyped]

from kubeimport.errors import ConfigurationInvalid, CredentialsRejected
from kubeimport.models.client import ClientConfiguration
from kubeimport.models.config import GlobalOptions
from kubeimport.resolver.location import default_loading_rules

_log = structlog.get_logger(component="resolver.loader")

_DEFAULT_NAMESPACE = "default"


@dataclass(frozen=True)
class ConfigOverrides:
    """Overrides applied on top of the kubeconfig contents before materialization."""

    namespace: str = ""
    context: str = ""


@dataclass(frozen=True)
class ClientConfigSource:
    """A loaded but not yet materialized client configuration.

    ``loading_rules`` is only populated when an explicit context was
    requested; it records the default kubeconfig chain consulted for
    context-name resolution. It is informational: materialization always
    reads *raw*, and the chain is only reported in the debug log.
    """

    path: str
    raw: Mapping[str, Any]
    overrides: ConfigOverrides
    loading_rules: tuple[str, ...] = ()

    @property
    def non_interactive(self) -> bool:
        return bool(self.overrides.context)


def load_credentials(path: str) -> dict[str, Any]:
    """Read and parse the kubeconfig at *path*.

    Raises:
        ConfigurationInvalid: unreadable file, malformed YAML, or a document
            that is not a mapping.
    """
    try:
        with open(path, encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationInvalid(path, exc) from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationInvalid(
            path, ValueError(f"expected a mapping, got {type(raw).__name__}")
        )
    return raw


def build_client_config(
    path: str,
    raw: Mapping[str, Any],
    options: GlobalOptions,
) -> ClientConfigSource:
    """Attach namespace/context overrides to the parsed credentials."""
    overrides = ConfigOverrides(namespace=options.namespace, context=options.context)
    if overrides.context:
        return ClientConfigSource(
            path=path,
            raw=raw,
            overrides=overrides,
            loading_rules=default_loading_rules(options),
        )
    return ClientConfigSource(path=path, raw=raw, overrides=overrides)


def _named_entry(raw: Mapping[str, Any], section: str, name: str | None) -> Mapping[str, Any]:
    """Return the inner mapping of the named entry in a kubeconfig list section."""
    if not name:
        return {}
    for entry in raw.get(section) or []:
        if isinstance(entry, Mapping) and entry.get("name") == name:
            inner = entry.get(section[:-1]) or {}
            return inner if isinstance(inner, Mapping) else {}
    return {}


def _bearer_token(k8s_config: Any) -> str | None:
    """Extract a bearer token from a kubernetes-asyncio Configuration, if any."""
    for key in ("authorization", "BearerToken"):
        value = k8s_config.api_key.get(key)
        if not value:
            continue
        prefix = k8s_config.api_key_prefix.get(key, "")
        token = f"{prefix} {value}".strip() if prefix else str(value)
        if token.startswith("Bearer "):
            return token[len("Bearer "):]
        if token.startswith("Basic "):
            return None
        return token
    return None


async def materialize(source: ClientConfigSource) -> ClientConfiguration:
    """Convert *source* into a concrete ``ClientConfiguration``.

    Raises:
        CredentialsRejected: the selected context, cluster or user is missing
            or incomplete, or an auth plugin fails.
    """
    active_context = source.overrides.context or source.raw.get("current-context") or None
    base_path = os.path.dirname(os.path.abspath(source.path))
    k8s_config = Configuration()
    try:
        loader = KubeConfigLoader(
            config_dict=dict(source.raw),
            active_context=active_context,
            config_base_path=base_path,
        )
        await loader.load_and_set(k8s_config)
    except (ConfigException, ValueError, OSError) as exc:
        raise CredentialsRejected(source.path, exc) from exc

    context = _named_entry(source.raw, "contexts", active_context)
    cluster = _named_entry(source.raw, "clusters", context.get("cluster"))
    user = _named_entry(source.raw, "users", context.get("user"))

    groups = user.get("as-groups") or []
    namespace = source.overrides.namespace or context.get("namespace") or _DEFAULT_NAMESPACE

    config = ClientConfiguration(
        host=k8s_config.host,
        ca_file=k8s_config.ssl_ca_cert or None,
        cert_file=k8s_config.cert_file or None,
        key_file=k8s_config.key_file or None,
        verify_ssl=bool(k8s_config.verify_ssl),
        server_name=cluster.get("tls-server-name") or None,
        bearer_token=_bearer_token(k8s_config),
        username=user.get("username") or None,
        password=user.get("password") or None,
        impersonate_user=user.get("as") or None,
        impersonate_groups=tuple(str(g) for g in groups),
        namespace=str(namespace),
        context=active_context,
    )
    _log.debug(
        "client_config_materialized",
        path=source.path,
        context=active_context,
        host=config.host,
        non_interactive=source.non_interactive,
        loading_rules=list(source.loading_rules),
    )
    return config
