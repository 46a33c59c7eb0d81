"""Client configuration resolution.

Order: resolve location -> load credentials -> apply namespace/context
overrides -> materialize -> apply global option overlay.

Submodules:
    location -- kubeconfig path precedence and home directory lookup.
    loader   -- kubeconfig parsing and materialization via kubernetes-asyncio.
    overlay  -- kubectl global flag overlay and duration parsing.
"""

from __future__ import annotations

from kubeimport.models.client import ClientConfiguration
from kubeimport.models.config import GlobalOptions
from kubeimport.resolver.loader import build_client_config, load_credentials, materialize
from kubeimport.resolver.location import resolve_kubeconfig_path
from kubeimport.resolver.overlay import apply_global_options_to_config


async def resolve_client_configuration(options: GlobalOptions) -> ClientConfiguration:
    """Build the final client configuration from *options*.

    Raises:
        ConfigurationMissing, ConfigurationInvalid, CredentialsRejected,
        InvalidOverride
    """
    path = resolve_kubeconfig_path(options)
    raw = load_credentials(path)
    source = build_client_config(path, raw, options)
    config = await materialize(source)
    return apply_global_options_to_config(config, options)


__all__ = [
    "apply_global_options_to_config",
    "resolve_client_configuration",
    "resolve_kubeconfig_path",
]
