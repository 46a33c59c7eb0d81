"""Kubeconfig file location resolution.

Precedence, highest first:
    1. --config global flag
    2. --kubeconfig global flag
    3. KUBECONFIG environment variable (first entry of a path list)
    4. <home>/.kube/config
"""

from __future__ import annotations

import ntpath
import posixpath
from types import ModuleType

from kubeimport.errors import ConfigurationMissing
from kubeimport.models.config import GlobalOptions


def _is_windows(options: GlobalOptions) -> bool:
    return options.platform.startswith("win")


def _path_module(options: GlobalOptions) -> ModuleType:
    return ntpath if _is_windows(options) else posixpath


def _split_path_list(value: str, options: GlobalOptions) -> list[str]:
    sep = ";" if _is_windows(options) else ":"
    return [p for p in value.split(sep) if p]


def home_directory(options: GlobalOptions) -> str:
    """Return the current user's home directory, or "" if unknown.

    On Windows the home is HOMEDRIVE + HOMEPATH, falling back to USERPROFILE
    when both are empty.
    """
    if _is_windows(options):
        home = options.home_drive + options.home_path
        if not home:
            home = options.user_profile
        return home
    return options.home


def default_kubeconfig_path(options: GlobalOptions) -> str:
    """Return ``<home>/.kube/config``, or "" when no home is known."""
    home = home_directory(options)
    if not home:
        return ""
    return _path_module(options).join(home, ".kube", "config")


def default_loading_rules(options: GlobalOptions) -> tuple[str, ...]:
    """Return the kubectl default loading chain: KUBECONFIG entries, else the home default."""
    paths = _split_path_list(options.kubeconfig_env, options)
    if paths:
        return tuple(paths)
    default = default_kubeconfig_path(options)
    return (default,) if default else ()


def resolve_kubeconfig_path(options: GlobalOptions) -> str:
    """Pick the single kubeconfig file to load for this invocation.

    Raises:
        ConfigurationMissing: no source yields a non-empty path.
    """
    if options.config_file:
        return options.config_file
    if options.kubeconfig_file:
        return options.kubeconfig_file
    env_paths = _split_path_list(options.kubeconfig_env, options)
    if env_paths:
        return env_paths[0]
    default = default_kubeconfig_path(options)
    if not default:
        raise ConfigurationMissing()
    return default
