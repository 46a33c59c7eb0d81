"""Configuration loading from environment variables.

This is the only module that reads ``os.environ``.  The resolver and catalog
builder receive the resulting dataclasses explicitly.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping

from kubeimport.models.config import (
    GlobalOptions,
    KubeImportConfig,
    LogConfig,
    ProviderConfig,
)

_PLUGIN_FLAG_PREFIX = "KUBECTL_PLUGINS_GLOBAL_FLAG_"


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"KUBEIMPORT_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> KubeImportConfig:
    """Load configuration from KUBEIMPORT_* environment variables."""
    return KubeImportConfig(
        verbose=_env_bool("VERBOSE", False),
        provider=ProviderConfig(
            source=_env("PROVIDER_SOURCE", "registry.terraform.io/hashicorp/kubernetes"),
            version=_env("PROVIDER_VERSION", ""),
            terraform_bin=_env("TERRAFORM_BIN", "terraform"),
            terraform_dir=_env("TERRAFORM_DIR", "."),
            schema_file=_env("SCHEMA_FILE", ""),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
        ),
    )


def load_global_options(
    environ: Mapping[str, str] | None = None,
    platform: str | None = None,
) -> GlobalOptions:
    """Capture kubectl plugin global flags and home directory hints.

    Args:
        environ:  Source mapping; defaults to ``os.environ``.
        platform: Platform name as in ``sys.platform``; defaults to the
                  running interpreter's.
    """
    env = os.environ if environ is None else environ

    def flag(name: str) -> str:
        return env.get(_PLUGIN_FLAG_PREFIX + name, "")

    return GlobalOptions(
        config_file=flag("CONFIG"),
        kubeconfig_file=flag("KUBECONFIG"),
        kubeconfig_env=env.get("KUBECONFIG", ""),
        namespace=flag("NAMESPACE"),
        context=flag("CONTEXT"),
        impersonate_user=flag("AS"),
        impersonate_groups=flag("AS_GROUP"),
        certificate_authority=flag("CERTIFICATE_AUTHORITY"),
        client_certificate=flag("CLIENT_CERTIFICATE"),
        client_key=flag("CLIENT_KEY"),
        cluster=flag("CLUSTER"),
        user=flag("USER"),
        request_timeout=flag("REQUEST_TIMEOUT"),
        server=flag("SERVER"),
        token=flag("TOKEN"),
        username=flag("USERNAME"),
        password=flag("PASSWORD"),
        home=env.get("HOME", ""),
        home_drive=env.get("HOMEDRIVE", ""),
        home_path=env.get("HOMEPATH", ""),
        user_profile=env.get("USERPROFILE", ""),
        platform=sys.platform if platform is None else platform,
    )
