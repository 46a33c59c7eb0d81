"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GlobalOptions:
    """kubectl global flags and location hints, captured once per process.

    Every field is optional; an empty string means "not supplied".
    ``cluster`` and ``user`` are accepted but not applied to the client
    configuration.
    """

    config_file: str = ""
    kubeconfig_file: str = ""
    kubeconfig_env: str = ""
    namespace: str = ""
    context: str = ""
    impersonate_user: str = ""
    impersonate_groups: str = ""
    certificate_authority: str = ""
    client_certificate: str = ""
    client_key: str = ""
    cluster: str = ""
    user: str = ""
    request_timeout: str = ""
    server: str = ""
    token: str = ""
    username: str = ""
    password: str = ""

    # Home directory resolution inputs
    home: str = ""
    home_drive: str = ""
    home_path: str = ""
    user_profile: str = ""
    platform: str = ""


@dataclass
class ProviderConfig:
    """Schema provider configuration."""

    source: str = "registry.terraform.io/hashicorp/kubernetes"
    version: str = ""
    terraform_bin: str = "terraform"
    terraform_dir: str = "."
    schema_file: str = ""


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"


@dataclass
class KubeImportConfig:
    """Top-level kubeimport configuration."""

    verbose: bool = False
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    log: LogConfig = field(default_factory=LogConfig)
