"""Exception hierarchy for kubeimport.

Configuration errors (``ConfigurationMissing``, ``ConfigurationInvalid``,
``CredentialsRejected``, ``InvalidOverride``) are fatal and surface to the
caller.  Catalog errors (``DiscoveryUnavailable``, ``SchemaUnavailable``,
``UnsupportedGroupVersion``) are raised by the collaborators and absorbed by
the catalog builder.
"""

from __future__ import annotations


class KubeImportError(Exception):
    """Base class for every error raised by kubeimport."""


class ConfigurationMissing(KubeImportError):
    """No kubeconfig location could be resolved from any source."""

    def __init__(self) -> None:
        super().__init__(
            "error initializing config. The KUBECONFIG environment variable must be defined."
        )


class ConfigurationInvalid(KubeImportError):
    """The kubeconfig file exists but could not be loaded."""

    def __init__(self, path: str, cause: Exception) -> None:
        super().__init__(f"the provided credentials {path!r} could not be loaded: {cause}")
        self.path = path
        self.cause = cause


class CredentialsRejected(KubeImportError):
    """The kubeconfig loaded but did not yield a usable client configuration."""

    def __init__(self, path: str, cause: Exception) -> None:
        super().__init__(f"the provided credentials {path!r} could not be used: {cause}")
        self.path = path
        self.cause = cause


class InvalidOverride(KubeImportError):
    """A global option override carried a malformed value."""

    def __init__(self, option: str, cause: Exception) -> None:
        super().__init__(f"error parsing global option {option!r}: {cause}")
        self.option = option
        self.cause = cause


class DiscoveryUnavailable(KubeImportError):
    """The API server discovery endpoints could not be reached or read."""

    def __init__(self, cause: Exception) -> None:
        super().__init__(f"discovery unavailable: {cause}")
        self.cause = cause


class SchemaUnavailable(KubeImportError):
    """The schema provider session could not be opened or queried."""

    def __init__(self, provider: str, cause: Exception) -> None:
        super().__init__(f"schema provider {provider!r} unavailable: {cause}")
        self.provider = provider
        self.cause = cause


class UnsupportedGroupVersion(KubeImportError):
    """A group/version string reported by the server could not be parsed."""

    def __init__(self, group_version: str) -> None:
        super().__init__(f"unexpected GroupVersion string: {group_version!r}")
        self.group_version = group_version


class UnsupportedService(KubeImportError):
    """A service name was requested that is not in the resource catalog."""

    def __init__(self, provider: str, service: str) -> None:
        super().__init__(f"{provider}: {service} not supported resource")
        self.provider = provider
        self.service = service
