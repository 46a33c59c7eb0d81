"""Materialized client configuration for the cluster control-plane API."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

_MASK = "********"


@dataclass(frozen=True)
class ClientConfiguration:
    """Everything needed to open a connection to one API server.

    Built once per invocation by the resolver and never mutated afterwards;
    overrides produce a new value via ``dataclasses.replace``.
    """

    host: str
    ca_file: str | None = None
    cert_file: str | None = None
    key_file: str | None = None
    verify_ssl: bool = True
    server_name: str | None = None
    bearer_token: str | None = None
    username: str | None = None
    password: str | None = None
    impersonate_user: str | None = None
    impersonate_groups: tuple[str, ...] = field(default_factory=tuple)
    timeout: timedelta | None = None
    namespace: str = "default"
    context: str | None = None

    def redacted(self) -> dict[str, object]:
        """Return a JSON-friendly view with credential values masked."""
        return {
            "host": self.host,
            "context": self.context,
            "namespace": self.namespace,
            "ca_file": self.ca_file,
            "cert_file": self.cert_file,
            "key_file": self.key_file,
            "verify_ssl": self.verify_ssl,
            "server_name": self.server_name,
            "bearer_token": _MASK if self.bearer_token else None,
            "username": self.username,
            "password": _MASK if self.password else None,
            "impersonate_user": self.impersonate_user,
            "impersonate_groups": list(self.impersonate_groups),
            "timeout_seconds": self.timeout.total_seconds() if self.timeout is not None else None,
        }
