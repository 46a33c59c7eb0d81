"""Global option overlay for a materialized client configuration.

Each supplied option replaces the corresponding field outright; list-valued
fields are never merged.
"""

from __future__ import annotations

import json
import re
from dataclasses import replace
from datetime import timedelta
from decimal import Decimal, InvalidOperation

import structlog

from kubeimport.errors import InvalidOverride
from kubeimport.models.client import ClientConfiguration
from kubeimport.models.config import GlobalOptions

_log = structlog.get_logger(component="resolver.overlay")

_UNIT_NANOS: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

# time.Duration is an int64 nanosecond count
_MAX_NANOS = 2**63 - 1

_COMPONENT = r"(?:\d+\.?\d*|\.\d+)(?:ns|us|µs|μs|ms|s|m|h)"
_DURATION_RE = re.compile(rf"[-+]?(?:{_COMPONENT})+")
_COMPONENT_RE = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(value: str) -> timedelta:
    """Parse a kubectl duration string such as ``10s``, ``1m30s`` or ``1.5h``.

    Raises:
        ValueError: *value* does not match the duration grammar.
    """
    if value in ("0", "+0", "-0"):
        return timedelta(0)
    if not _DURATION_RE.fullmatch(value):
        raise ValueError(f"time: invalid duration {value!r}")

    total = Decimal(0)
    for number, unit in _COMPONENT_RE.findall(value):
        try:
            total += Decimal(number) * _UNIT_NANOS[unit]
        except InvalidOperation as exc:
            raise ValueError(f"time: invalid duration {value!r}") from exc

    if total > _MAX_NANOS:
        raise ValueError(f"time: invalid duration {value!r}")

    micros = int(total / 1000)
    if value.startswith("-"):
        micros = -micros
    try:
        return timedelta(microseconds=micros)
    except OverflowError as exc:
        raise ValueError(f"time: invalid duration {value!r}") from exc


def _parse_groups(value: str) -> tuple[str, ...]:
    groups = json.loads(value)
    if not isinstance(groups, list) or not all(isinstance(g, str) for g in groups):
        raise ValueError(f"expected a JSON array of strings, got {value!r}")
    return tuple(groups)


def apply_global_options_to_config(
    config: ClientConfiguration,
    options: GlobalOptions,
) -> ClientConfiguration:
    """Return a copy of *config* with every supplied global option applied.

    ``--cluster`` and ``--user`` are accepted but have no effect.

    Raises:
        InvalidOverride: ``--as-group`` is not a JSON string array, or
            ``--request-timeout`` is not a valid non-negative duration.
    """
    changes: dict[str, object] = {}

    # impersonation
    if options.impersonate_user:
        changes["impersonate_user"] = options.impersonate_user

    if options.impersonate_groups:
        try:
            groups = _parse_groups(options.impersonate_groups)
        except ValueError as exc:
            raise InvalidOverride("--as-group", exc) from exc
        if groups:
            changes["impersonate_groups"] = groups

    # tls
    if options.certificate_authority:
        changes["ca_file"] = options.certificate_authority
    if options.client_certificate:
        changes["cert_file"] = options.client_certificate
    if options.client_key:
        changes["key_file"] = options.client_key

    # TODO: apply --cluster and --user by re-selecting the kubeconfig entries
    if options.cluster:
        _log.debug("global_option_ignored", option="--cluster")
    if options.user:
        _log.debug("global_option_ignored", option="--user")

    # request
    if options.request_timeout:
        try:
            timeout = parse_duration(options.request_timeout)
        except ValueError as exc:
            raise InvalidOverride("--request-timeout", exc) from exc
        if timeout < timedelta(0):
            raise InvalidOverride(
                "--request-timeout",
                ValueError(f"timeout must be non-negative, got {options.request_timeout!r}"),
            )
        changes["timeout"] = timeout

    if options.server:
        changes["server_name"] = options.server
    if options.token:
        changes["bearer_token"] = options.token
    if options.username:
        changes["username"] = options.username
    if options.password:
        changes["password"] = options.password

    if not changes:
        return config
    return replace(config, **changes)
