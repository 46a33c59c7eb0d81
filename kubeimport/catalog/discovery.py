"""API server discovery over httpx.

Reads ``/api`` and ``/apis`` and then each group's preferred version to
produce the server-preferred resource lists.
"""

from __future__ import annotations

import ssl
from typing import Any

import httpx
import structlog

from kubeimport.errors import DiscoveryUnavailable, UnsupportedGroupVersion
from kubeimport.models.client import ClientConfiguration
from kubeimport.models.kinds import APIResource, APIResourceList

_log = structlog.get_logger(component="catalog.discovery")


def parse_group_version(group_version: str) -> tuple[str, str]:
    """Split ``group/version`` into its parts.

    ``"v1"`` is the legacy core group and yields ``("", "v1")``.

    Raises:
        UnsupportedGroupVersion: more than one ``/`` in *group_version*.
    """
    if not group_version:
        return "", ""
    parts = group_version.split("/")
    if len(parts) == 1:
        return "", parts[0]
    if len(parts) == 2:
        return parts[0], parts[1]
    raise UnsupportedGroupVersion(group_version)


def _ssl_context(config: ClientConfiguration) -> ssl.SSLContext | bool:
    if not config.verify_ssl:
        if config.cert_file:
            ctx = ssl.create_default_context()
            ctx.check_hostname = False
            ctx.verify_mode = ssl.CERT_NONE
            ctx.load_cert_chain(config.cert_file, config.key_file)
            return ctx
        return False
    ctx = ssl.create_default_context(cafile=config.ca_file)
    if config.cert_file:
        ctx.load_cert_chain(config.cert_file, config.key_file)
    return ctx


def _headers(config: ClientConfiguration) -> list[tuple[str, str]]:
    headers = [("Accept", "application/json")]
    if config.bearer_token:
        headers.append(("Authorization", f"Bearer {config.bearer_token}"))
    if config.impersonate_user:
        headers.append(("Impersonate-User", config.impersonate_user))
    # Impersonate-Group repeats once per group
    headers.extend(("Impersonate-Group", group) for group in config.impersonate_groups)
    return headers


def _entries(payload: dict[str, Any], key: str, where: str) -> list[dict[str, Any]]:
    """Return the list under *key*, requiring every element to be an object."""
    entries = payload.get(key) or []
    if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
        raise DiscoveryUnavailable(ValueError(f"{where}: malformed {key!r} list"))
    return entries


def _resource_list(payload: dict[str, Any], group_version: str) -> APIResourceList:
    resources = []
    for entry in _entries(payload, "resources", group_version):
        name = entry.get("name", "")
        if not isinstance(name, str):
            raise DiscoveryUnavailable(ValueError(f"{group_version}: resource name is not a string"))
        # subresources such as pods/log are not standalone types
        if "/" in name:
            continue
        resources.append(
            APIResource(
                name=name,
                kind=entry.get("kind", ""),
                namespaced=bool(entry.get("namespaced", False)),
                verbs=frozenset(entry.get("verbs") or ()),
            )
        )
    return APIResourceList(
        group_version=payload.get("groupVersion") or group_version,
        resources=tuple(resources),
    )


class DiscoveryClient:
    """Reads resource discovery documents from one API server.

    Args:
        http:        An ``httpx.AsyncClient`` whose base URL is the API server.
        server_name: Optional TLS SNI override sent with every request.
    """

    def __init__(self, http: httpx.AsyncClient, server_name: str | None = None) -> None:
        self._http = http
        self._server_name = server_name

    @classmethod
    def from_configuration(cls, config: ClientConfiguration) -> DiscoveryClient:
        """Open a discovery client for *config*.

        Raises:
            DiscoveryUnavailable: the TLS material cannot be loaded or the
                server URL is unusable.
        """
        timeout = config.timeout.total_seconds() if config.timeout else None
        auth: httpx.Auth | None = None
        if config.username and config.password and not config.bearer_token:
            auth = httpx.BasicAuth(config.username, config.password)
        try:
            http = httpx.AsyncClient(
                base_url=config.host,
                verify=_ssl_context(config),
                headers=_headers(config),
                auth=auth,
                timeout=httpx.Timeout(timeout),
            )
        except (OSError, ssl.SSLError, ValueError, httpx.InvalidURL) as exc:
            raise DiscoveryUnavailable(exc) from exc
        return cls(http, server_name=config.server_name)

    async def close(self) -> None:
        await self._http.aclose()

    async def _get_json(self, path: str) -> dict[str, Any]:
        extensions = {"sni_hostname": self._server_name} if self._server_name else None
        try:
            response = await self._http.get(path, extensions=extensions)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise DiscoveryUnavailable(exc) from exc
        if not isinstance(payload, dict):
            raise DiscoveryUnavailable(ValueError(f"{path}: expected a JSON object"))
        return payload

    async def preferred_group_versions(self) -> list[str]:
        """Return the preferred group/version of every served API group."""
        group_versions: list[str] = []

        legacy = await self._get_json("/api")
        versions = legacy.get("versions") or []
        if not isinstance(versions, list) or not all(isinstance(v, str) for v in versions):
            raise DiscoveryUnavailable(ValueError("/api: malformed 'versions' list"))
        if versions:
            group_versions.append(versions[0])

        groups = await self._get_json("/apis")
        for group in _entries(groups, "groups", "/apis"):
            preferred_version = group.get("preferredVersion") or {}
            if not isinstance(preferred_version, dict):
                raise DiscoveryUnavailable(ValueError("/apis: malformed preferredVersion"))
            preferred = preferred_version.get("groupVersion")
            if not preferred:
                candidates = _entries(group, "versions", "/apis")
                if not candidates:
                    continue
                preferred = candidates[0].get("groupVersion")
            if isinstance(preferred, str) and preferred:
                group_versions.append(preferred)
        return group_versions

    async def server_preferred_resources(self) -> list[APIResourceList]:
        """Return the resource list of each group's preferred version.

        Requests are issued one after another.

        Raises:
            DiscoveryUnavailable: any discovery request fails.
        """
        lists: list[APIResourceList] = []
        for group_version in await self.preferred_group_versions():
            path = f"/api/{group_version}" if "/" not in group_version else f"/apis/{group_version}"
            payload = await self._get_json(path)
            lists.append(_resource_list(payload, group_version))
        _log.debug("server_preferred_resources", group_versions=len(lists))
        return lists
