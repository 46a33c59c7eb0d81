"""Schema providers: which resource types can be represented downstream.

A provider opens a session and returns its declared resource-type schema
once.  The catalog builder only checks names for presence; schema contents
are never inspected.
"""

from __future__ import annotations

import asyncio
import json
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from kubeimport.errors import SchemaUnavailable

_log = structlog.get_logger(component="catalog.schema")

KindNormalizer = Callable[[str], str]

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


def terraform_resource_name(kind: str) -> str:
    """Map a Kubernetes kind to the Terraform kubernetes provider's type name.

    >>> terraform_resource_name("ConfigMap")
    'kubernetes_config_map'
    >>> terraform_resource_name("APIService")
    'kubernetes_api_service'
    """
    snake = _ACRONYM_BOUNDARY.sub(r"\1_\2", kind)
    snake = _WORD_BOUNDARY.sub(r"\1_\2", snake)
    return "kubernetes_" + snake.lower()


@dataclass(frozen=True)
class ProviderSchema:
    """Resource types declared by one schema provider, keyed by normalized name."""

    provider: str
    resource_types: Mapping[str, Any] = field(default_factory=dict)

    def declares(self, type_name: str) -> bool:
        return type_name in self.resource_types


class SchemaSession(ABC):
    """An open session against a schema provider."""

    @abstractmethod
    async def get_schema(self) -> ProviderSchema:
        """Return the provider's declared resource-type schema.

        Raises:
            SchemaUnavailable: the schema could not be produced.
        """

    async def close(self) -> None:
        """Release any resources held by the session."""


class SchemaProvider(ABC):
    """Abstract base class for schema providers."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identity used in logs and error messages."""

    @abstractmethod
    async def open_session(self, verbose: bool = False) -> SchemaSession:
        """Open a session.

        Raises:
            SchemaUnavailable: the provider cannot be reached or started.
        """


class _StaticSession(SchemaSession):
    def __init__(self, schema: ProviderSchema) -> None:
        self._schema = schema

    async def get_schema(self) -> ProviderSchema:
        return self._schema


class StaticSchemaProvider(SchemaProvider):
    """Serves a fixed set of resource-type names from memory."""

    def __init__(self, provider_name: str, resource_types: Mapping[str, Any]) -> None:
        self._name = provider_name
        self._schema = ProviderSchema(provider=provider_name, resource_types=dict(resource_types))

    @property
    def provider_name(self) -> str:
        return self._name

    async def open_session(self, verbose: bool = False) -> SchemaSession:
        return _StaticSession(self._schema)


class _TerraformSession(SchemaSession):
    def __init__(self, provider: TerraformSchemaProvider, verbose: bool) -> None:
        self._provider = provider
        self._verbose = verbose

    async def get_schema(self) -> ProviderSchema:
        document = await self._provider._read_document(self._verbose)
        return self._provider._extract(document)


class TerraformSchemaProvider(SchemaProvider):
    """Reads resource schemas from ``terraform providers schema -json``.

    Args:
        source:        Fully-qualified provider source address as it appears
                       under ``provider_schemas``.
        terraform_bin: Terraform executable.
        working_dir:   An initialised Terraform working directory requiring
                       *source*.
        schema_file:   Pre-exported schema JSON; when set, Terraform is not run.
    """

    def __init__(
        self,
        source: str = "registry.terraform.io/hashicorp/kubernetes",
        terraform_bin: str = "terraform",
        working_dir: str = ".",
        schema_file: str = "",
    ) -> None:
        self._source = source
        self._terraform_bin = terraform_bin
        self._working_dir = working_dir
        self._schema_file = schema_file

    @property
    def provider_name(self) -> str:
        return self._source.rsplit("/", 1)[-1]

    async def open_session(self, verbose: bool = False) -> SchemaSession:
        if self._schema_file:
            if not Path(self._schema_file).is_file():
                raise SchemaUnavailable(
                    self.provider_name,
                    FileNotFoundError(f"schema file not found: {self._schema_file}"),
                )
        elif not Path(self._working_dir).is_dir():
            raise SchemaUnavailable(
                self.provider_name,
                NotADirectoryError(f"terraform working directory not found: {self._working_dir}"),
            )
        return _TerraformSession(self, verbose)

    async def _read_document(self, verbose: bool) -> dict[str, Any]:
        if self._schema_file:
            try:
                text = Path(self._schema_file).read_text(encoding="utf-8")
            except OSError as exc:
                raise SchemaUnavailable(self.provider_name, exc) from exc
        else:
            text = await self._run_terraform(verbose)

        try:
            document = json.loads(text)
        except ValueError as exc:
            raise SchemaUnavailable(self.provider_name, exc) from exc
        if not isinstance(document, dict):
            raise SchemaUnavailable(self.provider_name, ValueError("expected a JSON object"))
        return document

    async def _run_terraform(self, verbose: bool) -> str:
        argv = [self._terraform_bin, "providers", "schema", "-json"]
        if verbose:
            _log.info("terraform_schema_requested", argv=argv, cwd=self._working_dir)
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                cwd=self._working_dir,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await proc.communicate()
        except OSError as exc:
            raise SchemaUnavailable(self.provider_name, exc) from exc
        if proc.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip()[:500]
            raise SchemaUnavailable(
                self.provider_name,
                RuntimeError(f"terraform exited with status {proc.returncode}: {message}"),
            )
        try:
            return stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SchemaUnavailable(self.provider_name, exc) from exc

    def _extract(self, document: Mapping[str, Any]) -> ProviderSchema:
        schemas = document.get("provider_schemas") or {}
        provider = schemas.get(self._source)
        if not isinstance(provider, Mapping):
            raise SchemaUnavailable(
                self.provider_name,
                KeyError(f"provider {self._source!r} not present in schema output"),
            )
        resource_types = provider.get("resource_schemas") or {}
        return ProviderSchema(provider=self.provider_name, resource_types=dict(resource_types))
