"""Click commands for kubeimport."""

from __future__ import annotations

import asyncio
import json

import click

from kubeimport import __version__
from kubeimport.catalog.builder import ResourceCatalogBuilder
from kubeimport.catalog.schema import TerraformSchemaProvider
from kubeimport.config import load_config, load_global_options
from kubeimport.errors import KubeImportError
from kubeimport.models.client import ClientConfiguration
from kubeimport.models.config import KubeImportConfig
from kubeimport.models.kinds import Catalog
from kubeimport.observability.logging import get_logger, setup_logging
from kubeimport.resolver import resolve_client_configuration


def _resolve() -> ClientConfiguration:
    try:
        return asyncio.run(resolve_client_configuration(load_global_options()))
    except KubeImportError as exc:
        raise click.ClickException(str(exc)) from exc


def _render_table(catalog: Catalog) -> str:
    rows = [("NAME", "GROUP", "VERSION", "KIND", "NAMESPACED")]
    for name in sorted(catalog):
        kind = catalog[name]
        rows.append((name, kind.group or "core", kind.version, kind.name, str(kind.namespaced).lower()))
    widths = [max(len(row[i]) for row in rows) for i in range(len(rows[0]))]
    return "\n".join(
        "  ".join(cell.ljust(width) for cell, width in zip(row, widths, strict=True)).rstrip()
        for row in rows
    )


@click.group()
@click.version_option(__version__, prog_name="kubeimport")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Resolve cluster client configuration and list importable resource kinds."""
    try:
        config = load_config()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    setup_logging(config.log.level)
    ctx.obj = config


@cli.command()
@click.option("--verbose", is_flag=True, help="Verbose schema provider session.")
@click.option(
    "--output",
    "-o",
    type=click.Choice(["json", "table"]),
    default="table",
    show_default=True,
)
@click.option("--schema-file", default=None, help="Pre-exported `terraform providers schema -json` output.")
@click.pass_obj
def catalog(config: KubeImportConfig, verbose: bool, output: str, schema_file: str | None) -> None:
    """List resource kinds that can be imported from the current cluster."""
    log = get_logger("cli")
    client_config = _resolve()
    provider_cfg = config.provider
    schema_provider = TerraformSchemaProvider(
        source=provider_cfg.source,
        terraform_bin=provider_cfg.terraform_bin,
        working_dir=provider_cfg.terraform_dir,
        schema_file=schema_file or provider_cfg.schema_file,
    )
    builder = ResourceCatalogBuilder(schema_provider)
    verbose = verbose or config.verbose
    kinds = asyncio.run(builder.build(client_config, verbose=verbose))
    log.debug("catalog_command_done", kinds=len(kinds), output=output)

    if output == "json":
        payload = {
            name: {
                "group": kind.group,
                "version": kind.version,
                "kind": kind.name,
                "namespaced": kind.namespaced,
            }
            for name, kind in sorted(kinds.items())
        }
        click.echo(json.dumps(payload, indent=2))
    else:
        click.echo(_render_table(kinds))


@cli.command("config")
def show_config() -> None:
    """Print the resolved client configuration with credentials masked."""
    client_config = _resolve()
    click.echo(json.dumps(client_config.redacted(), indent=2))
