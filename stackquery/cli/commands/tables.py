"""CLI commands for inspecting registered tables."""

import sys

import click

from stackquery.core.exceptions import UnknownTableError
from stackquery.tables import build_default_registry


@click.command("tables")
def list_tables():
    """List available tables."""
    registry = build_default_registry()

    click.echo("Available Tables:")
    for descriptor in sorted(registry, key=lambda d: d.resource_kind):
        get_marker = "" if descriptor.supports_get else " (no get)"
        click.echo(f"  - {descriptor.resource_kind} [{descriptor.service.value}]{get_marker}")


@click.command("columns")
@click.argument("table")
def show_columns(table: str):
    """Show the columns of a table.

    Filterable columns are pushed down to the API; the key column is marked.

    Examples:

        stackquery columns openstack_subnet
    """
    try:
        descriptor = build_default_registry().get(table)
    except UnknownTableError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"{descriptor.resource_kind}: {descriptor.description}")
    for column in descriptor.columns:
        flags = []
        if column.name == descriptor.key_column:
            flags.append("key")
        if column.name in descriptor.filterable_columns:
            flags.append("filter")
        if column.name in descriptor.required_columns:
            flags.append("required")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        click.echo(f"  {column.name:<28} {column.type:<10}{suffix}")
