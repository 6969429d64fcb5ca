"""CLI command for looking up one resource by key."""

import json
import sys
from typing import Optional

import click

from stackquery.cli.commands._options import connection_options, open_executor
from stackquery.core.exceptions import StackQueryError
from stackquery.engine.executor import GetRequest


@click.command()
@click.argument("table")
@click.argument("key")
@connection_options
def get(
    table: str,
    key: str,
    config_path: Optional[str],
    vars: tuple,
    region: str,
    log_level: str,
    json_logs: bool,
):
    """Look up one row by key; prints nothing when it does not exist.

    Examples:

        stackquery get openstack_subnet 5f0c2b9e-...
        stackquery get openstack_aggregate 3
    """
    executor = open_executor(config_path, vars, log_level, json_logs)
    try:
        row = executor.get_row(GetRequest(table, key, region))
    except StackQueryError as e:
        click.echo(f"Get error: {e}", err=True)
        sys.exit(1)

    if row is not None:
        click.echo(json.dumps(row, default=str))
