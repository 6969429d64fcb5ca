"""CLI command for scanning a table."""

import json
import sys
import threading
from typing import Optional

import click

from stackquery.cli.commands._options import connection_options, open_executor, parse_pairs
from stackquery.core.exceptions import StackQueryError
from stackquery.engine.executor import ScanRequest


@click.command()
@click.argument("table")
@click.option(
    "--where",
    multiple=True,
    help="Equality predicate in column=value format (can be used multiple times)",
)
@click.option("--limit", type=click.IntRange(min=1), help="Stop after this many rows")
@connection_options
def scan(
    table: str,
    where: tuple,
    limit: Optional[int],
    config_path: Optional[str],
    vars: tuple,
    region: str,
    log_level: str,
    json_logs: bool,
):
    """Scan a table and print one JSON row per line.

    Examples:

        stackquery scan openstack_network
        stackquery scan openstack_subnet --where name=web-01
        stackquery scan openstack_pool_member --where pool_id=8c7f... --limit 10
        stackquery scan openstack_instance --config cloud.yaml --region RegionTwo
    """
    predicates = parse_pairs(where, "predicate")
    executor = open_executor(config_path, vars, log_level, json_logs)

    cancel = threading.Event()
    emitted = 0

    def sink(row: dict) -> None:
        nonlocal emitted
        # Stop on the first row past the limit so an exact fit still completes
        if limit is not None and emitted >= limit:
            cancel.set()
            return
        click.echo(json.dumps(row, default=str))
        emitted += 1

    try:
        executor.scan(ScanRequest(table, sink, predicates, cancel, region))
    except StackQueryError as e:
        click.echo(f"Scan error: {e}", err=True)
        sys.exit(1)
