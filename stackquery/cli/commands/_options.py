"""Options and helpers shared by CLI commands."""

import sys
from typing import Optional

import click
from pydantic import ValidationError

from stackquery.api import connect
from stackquery.core.exceptions import ConfigurationError
from stackquery.core.logging import configure_logging
from stackquery.engine.executor import QueryExecutor
from stackquery.models.connection_config import ConnectionConfig
from stackquery.models.loader import load_connection


def connection_options(func):
    """Attach the connection and logging options to a command."""
    options = [
        click.option(
            "--config",
            "config_path",
            type=click.Path(exists=True),
            help="Connection YAML file (default: OS_* environment variables)",
        ),
        click.option(
            "--vars",
            multiple=True,
            help="CLI variables in key=value format (can be used multiple times)",
        ),
        click.option("--region", default="", help="Region (default: connection region)"),
        click.option(
            "--log-level",
            default="WARNING",
            type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
            help="Log level (default: WARNING)",
        ),
        click.option("--json-logs", is_flag=True, help="Use JSON format for logs"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def parse_pairs(pairs: tuple, label: str) -> dict[str, str]:
    """Parse key=value pairs, exiting with an error on bad input."""
    parsed = {}
    for pair in pairs:
        if "=" not in pair:
            click.echo(f"Error: Invalid {label} format: {pair}. Use key=value", err=True)
            sys.exit(1)
        key, value = pair.split("=", 1)
        parsed[key.strip()] = value
    return parsed


def open_executor(
    config_path: Optional[str],
    vars: tuple,
    log_level: str,
    json_logs: bool,
) -> QueryExecutor:
    """Configure logging, load the connection and build an executor."""
    cli_vars = parse_pairs(vars, "variable")
    try:
        if config_path:
            config = load_connection(config_path, cli_vars=cli_vars or None)
        else:
            config = ConnectionConfig.from_env()
    except (ConfigurationError, ValidationError) as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    configure_logging(level=log_level, json_format=json_logs, connection_name=config.name)
    return connect(config)
