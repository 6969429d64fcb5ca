"""Main CLI entry point for stackquery."""

import click

from stackquery import __version__
from stackquery.cli.commands.get import get
from stackquery.cli.commands.scan import scan
from stackquery.cli.commands.tables import list_tables, show_columns
from stackquery.cli.commands.test_connection import test_connection


@click.group()
@click.version_option(version=__version__)
def main():
    """stackquery - OpenStack resources as queryable tables."""
    pass


main.add_command(list_tables)
main.add_command(show_columns)
main.add_command(scan)
main.add_command(get)
main.add_command(test_connection)


if __name__ == "__main__":
    main()
