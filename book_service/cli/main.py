"""Main CLI entry point for book-service management commands."""

import click

from book_service import __version__
from book_service.cli.commands import db, server
from book_service.infra.logging import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="book-service")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Book Service CLI - management commands for the book inventory API.

    \b
    Command Groups:
      db         Create tables and seed sample data
      server     Run the API server

    \b
    Quick Start:
      book-service db init      # Create tables
      book-service db seed      # Add default genres and sample books
      book-service server run   # Serve the API
    """
    ctx.ensure_object(dict)


cli.add_command(db.db)
cli.add_command(server.server)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
