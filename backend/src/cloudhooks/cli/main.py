"""cloudhooks CLI entry point."""

import click


@click.group()
def cli():
    """cloudhooks: Cloud Code webhooks on FastAPI."""
    pass


# Register subcommands
from cloudhooks.cli.routes_cmd import routes  # noqa: E402
from cloudhooks.cli.serve_cmd import serve  # noqa: E402

cli.add_command(routes)
cli.add_command(serve)
