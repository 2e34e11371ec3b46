"""Routes command: list the webhook routes a router binds."""

import json

import click

from cloudhooks.cli.loader import load_router


@click.command()
@click.option(
    "--app",
    "target",
    required=True,
    help="Router to inspect, as 'module:attribute'.",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the registration table as JSON.",
)
def routes(target: str, as_json: bool):
    """List registered webhook routes."""
    router = load_router(target)

    if as_json:
        click.echo(json.dumps(router.routes, indent=2))
        return

    paths = router.paths()
    if not paths:
        click.echo("No webhook routes registered.")
        return

    for path in paths:
        click.echo(f"POST {path}")
    click.echo(f"\n{len(paths)} route(s)")
