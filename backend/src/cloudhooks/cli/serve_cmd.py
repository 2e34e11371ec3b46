"""Serve command: run a router's app with uvicorn."""

import click
import uvicorn

from cloudhooks.cli.loader import load_router


@click.command()
@click.option(
    "--app",
    "target",
    required=True,
    help="Router to serve, as 'module:attribute'.",
)
@click.option("--host", default=None, help="Bind address (default: CLOUDHOOKS_HOST).")
@click.option("--port", default=None, type=int, help="Port (default: CLOUDHOOKS_PORT).")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["critical", "error", "warning", "info", "debug"]),
    help="Log level (default: CLOUDHOOKS_LOG_LEVEL).",
)
def serve(target: str, host: str | None, port: int | None, log_level: str | None):
    """Serve webhook routes over HTTP."""
    router = load_router(target)
    config = router.config

    host = host or config.host
    port = port or config.port
    click.echo(f"Serving {len(router.registry)} webhook route(s) on http://{host}:{port}")

    uvicorn.run(
        router.app,
        host=host,
        port=port,
        log_level=log_level or config.log_level,
    )
