"""
Serve Command - Run the HTTP API with uvicorn.

Usage:
    reportforge serve
    reportforge serve --host 127.0.0.1 --port 8080
    reportforge serve --reload
"""

import logging
from typing import Optional

import click

logger = logging.getLogger("reportforge.serve")


@click.command("serve")
@click.option("--host", default=None, help="Bind address (default: REPORTFORGE_HOST or 0.0.0.0).")
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port (default: PORT or 3001).",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Restart on code changes (settings are then read from the environment only).",
)
@click.pass_obj
def serve(ctx, host: Optional[str], port: Optional[int], reload: bool):
    """Start the ReportForge API server."""
    import uvicorn

    from api.main import create_application

    settings = ctx.settings
    host = host or settings.host
    port = port or settings.port

    click.echo(f"Serving {settings.app_name} on http://{host}:{port}")
    click.echo(f"  Database: {settings.database.path}")
    click.echo(f"  Downloads: {settings.storage.downloads_dir}")

    log_level = settings.log_level.value.lower()
    if reload:
        # Reload needs an import string; the worker re-reads settings itself
        uvicorn.run("api.main:app", host=host, port=port, reload=True, log_level=log_level)
        return

    uvicorn.run(create_application(settings), host=host, port=port, log_level=log_level)
