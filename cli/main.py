"""
ReportForge CLI entry point.

Groups the database, report and server commands under one ``reportforge``
command. Settings come from the same environment variables as the API;
``--database`` and ``--downloads-dir`` override them for a single call.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from api.config import Settings
from cli.commands.db import add_user, init_db
from cli.commands.reports import generate, list_reports
from cli.commands.serve import serve

logger = logging.getLogger("reportforge")


class CLIContext:
    """Shared state handed to every command through ``click.pass_obj``."""

    def __init__(self, settings: Settings, verbose: bool = False):
        self.settings = settings
        self.verbose = verbose


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


@click.group()
@click.option(
    "--database",
    "-d",
    "database_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="SQLite database file (default: DATABASE_PATH or ./data/reportforge.db).",
)
@click.option(
    "--downloads-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for generated PDFs (default: STORAGE_DOWNLOADS_DIR or ./downloads).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging.",
)
@click.version_option(version="0.1.0", prog_name="reportforge")
@click.pass_context
def app(
    ctx: click.Context,
    database_path: Optional[Path],
    downloads_dir: Optional[Path],
    verbose: bool,
):
    """
    ReportForge - employee records and PDF reports.

    \b
    Examples:
        reportforge init-db
        reportforge add-user --name "Ada Lovelace" --email ada@example.com \\
            --department Engineering --position Analyst --salary 90000 \\
            --hire-date 2024-01-15
        reportforge generate --type employee
        reportforge list-reports
        reportforge serve --port 3001
    """
    _configure_logging(verbose)

    settings = Settings()
    if database_path is not None:
        settings.database.path = database_path
    if downloads_dir is not None:
        settings.storage.downloads_dir = downloads_dir

    ctx.obj = CLIContext(settings=settings, verbose=verbose)


app.add_command(init_db)
app.add_command(add_user)
app.add_command(generate)
app.add_command(list_reports)
app.add_command(serve)


if __name__ == "__main__":
    app()
