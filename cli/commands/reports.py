"""
Report Commands - Generate PDF reports and show the report history.

Usage:
    reportforge generate --type employee
    reportforge generate --type summary --user-id 1 --user-id 3 --title "Team Summary"
    reportforge list-reports
    reportforge list-reports --format json
"""

import asyncio
import json
import logging
import re
from typing import Any, Dict, List, Optional, Tuple

import click

from api.config import Settings
from api.database import DatabaseSession
from api.dependencies import (
    create_database_manager,
    create_pdf_generator,
    create_template_engine,
)
from api.models.errors import PersistenceError
from api.models.requests import REPORT_TYPE_PATTERN
from core.reporting.errors import RasterizeError
from core.reporting.service import GeneratedReport, ReportRequest, ReportService

logger = logging.getLogger("reportforge.reports")


async def _generate(settings: Settings, request: ReportRequest) -> GeneratedReport:
    settings.storage.downloads_dir.mkdir(parents=True, exist_ok=True)
    manager = create_database_manager(settings)
    async with DatabaseSession(manager) as session:
        service = ReportService(
            store=session,
            renderer=create_template_engine(settings),
            pdf_generator=create_pdf_generator(settings),
            downloads_dir=settings.storage.downloads_dir,
            default_generated_by=settings.default_generated_by,
        )
        return await service.generate(request)


async def _list_reports(settings: Settings) -> List[Dict[str, Any]]:
    manager = create_database_manager(settings)
    async with DatabaseSession(manager) as session:
        return await session.list_reports()


@click.command("generate")
@click.option(
    "--type",
    "-t",
    "report_type",
    required=True,
    help="Report type; selects <type>.html from the template directory.",
)
@click.option(
    "--user-id",
    "-u",
    "user_ids",
    type=int,
    multiple=True,
    help="Include only this user (repeatable). Default: all users.",
)
@click.option("--title", default=None, help="Report title (default: '<Type> Report').")
@click.option("--description", default=None, help="Report description.")
@click.option(
    "--generated-by",
    "generated_by",
    default="CLI",
    show_default=True,
    help="Author label stored with the report.",
)
@click.pass_obj
def generate(
    ctx,
    report_type: str,
    user_ids: Tuple[int, ...],
    title: Optional[str],
    description: Optional[str],
    generated_by: str,
):
    """
    Render a report and write it as a PDF into the downloads directory.

    \b
    Examples:
        reportforge generate --type employee
        reportforge generate --type summary -u 1 -u 2 --title "Q3 Summary"
    """
    if not re.match(REPORT_TYPE_PATTERN, report_type):
        raise click.BadParameter(
            "use letters, digits, '-' and '_' only (max 64 characters)",
            param_hint="--type",
        )

    request = ReportRequest(
        report_type=report_type,
        user_ids=list(user_ids),
        title=title,
        description=description,
        generated_by=generated_by,
    )

    try:
        report = asyncio.run(_generate(ctx.settings, request))
    except RasterizeError as e:
        raise click.ClickException(f"Failed to generate PDF: {e}")
    except PersistenceError as e:
        raise click.ClickException(f"{e.message}: {e.reason}")

    click.echo("\n=== Report Generated ===")
    click.echo(f"  ID: {report.report_id}")
    click.echo(f"  Title: {report.title}")
    click.echo(f"  Users: {report.user_count}")
    template = report.template_name
    if report.used_fallback:
        template += " (fallback)"
    click.echo(f"  Template: {template}")
    click.echo(f"  File: {report.file_path}")


@click.command("list-reports")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format (default: text).",
)
@click.pass_obj
def list_reports(ctx, output_format: str):
    """Show generated reports, newest first."""
    reports = asyncio.run(_list_reports(ctx.settings))

    if output_format.lower() == "json":
        click.echo(json.dumps(reports, indent=2, default=str))
        return

    if not reports:
        click.echo("No reports generated yet.")
        return

    click.echo(f"{'ID':>4}  {'Created':<25}  {'Type':<12}  {'By':<12}  Title")
    for report in reports:
        author = report["generated_by"] or "-"
        click.echo(
            f"{report['id']:>4}  {report['created_at']:<25}  "
            f"{report['report_type']:<12}  {author:<12}  {report['title']}"
        )
