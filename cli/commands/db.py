"""
Database Commands - Create the schema and add user records.

Usage:
    reportforge init-db
    reportforge init-db --no-seed
    reportforge add-user --name "Ada Lovelace" --email ada@example.com \\
        --department Engineering --position Analyst --salary 90000 --hire-date 2024-01-15
"""

import asyncio
import logging
from typing import Optional

import click
from pydantic import ValidationError as PydanticValidationError

from api.database import DatabaseManager, DatabaseSession
from api.models.errors import APIError
from api.models.requests import UserCreate

logger = logging.getLogger("reportforge.db")


@click.command("init-db")
@click.option(
    "--seed/--no-seed",
    default=None,
    help="Insert the sample employees (default: SEED_SAMPLE_DATA setting).",
)
@click.pass_obj
def init_db(ctx, seed: Optional[bool]):
    """
    Create the users and reports tables.

    Safe to run repeatedly: existing tables and rows are kept, and sample
    employees are only inserted when their email is not taken yet.
    """
    settings = ctx.settings
    if seed is None:
        seed = settings.seed_sample_data

    manager = DatabaseManager(settings.database.path, seed_sample_data=seed)
    asyncio.run(manager.initialize())

    click.echo(f"Database ready: {settings.database.path}")
    if seed:
        click.echo("  Sample employees inserted (existing emails skipped)")


async def _add_user(manager: DatabaseManager, user: UserCreate) -> int:
    async with DatabaseSession(manager) as session:
        return await session.create_user(user)


@click.command("add-user")
@click.option("--name", required=True, help="Full name.")
@click.option("--email", required=True, help="Unique email address.")
@click.option("--phone", default=None, help="Phone number.")
@click.option("--department", required=True, help="Department.")
@click.option("--position", required=True, help="Job title.")
@click.option("--salary", type=float, required=True, help="Annual salary.")
@click.option("--hire-date", "hire_date", required=True, help="Hire date (YYYY-MM-DD).")
@click.pass_obj
def add_user(
    ctx,
    name: str,
    email: str,
    phone: Optional[str],
    department: str,
    position: str,
    salary: float,
    hire_date: str,
):
    """Add one employee record."""
    try:
        user = UserCreate(
            name=name,
            email=email,
            phone=phone,
            department=department,
            position=position,
            salary=salary,
            hire_date=hire_date,
        )
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise click.BadParameter(problems)

    # Connecting creates the schema, so add-user works on a fresh file
    manager = DatabaseManager(ctx.settings.database.path)
    try:
        user_id = asyncio.run(_add_user(manager, user))
    except APIError as e:
        raise click.ClickException(e.message)

    logger.debug(f"Created user {user_id} <{user.email}>")
    click.echo(f"User created: ID {user_id} ({user.name} <{user.email}>)")
