import asyncio

import click

from budgetbook.core.config import get_settings
from budgetbook.core.logging import configure_logging
from budgetbook.db.session import build_engine, build_sessionmaker, create_schema, drop_schema
from budgetbook.models.seed import run_seeding


async def _init_db() -> None:
    settings = get_settings()
    engine = build_engine(settings.database_url, echo=settings.echo_sql)
    try:
        await create_schema(engine)
    finally:
        await engine.dispose()


async def _seed() -> bool:
    settings = get_settings()
    engine = build_engine(settings.database_url, echo=settings.echo_sql)
    try:
        await create_schema(engine)
        async with build_sessionmaker(engine)() as session:
            return await run_seeding(session)
    finally:
        await engine.dispose()


async def _reset_db(load_fixtures: bool) -> None:
    settings = get_settings()
    engine = build_engine(settings.database_url, echo=settings.echo_sql)
    try:
        await drop_schema(engine)
        await create_schema(engine)
        if load_fixtures:
            async with build_sessionmaker(engine)() as session:
                await run_seeding(session)
    finally:
        await engine.dispose()


@click.group()
def cli() -> None:
    """Budgetbook maintenance commands."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)


@cli.command("init-db")
def init_db_cmd() -> None:
    """Create all tables that do not exist yet."""
    asyncio.run(_init_db())
    click.echo("Database schema is up to date.")


@cli.command("seed")
def seed_cmd() -> None:
    """Load the demo user, budgets and transactions."""
    if asyncio.run(_seed()):
        click.echo("Demo data loaded.")
    else:
        click.echo("Demo data already present, nothing to do.")


@cli.command("reset-db")
@click.option("--force", is_flag=True, help="Do not ask for confirmation.")
@click.option("--no-fixtures", is_flag=True, help="Skip loading the demo data afterwards.")
def reset_db_cmd(force: bool, no_fixtures: bool) -> None:
    """Drop every table, recreate the schema and reload the demo data."""
    if not force:
        click.confirm("This deletes all data permanently. Continue?", abort=True)

    asyncio.run(_reset_db(load_fixtures=not no_fixtures))
    click.echo("Database reset complete.")


if __name__ == "__main__":
    cli()
