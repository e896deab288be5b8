"""Flask CLI commands seeding staff accounts and sample customers.

``flask seed run`` is idempotent and safe to repeat; ``flask seed fresh``
rebuilds the schema first and refuses to run in production.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import click
from flask import current_app
from flask.cli import with_appcontext
from flask_sqlalchemy import SQLAlchemy

from travelcrm.core.extensions import db
from travelcrm.seeds import seed_data

LOGGER = logging.getLogger(__name__)

Seeder = Callable[..., dict[str, dict[str, int]]]

# ``--only`` targets; ``all`` keeps the foreign-key order of ``run_all``
SEEDERS: dict[str, Seeder] = {
    "all": seed_data.run_all,
    "staff": seed_data.seed_staff,
    "customers": seed_data.seed_customers,
}


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger(seed_data.__name__).setLevel(level)
    LOGGER.setLevel(level)


def _echo_summary(summary: dict[str, dict[str, int]]) -> None:
    """Print one ``created``/``existing`` line per seeded table."""
    click.echo("Seed summary:")
    if not summary:
        click.echo("  (no changes)")
        return
    width = max(len(name) for name in summary)
    for table in sorted(summary):
        counters = summary[table]
        click.echo(
            f"  {table.ljust(width)}  created={counters.get('created', 0):>2}"
            f"  existing={counters.get('existing', 0):>2}"
        )


def _seed(database: SQLAlchemy, target: str, *, verbose: bool, failure: str) -> None:
    """Run the ``target`` seeder and print its summary, wrapping failures for click."""
    try:
        summary = SEEDERS[target](database, verbose=verbose)
    except Exception as exc:  # pragma: no cover - CLI safeguard
        database.session.rollback()
        raise click.ClickException(f"{failure}: {exc}") from exc
    _echo_summary(summary)


def _ensure_non_production() -> None:
    """Abort destructive commands when ``APP_ENV`` is production."""
    config = current_app.config
    if str(config.get("APP_ENV", "")).lower() == "production" and not config.get("TESTING"):
        raise click.UsageError(
            "The 'flask seed fresh' command is restricted to non-production environments."
        )


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Enable verbose logging for seeding.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Seed staff accounts and sample customers."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose)


@seed_cli.command("run")
@click.option(
    "--only",
    "target",
    type=click.Choice(sorted(SEEDERS)),
    default="all",
    show_default=True,
    help="Restrict seeding to staff accounts or to customers.",
)
@click.pass_context
@with_appcontext
def run_command(ctx: click.Context, target: str) -> None:
    """Create missing staff accounts and sample customers; existing rows are kept."""
    _seed(db, target, verbose=bool(ctx.obj.get("verbose")), failure="Seeding failed")


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Skip the destructive confirmation prompt.")
@click.pass_context
@with_appcontext
def fresh_command(ctx: click.Context, yes: bool) -> None:
    """Drop every table, recreate the schema and seed everything."""
    _ensure_non_production()
    if not yes:
        click.confirm(
            "This will DROP the staff, customers and destinations tables. Continue?",
            abort=True,
        )
    LOGGER.info("Rebuilding database schema")
    db.session.remove()
    db.drop_all()
    db.create_all()
    _seed(db, "all", verbose=bool(ctx.obj.get("verbose")), failure="Fresh seed failed")
