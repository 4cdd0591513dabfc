import asyncio
import logging
import sys
from importlib.metadata import PackageNotFoundError, version

import click
import pyfiglet

from core.config.settings import DumpToolSettings
from core.helpers.progress_reporter import (
    FAILURE_PREFIX,
    MISSING_FIELDS_PREFIX,
    SUCCESS_MESSAGE,
    UNSUPPORTED_PREFIX,
)
from core.models.backup_models import DatabaseEngine
from core.services.backup_service import BackupService

try:
    __version__ = version("dbdumper")
except PackageNotFoundError:
    __version__ = "0.1.0"


def _banner() -> None:
    art = pyfiglet.figlet_format("DBDumper", font="slant")
    click.echo(click.style(art, fg="cyan", bold=True))
    click.echo(
        click.style(
            "  PostgreSQL · MySQL native dump runner\n",
            fg="bright_white",
        )
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _echo_progress(message: str) -> None:
    if message == SUCCESS_MESSAGE:
        click.echo(click.style(f"  ✓ {message}", fg="green", bold=True))
    elif message.startswith((FAILURE_PREFIX, UNSUPPORTED_PREFIX, MISSING_FIELDS_PREFIX)):
        click.echo(click.style(f"  ✗ {message}", fg="red", bold=True))
    else:
        click.echo(f"  {message}")


def _settings(pg_dump_path: str | None, mysqldump_path: str | None) -> DumpToolSettings:
    overrides = {}
    if pg_dump_path:
        overrides["pg_dump_path"] = pg_dump_path
    if mysqldump_path:
        overrides["mysqldump_path"] = mysqldump_path
    return DumpToolSettings(**overrides)


@click.group(invoke_without_command=True, context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-V", "--version", prog_name="dbdumper")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """DBDumper — back up PostgreSQL and MySQL databases with their native dump tools."""
    if ctx.invoked_subcommand is None:
        _banner()
        click.echo(ctx.get_help())


# ── backup ────────────────────────────────────────────────────────────────────

@cli.command()
@click.option(
    "--db", "-d", default=None,
    help=f"Database engine: {', '.join(e.value for e in DatabaseEngine)} (case-insensitive).",
)
@click.option("--host", "-H", default="localhost", show_default=True, help="Database host.")
@click.option("--user", "-u", default="", help="Database username.")
@click.option(
    "--password", "-p", default=None,
    help="Database password (prompted securely if omitted).",
)
@click.option("--database", "-D", default="", help="Database name.")
@click.option(
    "--output", "-o", default="",
    help="Directory the dump tool writes <database>.backup into.",
)
@click.option("--label", "-l", default="", help="Label recorded with this backup.")
@click.option("--pg-dump-path", default=None, help="Override the configured pg_dump executable.")
@click.option(
    "--mysqldump-path", default=None, help="Override the configured mysqldump executable.",
)
@click.option("--async-mode", "-a", is_flag=True, help="Run the pipeline asynchronously.")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr.")
def backup( #NOSONAR
    db, host, user, password, database, output, label, #NOSONAR
    pg_dump_path, mysqldump_path, async_mode, verbose,
) -> None:
    """Run the vendor dump tool and stream its output: validate → dump → report."""
    _banner()
    _configure_logging(verbose)

    if password is None:
        password = click.prompt("  Password", hide_input=True, default="", prompt_suffix=" ")

    service = BackupService(_settings(pg_dump_path, mysqldump_path))

    if db:
        click.echo(
            click.style(f"  [{db.upper()}] ", fg="cyan", bold=True)
            + click.style(f"Backing up '{database}' …", fg="bright_white")
        )

    kwargs = dict(
        host=host, user=user, password=password,
        database_name=database, file_path=output,
        label=label, database_engine=db,
        on_progress=_echo_progress,
    )

    if async_mode:
        outcome = asyncio.run(service.async_perform_backup_pipeline(**kwargs))
    else:
        outcome = service.start_backup_pipeline(**kwargs).result()

    if not outcome.succeeded:
        sys.exit(1)

    click.echo(click.style(f"  → {outcome.destination}", fg="bright_white"))


# ── engines ───────────────────────────────────────────────────────────────────

@cli.command()
def engines() -> None:
    """List supported engines and the dump executable configured for each."""
    settings = DumpToolSettings()
    for engine in DatabaseEngine:
        click.echo(
            click.style(f"  {engine.value:<12}", fg="cyan", bold=True)
            + click.style(settings.executable_for(engine), fg="bright_white")
        )


def main() -> None:
    cli()
