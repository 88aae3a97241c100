"""Main CLI entry point."""

import click
from nomadbank.database.factories import create_sqlite_database
from nomadbank.logging_config import configure_logging

# Import and register all commands at module level
from nomadbank.cli.commands import account, strategy, task


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides NOMADBANK_DB_PATH environment variable)",
    envvar="NOMADBANK_DB_PATH",
)
@click.option(
    "--user",
    default="local",
    show_default=True,
    help="User the commands act for",
    envvar="NOMADBANK_USER",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="NOMADBANK_LOG_LEVEL",
    help="Log level",
)
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"]),
    default="console",
    show_default=True,
    envvar="NOMADBANK_LOG_FORMAT",
    help="Log output format",
)
@click.pass_context
def cli(ctx, db_path: str | None, user: str, log_level: str, log_format: str):
    """Nomadbank - keep-alive transfer planner.

    Plans small, randomized transfers between your accounts on a schedule
    that keeps every account active.
    """
    ctx.ensure_object(dict)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        configure_logging(level=log_level.upper(), format=log_format)
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["user"] = user
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
strategy.register_commands(cli)
task.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
