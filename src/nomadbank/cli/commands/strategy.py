"""Strategy management commands."""

import click
from nomadbank.cli.error_handling import handle_domain_error
from nomadbank.domain.errors import DomainError
from nomadbank.domain.strategy import (
    DEFAULT_DAILY_LIMIT,
    DEFAULT_INTERVAL_MAX,
    DEFAULT_INTERVAL_MIN,
    DEFAULT_TIME_END,
    DEFAULT_TIME_START,
    StrategyService,
)
from nomadbank.utils.amount_parser import parse_amount


@click.group()
def strategy_group():
    """Manage keep-alive strategies."""
    pass


@strategy_group.command("create")
@click.argument("name", metavar="STRATEGY_NAME")
@click.option("--interval-min", type=int, default=DEFAULT_INTERVAL_MIN, show_default=True,
              help="Minimum days between cycles")
@click.option("--interval-max", type=int, default=DEFAULT_INTERVAL_MAX, show_default=True,
              help="Maximum days between cycles")
@click.option("--time-start", default=DEFAULT_TIME_START, show_default=True,
              help="Earliest execution time (HH:MM)")
@click.option("--time-end", default=DEFAULT_TIME_END, show_default=True,
              help="Latest execution time (HH:MM)")
@click.option("--skip-weekend", is_flag=True, help="Never schedule tasks on Saturday or Sunday")
@click.option("--amount-min", default="10", show_default=True, help="Smallest transfer amount")
@click.option("--amount-max", default="30", show_default=True, help="Largest transfer amount")
@click.option("--daily-limit", type=int, default=DEFAULT_DAILY_LIMIT, show_default=True,
              help="Maximum tasks per day")
@click.pass_context
def create_strategy(
    ctx,
    name: str,
    interval_min: int,
    interval_max: int,
    time_start: str,
    time_end: str,
    skip_weekend: bool,
    amount_min: str,
    amount_max: str,
    daily_limit: int,
):
    """Create a new strategy.

    Examples:
        nomadbank strategy create "Monthly"
        nomadbank strategy create "Quiet" --interval-min 45 --interval-max 75 --skip-weekend
    """
    db = ctx.obj["db"]
    service = StrategyService(db)

    try:
        low = parse_amount(amount_min)
        high = parse_amount(amount_max)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        strategy_id = service.create_strategy(
            user_id=ctx.obj["user"],
            name=name,
            interval_min=interval_min,
            interval_max=interval_max,
            time_start=time_start,
            time_end=time_end,
            skip_weekend=skip_weekend,
            amount_min=low,
            amount_max=high,
            daily_limit=daily_limit,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created strategy '{name.strip()}' (ID: {strategy_id})")


@strategy_group.command("list")
@click.pass_context
def list_strategies(ctx):
    """List your strategies and the built-in presets."""
    db = ctx.obj["db"]
    service = StrategyService(db)
    service.ensure_system_strategies()

    strategies = service.list_strategies(ctx.obj["user"])

    click.echo("\nStrategies:")
    click.echo("-" * 100)
    for s in strategies:
        kind = "system" if s.is_system else "custom"
        weekend = ", no weekends" if s.skip_weekend else ""
        click.echo(
            f"{s.id} | {s.name:12s} | {kind} | every {s.interval_min}-{s.interval_max} days | "
            f"{s.time_start}-{s.time_end} | {s.amount_min}-{s.amount_max} | "
            f"{s.daily_limit}/day{weekend}"
        )


@strategy_group.command("delete")
@click.argument("strategy_id", metavar="STRATEGY_ID")
@click.pass_context
def delete_strategy(ctx, strategy_id: str) -> None:
    """Delete one of your strategies."""
    db = ctx.obj["db"]
    service = StrategyService(db)

    try:
        service.delete_strategy(ctx.obj["user"], strategy_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted strategy {strategy_id}")


def register_commands(cli):
    """Register strategy commands with main CLI."""
    cli.add_command(strategy_group, name="strategy")
