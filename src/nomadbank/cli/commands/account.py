"""Account management commands."""

import click
from nomadbank.cli.error_handling import handle_domain_error
from nomadbank.domain.account import AccountService
from nomadbank.domain.errors import DomainError
from nomadbank.utils.amount_parser import parse_amount


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--group", help="Group label used to generate tasks for a subset of accounts")
@click.option("--amount-min", help="Smallest amount this account should move (default 10)")
@click.option("--amount-max", help="Largest amount this account should move (default 100)")
@click.option("--strategy", "strategy_id", help="Default strategy ID")
@click.pass_context
def create_account(
    ctx,
    name: str,
    group: str | None,
    amount_min: str | None,
    amount_max: str | None,
    strategy_id: str | None,
):
    """Create a new account.

    Examples:
        nomadbank account create "Wise EUR"
        nomadbank account create "Revolut" --group travel --amount-max 50
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    try:
        low = parse_amount(amount_min) if amount_min is not None else None
        high = parse_amount(amount_max) if amount_max is not None else None
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        account_id = service.create_account(
            user_id=ctx.obj["user"],
            name=name,
            group_name=group,
            amount_min=low,
            amount_max=high,
            strategy_id=strategy_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created account '{name.strip()}' (ID: {account_id})")
    if group:
        click.echo(f"Group set to '{group.strip()}'")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts(ctx.obj["user"])
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 100)
    for acc in accounts:
        state = "active" if acc.is_active else "inactive"
        group = acc.group_name or "-"
        click.echo(
            f"{acc.id} | {acc.name:20s} | Group: {group:12s} | "
            f"{acc.amount_min}-{acc.amount_max} | {state}"
        )


@account_group.command("groups")
@click.pass_context
def list_groups(ctx):
    """List account groups."""
    db = ctx.obj["db"]
    service = AccountService(db)

    groups = service.list_groups(ctx.obj["user"])
    if not groups:
        click.echo("No groups found.")
        return

    for group in groups:
        click.echo(group)


@account_group.command("activate")
@click.argument("account_id", metavar="ACCOUNT_ID")
@click.pass_context
def activate_account(ctx, account_id: str) -> None:
    """Include an account in task generation again."""
    _set_active(ctx, account_id, True)


@account_group.command("deactivate")
@click.argument("account_id", metavar="ACCOUNT_ID")
@click.pass_context
def deactivate_account(ctx, account_id: str) -> None:
    """Leave an account out of task generation.

    Tasks that were already generated for the account are kept.
    """
    _set_active(ctx, account_id, False)


def _set_active(ctx, account_id: str, is_active: bool) -> None:
    service = AccountService(ctx.obj["db"])
    try:
        service.set_active(ctx.obj["user"], account_id, is_active)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Account {account_id} {'activated' if is_active else 'deactivated'}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
