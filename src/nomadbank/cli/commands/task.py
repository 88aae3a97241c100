"""Transfer task commands."""

import click
from nomadbank.cli.error_handling import handle_domain_error
from nomadbank.domain.account import AccountService
from nomadbank.domain.entities import GenerationRequest, TaskStatus
from nomadbank.domain.errors import DomainError
from nomadbank.domain.generation import DEFAULT_CYCLES, GenerationService
from nomadbank.domain.task import TaskService


@click.group()
def task_group():
    """Generate and manage transfer tasks."""
    pass


@task_group.command("generate")
@click.option("--strategy", "strategy_id", default="", help="Strategy ID to plan with")
@click.option("--group", default="", help="Only use accounts in this group")
@click.option("--cycles", type=int, default=DEFAULT_CYCLES, show_default=True,
              help="Number of cycles to generate")
@click.pass_context
def generate_tasks(ctx, strategy_id: str, group: str, cycles: int):
    """Generate the next cycles of transfer tasks.

    Cycles continue from the last generated cycle of the same group.

    Examples:
        nomadbank task generate --strategy <ID>
        nomadbank task generate --strategy <ID> --group travel --cycles 2
    """
    db = ctx.obj["db"]
    service = GenerationService(db)

    try:
        result = service.generate(
            ctx.obj["user"],
            GenerationRequest(strategy_id=strategy_id, group_name=group, cycles=cycles),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Generated {result.tasks_created} tasks "
        f"(cycles {result.start_cycle}-{result.end_cycle})"
    )


@task_group.command("list")
@click.option("--group", default=None, help="Only tasks of this group ('' for all-account tasks)")
@click.option(
    "--status",
    type=click.Choice([s.value for s in TaskStatus]),
    help="Only tasks with this status",
)
@click.option("--cycle", type=int, help="Only tasks of this cycle")
@click.pass_context
def list_tasks(ctx, group: str | None, status: str | None, cycle: int | None):
    """List transfer tasks in execution order."""
    db = ctx.obj["db"]
    service = TaskService(db)
    user = ctx.obj["user"]

    tasks = service.list_tasks(
        user,
        group_name=group,
        status=TaskStatus(status) if status else None,
        cycle=cycle,
    )
    if not tasks:
        click.echo("No tasks found.")
        return

    names = {acc.id: acc.name for acc in AccountService(db).list_accounts(user)}

    click.echo(f"\n{'When':19s}  {'Cycle':>5s}  {'From':20s}  {'To':20s}  {'Amount':>10s}  Status")
    click.echo("-" * 100)
    for t in tasks:
        click.echo(
            f"{t.execute_at:%Y-%m-%d %H:%M:%S}  {t.cycle:5d}  "
            f"{names.get(t.from_account_id, t.from_account_id):20s}  "
            f"{names.get(t.to_account_id, t.to_account_id):20s}  "
            f"{t.amount:>10}  {t.status.value}"
        )
    click.echo(f"\n{len(tasks)} task{'s' if len(tasks) != 1 else ''}")


@task_group.command("cycles")
@click.pass_context
def list_cycles(ctx):
    """List generated cycle numbers."""
    service = TaskService(ctx.obj["db"])

    cycles = service.list_cycles(ctx.obj["user"])
    if not cycles:
        click.echo("No cycles found.")
        return

    click.echo(", ".join(str(c) for c in cycles))


@task_group.command("complete")
@click.argument("task_id", metavar="TASK_ID")
@click.pass_context
def complete_task(ctx, task_id: str) -> None:
    """Mark a pending task as done."""
    service = TaskService(ctx.obj["db"])

    try:
        service.complete_task(ctx.obj["user"], task_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Completed task {task_id}")


@task_group.command("skip")
@click.argument("task_id", metavar="TASK_ID")
@click.pass_context
def skip_task(ctx, task_id: str) -> None:
    """Mark a pending task as skipped."""
    service = TaskService(ctx.obj["db"])

    try:
        service.skip_task(ctx.obj["user"], task_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Skipped task {task_id}")


@task_group.command("clear")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def clear_tasks(ctx, yes: bool) -> None:
    """Delete all of your tasks, so generation restarts at cycle 1."""
    service = TaskService(ctx.obj["db"])

    if not yes and not click.confirm("Are you sure you want to delete all tasks?"):
        click.echo("Deletion cancelled.")
        return

    count = service.delete_tasks(ctx.obj["user"])
    click.echo(f"Deleted {count} task{'s' if count != 1 else ''}")


def register_commands(cli):
    """Register task commands with main CLI."""
    cli.add_command(task_group, name="task")
