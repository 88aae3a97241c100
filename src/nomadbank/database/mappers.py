"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the engine never sees ORM rows
and the schema can change without touching the scheduling code.
"""

from nomadbank.domain import entities as domain
from nomadbank.database.models import (
    Account as ORMAccount,
    Strategy as ORMStrategy,
    TransferTask as ORMTransferTask,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        user_id=orm_account.user_id,
        name=orm_account.name,
        is_active=orm_account.is_active,
        group_name=orm_account.group_name,
        strategy_id=orm_account.strategy_id,
        amount_min=orm_account.amount_min,
        amount_max=orm_account.amount_max,
        created_at=orm_account.created_at,
    )


def strategy_to_domain(orm_strategy: ORMStrategy) -> domain.Strategy:
    """Convert SQLAlchemy Strategy model to domain Strategy entity."""
    return domain.Strategy(
        id=orm_strategy.id,
        user_id=orm_strategy.user_id,
        name=orm_strategy.name,
        interval_min=orm_strategy.interval_min,
        interval_max=orm_strategy.interval_max,
        time_start=orm_strategy.time_start,
        time_end=orm_strategy.time_end,
        skip_weekend=orm_strategy.skip_weekend,
        amount_min=orm_strategy.amount_min,
        amount_max=orm_strategy.amount_max,
        daily_limit=orm_strategy.daily_limit,
        is_system=orm_strategy.is_system,
        created_at=orm_strategy.created_at,
    )


def task_to_domain(orm_task: ORMTransferTask) -> domain.GeneratedTask:
    """Convert SQLAlchemy TransferTask model to domain GeneratedTask entity."""
    return domain.GeneratedTask(
        id=orm_task.id,
        user_id=orm_task.user_id,
        group_name=orm_task.group_name,
        cycle=orm_task.cycle,
        anchor_date=orm_task.anchor_date,
        execute_at=orm_task.exec_date,
        from_account_id=orm_task.from_account_id,
        to_account_id=orm_task.to_account_id,
        amount=orm_task.amount,
        status=domain.TaskStatus(orm_task.status),
        completed_at=orm_task.completed_at,
    )


def task_to_orm(task: domain.GeneratedTask) -> ORMTransferTask:
    """Convert domain GeneratedTask entity to a new SQLAlchemy TransferTask row."""
    return ORMTransferTask(
        id=task.id,
        user_id=task.user_id,
        group_name=task.group_name,
        cycle=task.cycle,
        anchor_date=task.anchor_date,
        exec_date=task.execute_at,
        from_account_id=task.from_account_id,
        to_account_id=task.to_account_id,
        amount=task.amount,
        status=task.status.value,
        completed_at=task.completed_at,
    )
