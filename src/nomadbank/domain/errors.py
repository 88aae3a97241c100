"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class PermissionDeniedError(DomainError):
    """Entity exists but belongs to someone else or is read-only."""


class StrategyRequiredError(ValidationError):
    """Task generation was requested without a strategy."""


class StrategyNotFoundError(NotFoundError):
    """The requested strategy does not exist."""


class NotEnoughAccountsError(ValidationError):
    """Fewer than two active accounts are available for generation."""


class PersistenceError(DomainError):
    """The store failed to write a batch; nothing from the batch was kept."""


MIN_ACCOUNTS_FOR_GENERATION = 2


def strategy_required() -> str:
    """Return message for a missing strategy selection."""
    return "A strategy is required to generate tasks"


def strategy_not_found(strategy_id: str) -> str:
    """Return message for missing strategy."""
    return f"Strategy {strategy_id} not found"


def not_enough_accounts(found: int, group_name: str = "") -> str:
    """Return message when too few active accounts are available."""
    scope = f" in group '{group_name}'" if group_name else ""
    return (
        f"At least {MIN_ACCOUNTS_FOR_GENERATION} active accounts are required "
        f"to generate tasks (found {found}{scope})"
    )


def account_not_found(account_id: str) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def duplicate_account_name(name: str) -> str:
    """Return message for an account name already in use by the user."""
    return f"Account with name '{name}' already exists"


def task_not_found(task_id: str) -> str:
    """Return message for missing task."""
    return f"Task {task_id} not found"


def task_not_pending(task_id: str, status: str) -> str:
    """Return message when a finished task is transitioned again."""
    return f"Task {task_id} is already {status}"


def invalid_time_of_day(value: str) -> str:
    """Return message for a time string that is not HH:MM."""
    return f"Invalid time '{value}': expected HH:MM between 00:00 and 23:59"
