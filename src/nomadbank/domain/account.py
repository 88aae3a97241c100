"""Account domain service."""

from decimal import Decimal
from typing import Optional

from nomadbank.database.base import Database
from nomadbank.domain import errors
from nomadbank.domain.entities import Account as AccountEntity

DEFAULT_AMOUNT_MIN = Decimal("10")
DEFAULT_AMOUNT_MAX = Decimal("100")


class AccountService:
    """Service for managing tracked accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        user_id: str,
        name: str,
        group_name: Optional[str] = None,
        amount_min: Optional[Decimal] = None,
        amount_max: Optional[Decimal] = None,
        strategy_id: Optional[str] = None,
    ) -> str:
        """Create a new account.

        Args:
            user_id: Owner of the account
            name: Account name, unique per user
            group_name: Optional group label
            amount_min: Smallest amount the account should move
            amount_max: Largest amount the account should move
            strategy_id: Optional default strategy

        Returns:
            Account ID

        Raises:
            ValidationError: If the name is empty
            ConflictError: If the user already has an account with that name
            StrategyNotFoundError: If strategy_id does not exist
        """
        name = name.strip()
        if not name:
            raise errors.ValidationError("Account name cannot be empty")

        for acc in self.db.list_accounts(user_id):
            if acc.name == name:
                raise errors.ConflictError(errors.duplicate_account_name(name))

        if strategy_id is not None and self.db.get_strategy(strategy_id) is None:
            raise errors.StrategyNotFoundError(errors.strategy_not_found(strategy_id))

        low = amount_min if amount_min is not None and amount_min > 0 else DEFAULT_AMOUNT_MIN
        high = amount_max if amount_max is not None and amount_max > 0 else DEFAULT_AMOUNT_MAX
        if low > high:
            low, high = high, low

        group = group_name.strip() if group_name else None

        return self.db.create_account(
            user_id=user_id,
            name=name,
            group_name=group or None,
            amount_min=low,
            amount_max=high,
            strategy_id=strategy_id,
        )

    def get_account(self, account_id: str) -> Optional[AccountEntity]:
        """Get account by ID.

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def list_accounts(self, user_id: str) -> list[AccountEntity]:
        """List all of a user's accounts, active or not."""
        return self.db.list_accounts(user_id)

    def list_groups(self, user_id: str) -> list[str]:
        """List the distinct group labels in use by a user's accounts."""
        return self.db.list_account_groups(user_id)

    def set_active(self, user_id: str, account_id: str, is_active: bool) -> None:
        """Activate or deactivate an account.

        Inactive accounts are left out of task generation.

        Raises:
            NotFoundError: If the account does not exist or belongs to another user
        """
        account = self.db.get_account(account_id)
        if account is None or account.user_id != user_id:
            raise errors.NotFoundError(errors.account_not_found(account_id))

        self.db.update_account_active(account_id, is_active)
