import uuid
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from budgetbook.core.logging import get_logger
from budgetbook.db.utils import storage_errors
from budgetbook.exceptions.http import NotFoundError
from budgetbook.models.budget import Budget, Transaction
from budgetbook.models.definitions import User
from budgetbook.repositories import TransactionRepository
from budgetbook.schemas import TransactionRequest

from .budget import BudgetService

logger = get_logger(__name__)


class LedgerService:
    """
    Append-only transaction ledger of a budget and the balance derived from it.

    Callers must obtain ``budget`` through ``BudgetService.resolve_owned_budget``;
    the methods taking a Budget assume ownership was already checked.
    """

    def __init__(self, session: AsyncSession, transaction_repo: TransactionRepository, budgets: BudgetService):
        self._session = session
        self._transaction_repo = transaction_repo
        self._budgets = budgets

    @staticmethod
    def list_transactions(budget: Budget, newest_first: bool = False) -> list[Transaction]:
        """
        Ascending for the API listing, newest first for the budget detail view.
        Ids increase with insertion, so they order entries by creation.
        """
        return sorted(budget.transactions, key=lambda t: t.id, reverse=newest_first)

    async def append_transaction(self, budget: Budget, data: TransactionRequest) -> Transaction:
        """
        Records one entry as a single insert and commit. The budget's collection
        already holds it, so the very next balance read includes it.
        """
        transaction = Transaction(amount=data.amount, type=data.type, comment=data.comment)

        async with storage_errors(self._session, "append_transaction"):
            budget.add_transaction(transaction)
            await self._transaction_repo.add(transaction)
            await self._session.commit()

        logger.info(
            "transaction_appended",
            budget_id=str(budget.id),
            transaction_id=transaction.id,
            type=transaction.type.value,
        )
        return transaction

    @staticmethod
    def compute_balance(budget: Budget) -> Decimal:
        """Sum of income amounts minus sum of expense amounts, in exact decimal arithmetic."""
        return budget.balance

    async def resolve_owned_transaction(
        self, identity: User, budget_id: uuid.UUID | str, transaction_id: int
    ) -> Transaction:
        """
        Hides foreign transactions the same way foreign budgets are hidden:
        a missing budget, a foreign budget and a transaction from another
        budget all end in NotFoundError.
        """
        budget = await self._budgets.resolve_owned_budget(identity, budget_id)

        async with storage_errors(self._session, "resolve_owned_transaction"):
            transaction = await self._transaction_repo.get_in_budget(budget.id, transaction_id)

        if transaction is None:
            raise NotFoundError("Transaction not found.")
        return transaction
