import uuid
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from budgetbook.core.logging import get_logger
from budgetbook.db.utils import storage_errors
from budgetbook.exceptions.http import NotFoundError
from budgetbook.models.budget import ZERO, Budget
from budgetbook.models.definitions import User
from budgetbook.repositories import BudgetRepository
from budgetbook.schemas import BudgetRequest, BudgetResponse, DashboardSummary

logger = get_logger(__name__)


class BudgetService:
    """
    Budget creation and the ownership guard.

    Every lookup is scoped to the acting user. A budget that exists but belongs
    to someone else is reported exactly like one that does not exist, so ids
    cannot be discovered.
    """

    def __init__(self, session: AsyncSession, budget_repo: BudgetRepository):
        self._session = session
        self._budget_repo = budget_repo

    async def create_budget(self, owner: User, data: BudgetRequest) -> Budget:
        async with storage_errors(self._session, "create_budget"):
            budget = await self._budget_repo.create(owner.id, data.model_dump())
            await self._session.commit()

        logger.info("budget_created", budget_id=str(budget.id), owner_id=str(owner.id))
        return budget

    async def list_budgets(self, owner: User) -> Sequence[Budget]:
        async with storage_errors(self._session, "list_budgets"):
            return await self._budget_repo.list_for_owner(owner.id)

    async def resolve_owned_budget(self, identity: User, budget_id: uuid.UUID | str) -> Budget:
        """Returns the budget if ``identity`` owns it, otherwise NotFoundError."""
        if not isinstance(budget_id, uuid.UUID):
            try:
                budget_id = uuid.UUID(str(budget_id))
            except ValueError:
                raise NotFoundError("Budget not found.") from None

        async with storage_errors(self._session, "resolve_owned_budget"):
            budget = await self._budget_repo.get_by_id(budget_id)

        if budget is None or budget.owner_id != identity.id:
            raise NotFoundError("Budget not found.")
        return budget

    @staticmethod
    def describe(budget: Budget) -> BudgetResponse:
        return BudgetResponse.model_validate(budget)

    async def summarize(self, owner: User) -> DashboardSummary:
        """Dashboard totals: balance, income and expenses across all the owner's budgets."""
        budgets = await self.list_budgets(owner)

        total_income = sum((b.total_income for b in budgets), ZERO)
        total_expense = sum((b.total_expense for b in budgets), ZERO)
        total_balance = sum((b.balance for b in budgets), ZERO)

        return DashboardSummary(
            budget_count=len(budgets),
            total_balance=total_balance,
            total_income=total_income,
            total_expense=total_expense,
            budgets=[self.describe(b) for b in budgets],
        )
