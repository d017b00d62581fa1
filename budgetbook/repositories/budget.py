import uuid
from collections.abc import Sequence
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from budgetbook.db.utils import apply_dict_updates
from budgetbook.models.budget import Budget


class BudgetRepository:
    """
    Data access for budgets. Budgets are always returned with their
    transactions loaded, because the balance is folded from them.
    Reads refresh instances already in the identity map, so entries committed
    through other sessions are never missed.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, budget_id: uuid.UUID) -> Budget | None:
        """Retrieves a Budget by ID regardless of owner. Ownership is checked by the service."""
        stmt = (
            select(Budget)
            .where(Budget.id == budget_id)
            .options(selectinload(Budget.transactions))
            .execution_options(populate_existing=True)
        )
        return (await self.session.scalars(stmt)).one_or_none()

    async def list_for_owner(self, owner_id: uuid.UUID) -> Sequence[Budget]:
        stmt = (
            select(Budget)
            .where(Budget.owner_id == owner_id)
            .options(selectinload(Budget.transactions))
            .order_by(Budget.created_at, Budget.name)
            .execution_options(populate_existing=True)
        )
        return (await self.session.scalars(stmt)).all()

    async def create(self, owner_id: uuid.UUID, create_data: dict[str, Any]) -> Budget:
        # An empty collection up front, so reading the balance never triggers a lazy load.
        budget = Budget(owner_id=owner_id, transactions=[])
        apply_dict_updates(budget, create_data, {"id", "owner_id", "owner", "created_at", "transactions"})
        self.session.add(budget)
        await self.session.flush()
        return budget
