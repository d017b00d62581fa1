import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from budgetbook.models.budget import Transaction


class TransactionRepository:
    """
    Data access for the append-only ledger. There is deliberately no update
    or delete; new rows are linked through ``Budget.add_transaction`` first.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_in_budget(self, budget_id: uuid.UUID, transaction_id: int) -> Transaction | None:
        """Retrieves a Transaction only if it belongs to the given budget."""
        stmt = select(Transaction).where(Transaction.id == transaction_id, Transaction.budget_id == budget_id)
        return (await self.session.scalars(stmt)).one_or_none()

    async def add(self, transaction: Transaction) -> Transaction:
        """Persists a linked transaction; the flush assigns its id and created_at."""
        self.session.add(transaction)
        await self.session.flush()
        return transaction
