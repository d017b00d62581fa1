import uuid
from decimal import Decimal
from enum import Enum as PyEnum

from sqlalchemy import DECIMAL, Enum, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin
from .definitions import User

ZERO = Decimal("0.00")
CENTS = Decimal("0.01")


class TransactionType(str, PyEnum):
    INCOME = "income"
    EXPENSE = "expense"


class Budget(Base, TimestampMixin):
    """
    The Budget Table (T_Budget).
    A named container owned by exactly one User. Its balance is never stored:
    it is folded from the transactions currently attached to it.
    """

    __tablename__ = "budgets"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4, comment="Unique Budget ID.")
    name: Mapped[str] = mapped_column(String(255), nullable=False, comment="Budget name (required).")
    description: Mapped[str | None] = mapped_column(Text, nullable=True, comment="Optional free-text description.")

    owner_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey(User.id), nullable=False, index=True, comment="The owning user; set once at creation."
    )

    owner: Mapped[User] = relationship(back_populates="budgets", lazy="raise")
    transactions: Mapped[list["Transaction"]] = relationship(
        back_populates="budget",
        cascade="all, delete-orphan",
        order_by="Transaction.id",
    )

    def add_transaction(self, transaction: "Transaction") -> "Transaction":
        """
        The only way a transaction joins a budget. Appending to the collection
        sets ``transaction.budget`` through the back reference, so both sides
        always agree.
        """
        if transaction.budget is not None and transaction.budget is not self:
            raise ValueError("Transaction already belongs to another budget.")
        if transaction not in self.transactions:
            self.transactions.append(transaction)
        return transaction

    def remove_transaction(self, transaction: "Transaction") -> None:
        # Internal relationship maintenance only; the ledger exposes no removal.
        if transaction in self.transactions:
            self.transactions.remove(transaction)

    @property
    def total_income(self) -> Decimal:
        return _sum_of(self.transactions, TransactionType.INCOME)

    @property
    def total_expense(self) -> Decimal:
        return _sum_of(self.transactions, TransactionType.EXPENSE)

    @property
    def balance(self) -> Decimal:
        return (self.total_income - self.total_expense).quantize(CENTS)


class Transaction(Base, TimestampMixin):
    """
    The Transaction Table (T_Transaction) - an append-only ledger entry.
    The amount is never negative; the sign lives entirely in ``type``.
    """

    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True, comment="Unique, increasing ID.")
    amount: Mapped[Decimal] = mapped_column(
        DECIMAL(12, 2, asdecimal=True), nullable=False, comment="Non-negative amount with 2 decimal places."
    )
    type: Mapped[TransactionType] = mapped_column(
        Enum(TransactionType, values_callable=lambda e: [m.value for m in e], native_enum=False, length=10),
        nullable=False,
        comment="income | expense",
    )
    comment: Mapped[str] = mapped_column(String(255), nullable=False, comment="Required description.")

    budget_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey(Budget.id), nullable=False, index=True, comment="The budget this entry belongs to."
    )
    budget: Mapped[Budget | None] = relationship(back_populates="transactions")


def _sum_of(transactions: list[Transaction], kind: TransactionType) -> Decimal:
    # Decimal start value keeps the fold exact; never mix in floats here.
    return sum((Decimal(t.amount) for t in transactions if t.type == kind), ZERO)
