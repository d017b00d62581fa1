from .budget import BudgetRepository
from .transaction import TransactionRepository
from .user import UserRepository

__all__ = ["BudgetRepository", "TransactionRepository", "UserRepository"]
