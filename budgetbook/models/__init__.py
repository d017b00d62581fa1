from .base import Base
from .budget import Budget, Transaction, TransactionType
from .definitions import ROLE_USER, User

__all__ = ["Base", "Budget", "ROLE_USER", "Transaction", "TransactionType", "User"]
