from .budget import BudgetService
from .ledger import LedgerService
from .user import UserService

__all__ = ["BudgetService", "LedgerService", "UserService"]
