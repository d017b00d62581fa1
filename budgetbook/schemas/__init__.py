from .budget import BudgetRequest, BudgetResponse, DashboardSummary
from .transaction import TransactionRequest, TransactionResponse
from .user import (
    ActivationRequest,
    LoginRequest,
    PasswordChangeRequest,
    TokenResponse,
    UserRequest,
    UserResponse,
)

__all__ = [
    "ActivationRequest",
    "BudgetRequest",
    "BudgetResponse",
    "DashboardSummary",
    "LoginRequest",
    "PasswordChangeRequest",
    "TokenResponse",
    "TransactionRequest",
    "TransactionResponse",
    "UserRequest",
    "UserResponse",
]
