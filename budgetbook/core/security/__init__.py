from .guard import AccessGuard, require_identity
from .password import check_password, hash_password
from .token import TokenService

__all__ = ["AccessGuard", "TokenService", "check_password", "hash_password", "require_identity"]
