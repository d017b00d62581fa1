import functools
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from budgetbook.core.security.token import TokenService
from budgetbook.db.utils import storage_errors
from budgetbook.exceptions.http import AuthenticationError
from budgetbook.models.definitions import ROLE_USER, User
from budgetbook.repositories import UserRepository


class AccessGuard:
    """
    Resolves an ``Authorization`` header value to the acting User.
    Must run before any budget or transaction operation.
    """

    def __init__(self, user_repo: UserRepository, tokens: TokenService, required_role: str = ROLE_USER):
        self._user_repo = user_repo
        self._tokens = tokens
        self._required_role = required_role

    async def resolve(self, authorization: str | None) -> User:
        if not authorization:
            raise AuthenticationError("Authentication required.")

        scheme, _, token = authorization.strip().partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise AuthenticationError("Authentication required.")

        user_id = self._tokens.resolve_subject(token.strip())
        async with storage_errors(self._user_repo.session, "resolve_identity"):
            user = await self._user_repo.get_by_id(user_id)

        if not user or not user.is_active or self._required_role not in user.all_roles:
            raise AuthenticationError()
        return user


R = TypeVar("R")


def require_identity(
    handler: Callable[..., Awaitable[R]],
) -> Callable[..., Awaitable[R]]:
    """
    Wraps ``handler(identity, *args, **kwargs)`` so callers pass the guard and
    the raw ``Authorization`` value instead of an identity.
    """

    @functools.wraps(handler)
    async def wrapper(guard: AccessGuard, authorization: str | None, *args: Any, **kwargs: Any) -> R:
        identity = await guard.resolve(authorization)
        return await handler(identity, *args, **kwargs)

    return wrapper
