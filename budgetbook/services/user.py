import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from budgetbook.core.logging import get_logger
from budgetbook.core.security.password import check_password, hash_password
from budgetbook.core.security.token import TokenService
from budgetbook.db.utils import storage_errors
from budgetbook.exceptions.http import AuthenticationError, DuplicateIdentityError, NotFoundError
from budgetbook.models.definitions import User
from budgetbook.repositories import UserRepository
from budgetbook.schemas import (
    ActivationRequest,
    LoginRequest,
    PasswordChangeRequest,
    TokenResponse,
    UserRequest,
    UserResponse,
)

logger = get_logger(__name__)


class UserService:
    def __init__(self, session: AsyncSession, user_repo: UserRepository, tokens: TokenService):
        self._session = session
        self._user_repo = user_repo
        self._tokens = tokens

    # --- 1. USER REGISTRATION ---

    async def register_user(self, data: UserRequest) -> UserResponse:
        """
        Registers a new, active user holding only the hashed credential.
        The unique index on email is the final arbiter if two registrations race.
        """
        async with storage_errors(self._session, "register_user"):
            if await self._user_repo.get_by_email(data.email):
                raise DuplicateIdentityError()

            new_user_data = data.model_dump(exclude={"password"})
            new_user_data["password_hash"] = hash_password(data.password)
            new_user_data["is_active"] = True
            new_user_data["roles"] = []

            try:
                created_user = await self._user_repo.create(new_user_data)
                await self._session.commit()
            except IntegrityError as exc:
                await self._session.rollback()
                raise DuplicateIdentityError() from exc

        logger.info("user_registered", user_id=str(created_user.id))
        return UserResponse.model_validate(created_user)

    # --- 2. USER AUTHENTICATION ---

    async def authenticate(self, credentials: LoginRequest) -> TokenResponse:
        """
        Verifies email and password and issues a bearer token.
        Unknown email, wrong password and inactive account fail identically.
        """
        async with storage_errors(self._session, "authenticate"):
            user = await self._user_repo.get_by_email(credentials.email)

        if not user or not user.is_active or not check_password(credentials.password, user.password_hash):
            logger.info("authentication_failed")
            raise AuthenticationError()

        return self._tokens.issue(user)

    # --- 3. PASSWORD AND ACCOUNT MANAGEMENT ---

    async def change_password(self, user: User, data: PasswordChangeRequest) -> None:
        """
        Changes the user's password after verifying the current one. Length and
        confirmation were already enforced by the request schema.
        """
        if not check_password(data.current_password, user.password_hash):
            raise AuthenticationError("Current password is incorrect.")

        async with storage_errors(self._session, "change_password"):
            await self._user_repo.update_password(user.id, hash_password(data.new_password))
            await self._session.commit()

        logger.info("password_changed", user_id=str(user.id))

    async def set_active(self, user_id: uuid.UUID, data: ActivationRequest) -> UserResponse:
        async with storage_errors(self._session, "set_active"):
            updated_user = await self._user_repo.update(user_id, data.model_dump())
            if not updated_user:
                raise NotFoundError("User not found.")
            await self._session.commit()

        logger.info("user_activation_changed", user_id=str(user_id), is_active=updated_user.is_active)
        return UserResponse.model_validate(updated_user)
