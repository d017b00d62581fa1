import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from budgetbook.db.utils import apply_dict_updates
from budgetbook.models.definitions import User


class UserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: uuid.UUID) -> User | None:
        """Retrieves a User by their primary ID, refreshing any cached instance."""
        return await self.session.get(User, user_id, populate_existing=True)

    async def get_by_email(self, email: str) -> User | None:
        """Retrieves a User by their unique email (login ID). Expects a normalized email."""
        stmt = select(User).where(User.email == email)
        return (await self.session.scalars(stmt)).one_or_none()

    async def create(self, create_data: dict[str, Any]) -> User:
        """Creates a new User record and persists it."""
        sensitive_fields = {"id", "created_at", "updated_at"}
        user = User()
        apply_dict_updates(user, create_data, sensitive_fields)
        self.session.add(user)
        await self.session.flush()
        return user

    async def update(self, user_id: uuid.UUID, update_data: dict[str, Any]) -> User | None:
        """
        Updates user profile fields through ORM change tracking.
        The password hash and identity fields are never touched here.
        """

        user_to_update = await self.get_by_id(user_id)
        if not user_to_update:
            return None

        sensitive_fields = {"id", "email", "password_hash", "created_at", "updated_at"}
        apply_dict_updates(entity=user_to_update, update_data=update_data, excluded_attrs=sensitive_fields)

        await self.session.flush()
        await self.session.refresh(user_to_update)
        return user_to_update

    async def update_password(self, user_id: uuid.UUID, new_hashed_password: str) -> None:
        user_to_update = await self.get_by_id(user_id)
        if not user_to_update:
            return None
        user_to_update.password_hash = new_hashed_password
        await self.session.flush()
