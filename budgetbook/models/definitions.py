import uuid
from typing import TYPE_CHECKING

from sqlalchemy import JSON, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import AuditMixin, Base

if TYPE_CHECKING:
    from .budget import Budget

ROLE_USER = "ROLE_USER"

# --- CORE IDENTITY ENTITY ---


class User(Base, AuditMixin):
    """
    The User Definition Table (T_User).
    The account holder: logs in with email and password and owns budgets.

    Email is stored trimmed and lower-cased, so uniqueness is case-insensitive.
    Users are never hard-deleted; they are deactivated instead.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4, comment="Unique User ID.")

    email: Mapped[str] = mapped_column(
        String(180),
        nullable=False,
        unique=True,
        index=True,
        comment="User's unique email address, used as the login identifier.",
    )

    password_hash: Mapped[str] = mapped_column(
        String(255), nullable=False, comment="Secured hash of the user's password."
    )

    is_active: Mapped[bool] = mapped_column(
        default=True, comment="Inactive users cannot authenticate or use issued tokens."
    )

    roles: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list, comment="Extra roles; ROLE_USER is always implied."
    )

    budgets: Mapped[list["Budget"]] = relationship(back_populates="owner", lazy="raise")

    @property
    def all_roles(self) -> list[str]:
        roles = list(self.roles or [])
        if ROLE_USER not in roles:
            roles.append(ROLE_USER)
        return roles
