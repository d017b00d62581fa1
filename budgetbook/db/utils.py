from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from budgetbook.core.logging import get_logger
from budgetbook.exceptions.http import StorageError

logger = get_logger(__name__)

T = TypeVar("T")


def apply_dict_updates(entity: T, update_data: dict[str, Any], excluded_attrs: set[str] | None) -> T:
    """
    Dynamically applies key-value pairs from a dictionary to a type-safe ORM entity.

    Args:
        entity: The SQLAlchemy ORM object loaded into the session. Type is inferred as T.
        update_data: Dictionary of fields and values to update.
        excluded_attrs: Attribute names to explicitly ignore/skip updating.
    """
    excluded_attrs = excluded_attrs if excluded_attrs else set()
    for key, value in update_data.items():

        if key in excluded_attrs:
            continue

        if hasattr(entity, key):
            setattr(entity, key, value)
    return entity


@asynccontextmanager
async def storage_errors(session: AsyncSession, operation: str) -> AsyncIterator[None]:
    """
    Rolls the session back and re-raises any SQLAlchemy failure inside the block
    as an opaque StorageError. Domain errors pass through untouched.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.error("storage_error", operation=operation, error=type(exc).__name__)
        raise StorageError() from exc
