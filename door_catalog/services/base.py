# door_catalog/services/base.py
import functools
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from door_catalog.core.exceptions import StoreError

logger = logging.getLogger(__name__)


def store_errors(action: str):
    """Roll back and re-raise database failures as StoreError."""
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs):
            try:
                return await func(self, *args, **kwargs)
            except SQLAlchemyError as e:
                await self.db.rollback()
                logger.error(f"Database error while trying to {action}: {e}")
                raise StoreError(f"Failed to {action}") from e
        return wrapper
    return decorator


class BaseService:
    def __init__(self, db: AsyncSession):
        self.db = db
