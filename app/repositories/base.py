import functools
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import StorageError

logger = logging.getLogger(__name__)


def storage_errors(message: str):
    """Turn SQLAlchemy failures inside a repository method into StorageError."""
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs):
            try:
                return await func(self, *args, **kwargs)
            except SQLAlchemyError as e:
                logger.error(f"{message}: {e}")
                await self.db.rollback()
                raise StorageError(message) from e
        return wrapper
    return decorator


class BaseRepository:
    def __init__(self, db: AsyncSession):
        self.db = db
