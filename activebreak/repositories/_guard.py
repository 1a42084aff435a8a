from __future__ import annotations

import logging
from functools import wraps

from sqlalchemy.exc import SQLAlchemyError

from activebreak.reminders.errors import StoreUnavailable

logger = logging.getLogger(__name__)


def store_call(operation: str):
    """
    Заворачивает ошибки SQLAlchemy в StoreUnavailable и откатывает сессию,
    чтобы следующий запрос в ней не упал на PendingRollbackError.
    """
    def deco(fn):
        @wraps(fn)
        async def wrapper(self, *args, **kwargs):
            try:
                return await fn(self, *args, **kwargs)
            except SQLAlchemyError as e:
                try:
                    await self.s.rollback()
                except SQLAlchemyError:
                    logger.warning("rollback after %s failed", operation)
                raise StoreUnavailable(operation, e) from e
        return wrapper
    return deco
