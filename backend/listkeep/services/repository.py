"""Repository Base — statement execution with StoreError mapping for every service.

Invariants:
    - Every statement goes through _execute; every commit through _commit
    - A failing statement or commit rolls the session back, then raises StoreError
    - Nothing is retried
"""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from listkeep.core.errors import StoreError

logger = logging.getLogger(__name__)


class Repository:
    """Shared plumbing for the store-facing services."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _execute(self, statement, operation: str, params: Any = None):
        try:
            if params is None:
                return await self.db.execute(statement)
            return await self.db.execute(statement, params)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Statement failed: %s", e,
                         extra={"operation": operation, "error_code": "STORE_ERROR"})
            raise StoreError(str(e), operation) from e

    async def _commit(self, operation: str) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Commit failed: %s", e,
                         extra={"operation": operation, "error_code": "STORE_ERROR"})
            raise StoreError(str(e), operation) from e
