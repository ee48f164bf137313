"""
BlogNest Backend — Store Unit of Work
=======================================

What:  The transaction wrapper shared by CredentialStore and BlogStore.
How:   Opens one DocumentStore session (one transaction), lets application
       errors through unchanged and converts driver errors into StoreError.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from blognest.database import DocumentStore
from blognest.exceptions import BlogNestError, StoreError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def unit_of_work(db: DocumentStore, operation: str) -> AsyncIterator[AsyncSession]:
    """
    Runs the body in a single transaction.

    Raises:
        BlogNestError subclasses raised by the body (after rollback)
        StoreError: any SQLAlchemy failure, including commit failures
    """
    try:
        async with db.session() as session:
            yield session
    except BlogNestError:
        raise
    except SQLAlchemyError as e:
        # Driver messages can contain SQL and parameters: log, don't return
        logger.error("Store operation '%s' failed: %s", operation, str(e), exc_info=True)
        raise StoreError(
            context={"operation": operation, "error_type": type(e).__name__},
        ) from e
