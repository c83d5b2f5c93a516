"""Request-scoped database sessions."""

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lingopal.database.engine import engine


logger = logging.getLogger(__name__)

# Rows stay readable after commit; the progress store commits every write on its own
async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield one session per request.

    Services commit their own writes. Anything left pending when the request
    fails is rolled back here.
    """
    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            logger.debug("Rolling back session after request error")
            await session.rollback()
            raise


DbSession = Annotated[AsyncSession, Depends(get_db_session)]
