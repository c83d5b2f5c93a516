"""Database initialization - creates any missing tables."""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine

# Import all models to register them with Base metadata
from lingopal.courses.models import *  # noqa: F403
from lingopal.materials.models import *  # noqa: F403
from lingopal.practices.models import *  # noqa: F403
from lingopal.quizzes.models import *  # noqa: F403
from lingopal.users.models import *  # noqa: F403
from lingopal.words.models import *  # noqa: F403

from .base import Base


logger = logging.getLogger(__name__)


async def init_database(db_engine: AsyncEngine) -> None:
    """Create tables that do not exist yet.

    Server-side procedures (aggregate recompute, course progress, dropdown)
    are owned by the database and are not created here.
    """
    async with db_engine.begin() as conn:
        logger.info("Creating database tables from models...")
        await conn.run_sync(Base.metadata.create_all)
        logger.info("All tables present")
