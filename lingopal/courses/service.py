"""Business logic for courses."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lingopal.config.settings import get_settings
from lingopal.progress.store import SqlRecordStore

from .models import Course, CourseProgress
from .schemas import DropdownRow


logger = logging.getLogger(__name__)


class CourseService:
    """Course listing plus the database-side course progress procedures."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.store = SqlRecordStore(session)

    async def list_courses(self) -> list[Course]:
        result = await self.session.execute(select(Course).order_by(Course.course_id))
        return list(result.scalars().all())

    async def list_progress(self, user_id: int) -> list[CourseProgress]:
        result = await self.session.execute(
            select(CourseProgress)
            .where(CourseProgress.user_id == user_id)
            .order_by(CourseProgress.progress_course_id)
        )
        return list(result.scalars().all())

    async def recalculate_progress(self, user_id: int, course_id: int) -> None:
        """Recompute course progress from its practices, then the user's total."""
        settings = get_settings()
        await self.store.call_procedure(
            settings.COURSE_PROGRESS_PROCEDURE,
            {"i_user_id": user_id, "current_course_id": course_id},
        )
        await self.store.call_procedure(settings.PROGRESS_RECOMPUTE_PROCEDURE, {"user_id": user_id})
        logger.info(f"Recalculated course {course_id} progress for user {user_id}")

    async def fetch_dropdown(self, course_category_id: int | None) -> list[DropdownRow]:
        """Courses and their practices for the dropdown, optionally per category."""
        return await self.store.call_procedure(
            get_settings().COURSE_DROPDOWN_PROCEDURE,
            {"i_course_category_id": course_category_id},
        )
