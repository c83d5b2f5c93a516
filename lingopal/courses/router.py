"""Course API endpoints."""

import logging

from fastapi import APIRouter, Depends, Query

from lingopal.auth import CurrentUserId, ensure_same_user
from lingopal.database.session import DbSession
from lingopal.middleware.security import api_route_limit
from lingopal.progress.dependencies import CourseReconciler

from .schemas import (
    CourseProgressRecalculate,
    CourseProgressResponse,
    CourseProgressUpsert,
    CourseResponse,
    DropdownRow,
    MessageResponse,
)
from .service import CourseService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/course", tags=["course"], dependencies=[Depends(api_route_limit)])


@router.get("")
async def list_courses(session: DbSession, _current_user_id: CurrentUserId) -> list[CourseResponse]:
    """Retrieve all courses with their category."""
    courses = await CourseService(session).list_courses()
    return [CourseResponse.model_validate(course) for course in courses]


@router.get("/progress")
async def list_course_progress(
    session: DbSession,
    _current_user_id: CurrentUserId,
    user_id: int = Query(..., gt=0),
) -> list[CourseProgressResponse]:
    """Retrieve a user's progress on every started course."""
    rows = await CourseService(session).list_progress(user_id)
    return [CourseProgressResponse.model_validate(row) for row in rows]


@router.post("/progress")
async def upsert_course_progress(
    data: CourseProgressUpsert,
    current_user_id: CurrentUserId,
    reconciler: CourseReconciler,
) -> CourseProgressResponse:
    """Create or update the caller's progress on a course."""
    ensure_same_user(current_user_id, data.user_id)
    record = await reconciler.reconcile(data.to_event())
    return CourseProgressResponse.from_record(record)


@router.post("/update-progress")
async def recalculate_course_progress(
    data: CourseProgressRecalculate,
    session: DbSession,
    current_user_id: CurrentUserId,
) -> MessageResponse:
    """Recalculate course progress and total points in the database."""
    ensure_same_user(current_user_id, data.user_id)
    await CourseService(session).recalculate_progress(data.user_id, data.course_id)
    return MessageResponse(message="Successfully update course progress")


@router.get("/fetch-course-dropdown")
async def fetch_course_dropdown(
    session: DbSession,
    course_category_id: int | None = Query(default=None, description="Category to filter by"),
) -> list[DropdownRow]:
    """Fetch course and practice options for a dropdown."""
    return await CourseService(session).fetch_dropdown(course_category_id)
