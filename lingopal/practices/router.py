"""Practice API endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select

from lingopal.auth import CurrentUserId, ensure_same_user
from lingopal.database.session import DbSession
from lingopal.middleware.security import api_route_limit
from lingopal.progress.dependencies import PracticeReconciler

from .models import Practice, PracticeProgress
from .schemas import PracticeProgressListItem, PracticeProgressResponse, PracticeProgressUpsert, PracticeResponse


router = APIRouter(prefix="/api/practice", tags=["practice"], dependencies=[Depends(api_route_limit)])


@router.get("")
async def list_practices(
    session: DbSession,
    course_id: int = Query(..., gt=0, description="Course whose practices to list"),
) -> list[PracticeResponse]:
    """Retrieve the practices of a course."""
    result = await session.execute(
        select(Practice).where(Practice.course_id == course_id).order_by(Practice.practice_id)
    )
    return [PracticeResponse.model_validate(p) for p in result.scalars().all()]


@router.get("/progress")
async def list_practice_progress(
    session: DbSession,
    user_id: int = Query(..., gt=0),
) -> list[PracticeProgressListItem]:
    """Retrieve a user's progress on every started practice."""
    result = await session.execute(
        select(PracticeProgress)
        .where(PracticeProgress.user_id == user_id)
        .order_by(PracticeProgress.progress_practice_id)
    )
    return [PracticeProgressListItem.model_validate(p) for p in result.scalars().all()]


@router.post("/progress")
async def upsert_practice_progress(
    data: PracticeProgressUpsert,
    current_user_id: CurrentUserId,
    reconciler: PracticeReconciler,
) -> PracticeProgressResponse:
    """Create or update the caller's progress on a practice."""
    ensure_same_user(current_user_id, data.user_id)
    record = await reconciler.reconcile(data.to_event())
    return PracticeProgressResponse.from_record(record)
