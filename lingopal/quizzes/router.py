"""Quiz API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict
from sqlalchemy import select

from lingopal.database.session import DbSession
from lingopal.middleware.security import api_route_limit

from .models import Quiz


class QuizResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    quiz_id: int
    practice_id: int
    question: str
    options: list[Any] | None = None
    answer: str | None = None


router = APIRouter(prefix="/api/quiz", tags=["quiz"], dependencies=[Depends(api_route_limit)])


@router.get("")
async def list_quizzes(
    session: DbSession,
    practice_id: int | None = Query(default=None, gt=0, description="Only quizzes of this practice"),
) -> list[QuizResponse]:
    """Retrieve quizzes, optionally for a single practice."""
    query = select(Quiz).order_by(Quiz.quiz_id)
    if practice_id is not None:
        query = query.where(Quiz.practice_id == practice_id)
    result = await session.execute(query)
    return [QuizResponse.model_validate(q) for q in result.scalars().all()]
