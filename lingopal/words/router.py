from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlalchemy import select

from lingopal.auth import CurrentUserId
from lingopal.database.session import DbSession
from lingopal.middleware.security import api_route_limit

from .models import Word


class WordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    word: str
    alphabet: str


router = APIRouter(prefix="/api/word", tags=["word"], dependencies=[Depends(api_route_limit)])


@router.get("")
async def list_words(session: DbSession, _current_user_id: CurrentUserId) -> list[WordResponse]:
    """Retrieve the word list."""
    result = await session.execute(select(Word).order_by(Word.alphabet, Word.word))
    return [WordResponse.model_validate(w) for w in result.scalars().all()]
