from typing import Any

from sqlalchemy import BigInteger, ForeignKey, Identity, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from lingopal.database.base import Base


class Quiz(Base):
    """A single question inside a practice."""

    __tablename__ = "m_quiz"

    quiz_id: Mapped[int] = mapped_column(BigInteger, Identity(), primary_key=True)
    practice_id: Mapped[int] = mapped_column(
        ForeignKey("m_practice.practice_id", ondelete="CASCADE"), nullable=False, index=True
    )
    question: Mapped[str] = mapped_column(Text, nullable=False)
    options: Mapped[list[Any] | None] = mapped_column(JSONB)
    answer: Mapped[str | None] = mapped_column(String(255))
