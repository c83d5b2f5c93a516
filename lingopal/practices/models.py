from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Float, ForeignKey, Identity, String, Text, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lingopal.courses.models import Course
from lingopal.database.base import Base


class Practice(Base):
    """A practice belongs to a course and holds quizzes."""

    __tablename__ = "m_practice"

    practice_id: Mapped[int] = mapped_column(BigInteger, Identity(), primary_key=True)
    course_id: Mapped[int] = mapped_column(ForeignKey("m_course.course_id", ondelete="CASCADE"), nullable=False, index=True)
    practice_code: Mapped[str] = mapped_column(String(64), nullable=False)
    practice_name: Mapped[str | None] = mapped_column(String(255))
    practice_description: Mapped[str | None] = mapped_column(Text)

    course: Mapped[Course] = relationship(lazy="joined")


class PracticeProgress(Base):
    """Progress of one user on one practice."""

    __tablename__ = "t_user_practice_progress"
    __table_args__ = (UniqueConstraint("user_id", "practice_id", name="uq_user_practice_progress"),)

    progress_practice_id: Mapped[int] = mapped_column(BigInteger, Identity(), primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("m_users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    practice_id: Mapped[int] = mapped_column(ForeignKey("m_practice.practice_id", ondelete="CASCADE"), nullable=False)
    progress_poin: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_passed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), server_default=text("NOW()"))

    practice: Mapped[Practice] = relationship(lazy="joined")
