from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Float, ForeignKey, Identity, String, Text, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lingopal.database.base import Base


class CourseCategory(Base):
    __tablename__ = "m_course_category"

    course_category_id: Mapped[int] = mapped_column(BigInteger, Identity(), primary_key=True)
    course_category_name: Mapped[str] = mapped_column(String(128), nullable=False)


class Course(Base):
    """A course groups practices and unlocks at a minimum point total."""

    __tablename__ = "m_course"

    course_id: Mapped[int] = mapped_column(BigInteger, Identity(), primary_key=True)
    course_name: Mapped[str] = mapped_column(String(255), nullable=False)
    course_description: Mapped[str | None] = mapped_column(Text)
    min_poin: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    user_level_id: Mapped[int | None] = mapped_column(ForeignKey("m_user_level.user_level_id"))
    course_category_id: Mapped[int | None] = mapped_column(ForeignKey("m_course_category.course_category_id"))

    category: Mapped[CourseCategory | None] = relationship(lazy="joined")


class CourseProgress(Base):
    """Progress of one user on one course."""

    __tablename__ = "t_user_course_progress"
    __table_args__ = (UniqueConstraint("user_id", "course_id", name="uq_user_course_progress"),)

    progress_course_id: Mapped[int] = mapped_column(BigInteger, Identity(), primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("m_users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    course_id: Mapped[int] = mapped_column(ForeignKey("m_course.course_id", ondelete="CASCADE"), nullable=False)
    progress_poin: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_course_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), server_default=text("NOW()"))
