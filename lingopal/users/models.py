from datetime import date, datetime

from sqlalchemy import BigInteger, Date, DateTime, Float, ForeignKey, Identity, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lingopal.database.base import Base


class User(Base):
    """Registered learner."""

    __tablename__ = "m_users"

    user_id: Mapped[int] = mapped_column(BigInteger, Identity(), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[str | None] = mapped_column(String(32))
    birth_date: Mapped[date | None] = mapped_column(Date)
    gender: Mapped[str | None] = mapped_column(String(16))
    image: Mapped[str | None] = mapped_column(String)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=text("NOW()"))

    def __repr__(self) -> str:
        return f"<User(user_id={self.user_id}, email={self.email})>"


class UserLevel(Base):
    """Proficiency level a user's total points place them in."""

    __tablename__ = "m_user_level"

    user_level_id: Mapped[int] = mapped_column(BigInteger, Identity(), primary_key=True)
    user_level_name: Mapped[str] = mapped_column(String(64), nullable=False)
    user_level_code: Mapped[str] = mapped_column(String(16), nullable=False)


class UserProgress(Base):
    """Aggregate progress of a user; maintained by the recompute procedure."""

    __tablename__ = "t_user_progress"

    progress_id: Mapped[int] = mapped_column(BigInteger, Identity(), primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("m_users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    progress_course_id: Mapped[int | None] = mapped_column(BigInteger)
    total_poin: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    user_level_id: Mapped[int | None] = mapped_column(ForeignKey("m_user_level.user_level_id"))

    user: Mapped[User] = relationship(lazy="joined")
    level: Mapped[UserLevel | None] = relationship(lazy="joined")
