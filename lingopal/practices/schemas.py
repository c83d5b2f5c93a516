"""Schemas for practice API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from lingopal.progress import ProgressEvent, ProgressRecord


class CourseBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    course_name: str
    course_description: str | None = None


class PracticeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    practice_id: int
    course_id: int
    practice_code: str
    practice_name: str | None = None
    practice_description: str | None = None
    course: CourseBrief | None = None


class PracticeBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    practice_code: str


class PracticeProgressResponse(BaseModel):
    """Progress of a user on one practice, in the table's own column names."""

    model_config = ConfigDict(from_attributes=True)

    progress_practice_id: int
    user_id: int
    practice_id: int
    progress_poin: float
    is_active: bool
    is_passed: bool
    updated_at: datetime | None = None

    @classmethod
    def from_record(cls, record: ProgressRecord) -> "PracticeProgressResponse":
        return cls(
            progress_practice_id=record.record_id,
            user_id=record.user_id,
            practice_id=record.item_id,
            progress_poin=record.point_value,
            is_active=record.is_active,
            is_passed=record.is_completed,
            updated_at=record.updated_at,
        )


class PracticeProgressListItem(PracticeProgressResponse):
    practice: PracticeBrief | None = None


class PracticeProgressUpsert(BaseModel):
    """Create (no ``progress_practice_id``) or update a user's practice progress."""

    progress_practice_id: int | None = Field(default=None, gt=0)
    user_id: int = Field(..., gt=0)
    practice_id: int = Field(..., gt=0)
    progress_poin: float
    is_active: bool
    is_passed: bool

    def to_event(self) -> ProgressEvent:
        return ProgressEvent(
            record_id=self.progress_practice_id,
            user_id=self.user_id,
            item_id=self.practice_id,
            point_value=self.progress_poin,
            is_active=self.is_active,
            is_completed=self.is_passed,
        )
