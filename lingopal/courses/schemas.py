"""Schemas for course API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from lingopal.progress import ProgressEvent, ProgressRecord


class CategoryBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    course_category_name: str


class CourseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    course_id: int
    course_name: str
    course_description: str | None = None
    min_poin: float
    user_level_id: int | None = None
    category: CategoryBrief | None = None


class CourseProgressResponse(BaseModel):
    """Progress of a user on one course, in the table's own column names."""

    model_config = ConfigDict(from_attributes=True)

    progress_course_id: int
    user_id: int
    course_id: int
    progress_poin: float
    is_active: bool
    is_course_completed: bool
    updated_at: datetime | None = None

    @classmethod
    def from_record(cls, record: ProgressRecord) -> "CourseProgressResponse":
        return cls(
            progress_course_id=record.record_id,
            user_id=record.user_id,
            course_id=record.item_id,
            progress_poin=record.point_value,
            is_active=record.is_active,
            is_course_completed=record.is_completed,
            updated_at=record.updated_at,
        )


class CourseProgressUpsert(BaseModel):
    """Create (no ``progress_course_id``) or update a user's course progress."""

    progress_course_id: int | None = Field(default=None, gt=0)
    user_id: int = Field(..., gt=0)
    course_id: int = Field(..., gt=0)
    progress_poin: float
    is_active: bool
    is_course_completed: bool

    def to_event(self) -> ProgressEvent:
        return ProgressEvent(
            record_id=self.progress_course_id,
            user_id=self.user_id,
            item_id=self.course_id,
            point_value=self.progress_poin,
            is_active=self.is_active,
            is_completed=self.is_course_completed,
        )


class CourseProgressRecalculate(BaseModel):
    user_id: int = Field(..., gt=0)
    course_id: int = Field(..., gt=0)


class MessageResponse(BaseModel):
    message: str


DropdownRow = dict[str, Any]
