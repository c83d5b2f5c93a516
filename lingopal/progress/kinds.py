"""Table layouts for the trackable item kinds."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .schemas import ProgressEvent, ProgressRecord


@dataclass(frozen=True)
class ProgressKind:
    """Maps the generic progress record onto one progress table."""

    name: str
    table: str
    id_column: str
    item_column: str
    completed_column: str
    point_column: str = "progress_poin"
    active_column: str = "is_active"
    user_column: str = "user_id"
    updated_column: str = "updated_at"

    @property
    def label(self) -> str:
        return f"{self.name.capitalize()} progress"

    def insert_fields(self, event: ProgressEvent, now: datetime) -> dict[str, Any]:
        return {
            self.user_column: event.user_id,
            self.item_column: event.item_id,
            **self.update_fields(event, now),
        }

    def update_fields(self, event: ProgressEvent, now: datetime) -> dict[str, Any]:
        return {
            self.point_column: event.point_value,
            self.active_column: event.is_active,
            self.completed_column: event.is_completed,
            self.updated_column: now,
        }

    def owner_predicate(self, record_id: int, user_id: int, item_id: int) -> dict[str, Any]:
        """Match a record by id, owner and item so a guessed id cannot reach another user's row."""
        return {self.id_column: record_id, self.user_column: user_id, self.item_column: item_id}

    def to_record(self, row: Mapping[str, Any]) -> ProgressRecord:
        return ProgressRecord(
            record_id=row[self.id_column],
            user_id=row[self.user_column],
            item_id=row[self.item_column],
            point_value=row[self.point_column],
            is_active=row[self.active_column],
            is_completed=row[self.completed_column],
            updated_at=row.get(self.updated_column),
        )


PRACTICE_PROGRESS = ProgressKind(
    name="practice",
    table="t_user_practice_progress",
    id_column="progress_practice_id",
    item_column="practice_id",
    completed_column="is_passed",
)

COURSE_PROGRESS = ProgressKind(
    name="course",
    table="t_user_course_progress",
    id_column="progress_course_id",
    item_column="course_id",
    completed_column="is_course_completed",
)
