"""Progress event and record shapes shared by every progress kind."""

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class ProgressEvent:
    """One incoming progress update.

    ``record_id`` is ``None`` when the client has no record for the
    (user, item) pair yet.
    """

    user_id: int
    item_id: int
    point_value: float
    is_active: bool
    is_completed: bool
    record_id: int | None = None


class ProgressRecord(BaseModel):
    """Persisted progress of one user on one item, as read back after a write."""

    model_config = ConfigDict(frozen=True)

    record_id: int
    user_id: int
    item_id: int
    point_value: float
    is_active: bool
    is_completed: bool
    updated_at: datetime | None = None
