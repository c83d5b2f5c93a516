"""Progress module: create-or-update of per-user progress records."""

from lingopal.progress.kinds import COURSE_PROGRESS, PRACTICE_PROGRESS, ProgressKind
from lingopal.progress.reconciler import ProgressReconciler
from lingopal.progress.schemas import ProgressEvent, ProgressRecord
from lingopal.progress.store import RecordStore, SqlRecordStore


__all__ = [
    "COURSE_PROGRESS",
    "PRACTICE_PROGRESS",
    "ProgressEvent",
    "ProgressKind",
    "ProgressReconciler",
    "ProgressRecord",
    "RecordStore",
    "SqlRecordStore",
]
