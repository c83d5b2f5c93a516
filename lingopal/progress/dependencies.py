"""FastAPI wiring for the progress reconcilers."""

from typing import Annotated

from fastapi import Depends

from lingopal.config.settings import get_settings
from lingopal.database.session import DbSession

from .kinds import COURSE_PROGRESS, PRACTICE_PROGRESS
from .reconciler import ProgressReconciler
from .store import SqlRecordStore


def get_record_store(session: DbSession) -> SqlRecordStore:
    return SqlRecordStore(session)


RecordStoreDep = Annotated[SqlRecordStore, Depends(get_record_store)]


def get_practice_reconciler(store: RecordStoreDep) -> ProgressReconciler:
    return ProgressReconciler(store, PRACTICE_PROGRESS, get_settings().PROGRESS_RECOMPUTE_PROCEDURE)


def get_course_reconciler(store: RecordStoreDep) -> ProgressReconciler:
    return ProgressReconciler(store, COURSE_PROGRESS, get_settings().PROGRESS_RECOMPUTE_PROCEDURE)


PracticeReconciler = Annotated[ProgressReconciler, Depends(get_practice_reconciler)]
CourseReconciler = Annotated[ProgressReconciler, Depends(get_course_reconciler)]
