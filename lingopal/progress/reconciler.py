"""Create-or-update of per-user progress records.

A progress event either creates the (user, item) record or updates the one
the client already holds, then asks the database to recompute the user's
point total. The write is committed first and a failed recompute is only
logged, so the total can lag behind the records until the next successful
recompute.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from lingopal.exceptions import DuplicateRecordError, ResourceNotFoundError, StoreUnavailableError, ValidationError

from .kinds import ProgressKind
from .schemas import ProgressEvent, ProgressRecord
from .store import RecordStore


logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _is_identifier(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class ProgressReconciler:
    """Maps progress events for one kind onto its progress table."""

    def __init__(
        self,
        store: RecordStore,
        kind: ProgressKind,
        recompute_procedure: str,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.store = store
        self.kind = kind
        self.recompute_procedure = recompute_procedure
        self._clock = clock

    async def reconcile(self, event: ProgressEvent) -> ProgressRecord:
        """Persist ``event`` and return the record as written.

        Raises
        ------
        ValidationError
            ``user_id`` or ``item_id`` is missing or not a positive integer.
        ResourceNotFoundError
            ``record_id`` does not exist for this user and item.
        DuplicateRecordError
            A create raced another create for the same (user, item).
        StoreUnavailableError
            The write failed in the store.
        """
        self._validate(event)
        now = self._clock()

        operation = "create" if event.record_id is None else "update"
        try:
            if event.record_id is None:
                record_id = await self._create(event, now)
            else:
                await self._update(event, now)
                record_id = event.record_id
        except StoreUnavailableError:
            logger.exception(f"{self.kind.label} {operation} failed for {self._describe(event)}")
            raise

        await self._recompute(event)

        return self.kind.to_record({**self.kind.insert_fields(event, now), self.kind.id_column: record_id})

    def _describe(self, event: ProgressEvent) -> str:
        return f"user {event.user_id}, {self.kind.item_column} {event.item_id}, record {event.record_id}"

    def _validate(self, event: ProgressEvent) -> None:
        if not _is_identifier(event.user_id):
            msg = "user_id must be a positive integer"
            raise ValidationError(msg)
        if not _is_identifier(event.item_id):
            msg = f"{self.kind.item_column} must be a positive integer"
            raise ValidationError(msg)
        if event.record_id is not None and not _is_identifier(event.record_id):
            msg = f"{self.kind.id_column} must be a positive integer or omitted"
            raise ValidationError(msg)

    async def _create(self, event: ProgressEvent, now: datetime) -> int:
        try:
            record_id = await self.store.insert(
                self.kind.table, self.kind.insert_fields(event, now), returning=self.kind.id_column
            )
        except DuplicateRecordError as e:
            logger.info(f"{self.kind.label} already exists for {self._describe(event)}")
            raise DuplicateRecordError(self.kind.label) from e

        logger.info(f"Created {self.kind.label.lower()} {record_id} for {self._describe(event)}")
        return record_id

    async def _update(self, event: ProgressEvent, now: datetime) -> None:
        affected = await self.store.update(
            self.kind.table,
            self.kind.owner_predicate(event.record_id, event.user_id, event.item_id),
            self.kind.update_fields(event, now),
        )
        if affected == 0:
            logger.info(f"No {self.kind.label.lower()} to update for {self._describe(event)}")
            raise ResourceNotFoundError(self.kind.label, str(event.record_id))
        logger.info(f"Updated {self.kind.label.lower()} for {self._describe(event)}")

    async def _recompute(self, event: ProgressEvent) -> None:
        """Ask the database to recompute the user's total; never raises."""
        try:
            await self.store.call_procedure(self.recompute_procedure, {"user_id": event.user_id})
        except Exception:
            logger.exception(
                f"Recompute {self.recompute_procedure} failed after {self.kind.label.lower()} write for "
                f"{self._describe(event)}; user total may be stale"
            )
