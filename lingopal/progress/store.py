"""Record store used by the progress core.

The core only needs three calls: insert returning the generated id, update
reporting affected rows, and named server-side procedures.
``SqlRecordStore`` implements them on an ``AsyncSession``; tests substitute an
in-memory store.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any, Protocol

from psycopg.errors import UniqueViolation
from sqlalchemy import MetaData, Table, and_, bindparam, func, insert, literal_column, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lingopal.database.base import Base
from lingopal.exceptions import DuplicateRecordError, StoreUnavailableError


logger = logging.getLogger(__name__)

_PROCEDURE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class RecordStore(Protocol):
    """Predicate-based access to the relational store."""

    async def insert(self, table: str, fields: Mapping[str, Any], returning: str) -> Any:
        """Insert one row and return the value of the ``returning`` column."""
        ...

    async def update(self, table: str, predicate: Mapping[str, Any], fields: Mapping[str, Any]) -> int:
        """Update rows matching every predicate column; return the affected row count."""
        ...

    async def call_procedure(self, name: str, params: Mapping[str, Any]) -> list[dict[str, Any]]:
        """Run a named server-side procedure and return its rows."""
        ...


def _is_unique_violation(exc: IntegrityError) -> bool:
    return isinstance(exc.orig, UniqueViolation) or "unique" in str(exc).lower()


class SqlRecordStore:
    """RecordStore backed by SQLAlchemy Core statements on an async session.

    Each write commits on its own so a later failure (for example in a
    procedure call) never rolls it back.
    """

    def __init__(self, session: AsyncSession, metadata: MetaData | None = None) -> None:
        self._session = session
        self._metadata = metadata if metadata is not None else Base.metadata

    def _table(self, name: str) -> Table:
        try:
            return self._metadata.tables[name]
        except KeyError:
            msg = f"Unknown table: {name}"
            raise ValueError(msg) from None

    @staticmethod
    def _where(table: Table, predicate: Mapping[str, Any]) -> Any:
        return and_(*(table.c[column] == value for column, value in predicate.items()))

    async def insert(self, table: str, fields: Mapping[str, Any], returning: str) -> Any:
        tbl = self._table(table)
        stmt = insert(tbl).values(**fields).returning(tbl.c[returning])
        try:
            result = await self._session.execute(stmt)
            new_id = result.scalar_one()
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            if _is_unique_violation(e):
                raise DuplicateRecordError(table) from e
            raise
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise StoreUnavailableError("insert", table) from e
        return new_id

    async def update(self, table: str, predicate: Mapping[str, Any], fields: Mapping[str, Any]) -> int:
        tbl = self._table(table)
        stmt = update(tbl).where(self._where(tbl, predicate)).values(**fields)
        try:
            result = await self._session.execute(stmt)
            await self._session.commit()
        except IntegrityError:
            await self._session.rollback()
            raise
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise StoreUnavailableError("update", table) from e
        return result.rowcount

    async def call_procedure(self, name: str, params: Mapping[str, Any]) -> list[dict[str, Any]]:
        if not _PROCEDURE_NAME.match(name):
            msg = f"Invalid procedure name: {name!r}"
            raise ValueError(msg)

        procedure = getattr(func, name)(*(bindparam(key, value) for key, value in params.items()))
        stmt = select(literal_column("*")).select_from(procedure)
        try:
            result = await self._session.execute(stmt)
            rows = [dict(row) for row in result.mappings().all()]
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise StoreUnavailableError("call_procedure", name) from e

        logger.debug("Procedure %s returned %d row(s)", name, len(rows))
        return rows
