from __future__ import annotations

import logging
from typing import Any, Protocol, Sequence

from sqlalchemy import Engine, MetaData, Table, delete, insert, select, update
from sqlalchemy.exc import NoSuchTableError

from app.safari.core.error_catalog import AppError, ErrorCatalog

logger = logging.getLogger(__name__)

RowDict = dict[str, Any]


class RecordSource(Protocol):
    """Data access used by the table services; the database owns the schema."""

    def fetch_all(self, source: str) -> list[RowDict]: ...

    def insert_many(self, source: str, rows: Sequence[RowDict]) -> int: ...

    def update_many(self, source: str, ids: Sequence[Any], values: RowDict) -> int: ...

    def delete_many(self, source: str, ids: Sequence[Any]) -> int: ...


class SqlAlchemyRecordSource:
    def __init__(self, engine: Engine):
        self.engine = engine
        self._tables: dict[str, Table] = {}

    def table(self, source: str) -> Table:
        table = self._tables.get(source)
        if table is not None:
            return table
        try:
            table = Table(source, MetaData(), autoload_with=self.engine)
        except NoSuchTableError as exc:
            raise AppError(ErrorCatalog.TABLE_NOT_FOUND, details={"source": source}) from exc
        if "id" not in table.c:
            raise AppError(
                ErrorCatalog.VALIDATION_ERROR,
                details={"message": "Table has no id column", "source": source},
            )
        self._tables[source] = table
        return table

    def fetch_all(self, source: str) -> list[RowDict]:
        table = self.table(source)
        with self.engine.connect() as conn:
            rows = conn.execute(select(table).order_by(table.c.id)).mappings().all()
        return [dict(row) for row in rows]

    def insert_many(self, source: str, rows: Sequence[RowDict]) -> int:
        if not rows:
            return 0
        table = self.table(source)
        with self.engine.begin() as conn:
            conn.execute(insert(table), [dict(row) for row in rows])
        return len(rows)

    def update_many(self, source: str, ids: Sequence[Any], values: RowDict) -> int:
        if not ids:
            return 0
        table = self.table(source)
        with self.engine.begin() as conn:
            result = conn.execute(update(table).where(table.c.id.in_(list(ids))).values(**values))
        return result.rowcount

    def delete_many(self, source: str, ids: Sequence[Any]) -> int:
        if not ids:
            return 0
        table = self.table(source)
        with self.engine.begin() as conn:
            result = conn.execute(delete(table).where(table.c.id.in_(list(ids))))
        logger.info("deleted %s rows from %s", result.rowcount, source)
        return result.rowcount
