"""
Load candidate records with insert-or-ignore / upsert semantics
"""

import json
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Sequence

from sqlalchemy import delete, select, and_
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import DBAPIError, OperationalError, StatementError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import DatabaseError
from models.audit import AuditLog
from models.base import AuditAction
from schemas.records import RecordBase
from schemas.report import BatchResult, LoadOutcome, OutcomeKind
import logging

logger = logging.getLogger(__name__)


class LoadMode(str, Enum):
    INSERT_OR_IGNORE = "insert_or_ignore"
    UPSERT = "upsert"


@dataclass(frozen=True)
class InsertSpec:
    """
    How a batch is written.

    conflict_keys is the table's natural key; on conflict the row is either
    left alone (INSERT_OR_IGNORE) or overwritten (UPSERT).
    """
    model: Any
    conflict_keys: Sequence[str]
    mode: LoadMode = LoadMode.INSERT_OR_IGNORE

    @property
    def table_name(self) -> str:
        return self.model.__tablename__


@dataclass
class StepJournal:
    """Primary keys of rows inserted during one step, per model"""
    step_id: str
    inserted: Dict[Any, List[Any]] = field(default_factory=lambda: defaultdict(list))

    def record(self, model, pk) -> None:
        self.inserted[model].append(pk)

    @property
    def total(self) -> int:
        return sum(len(ids) for ids in self.inserted.values())


class SQLLoader:
    """
    Write validated records into the store.

    Ensures:
    - A natural-key conflict is counted as skipped (or updated, for upserts)
    - A malformed record fails alone; the rest of the batch still loads
    - Every record is committed on its own
    """

    def __init__(self, db_session: AsyncSession, journal: StepJournal = None):
        self.db = db_session
        self.journal = journal

    def _insert(self, model):
        dialect = self.db.bind.dialect.name
        if dialect == "sqlite":
            return sqlite.insert(model)
        if dialect == "postgresql":
            return postgresql.insert(model)
        raise DatabaseError(
            f"Unsupported database dialect: {dialect}",
            context={"operation": "INSERT", "table_name": model.__tablename__}
        )

    def _statement(self, row: Dict[str, Any], spec: InsertSpec):
        stmt = self._insert(spec.model).values(**row)

        if spec.mode == LoadMode.UPSERT:
            stmt = stmt.on_conflict_do_update(
                index_elements=list(spec.conflict_keys),
                set_={
                    column: stmt.excluded[column]
                    for column in row
                    if column not in spec.conflict_keys
                }
            )
        else:
            stmt = stmt.on_conflict_do_nothing(index_elements=list(spec.conflict_keys))

        return stmt.returning(spec.model.id)

    async def _exists(self, row: Dict[str, Any], spec: InsertSpec) -> bool:
        conditions = [getattr(spec.model, key) == row[key] for key in spec.conflict_keys]
        result = await self.db.execute(select(spec.model.id).where(and_(*conditions)))
        return result.first() is not None

    async def load_one(self, record: RecordBase, spec: InsertSpec) -> LoadOutcome:
        row = record.to_row()
        key = "/".join(str(row.get(k)) for k in spec.conflict_keys)

        try:
            existed = spec.mode == LoadMode.UPSERT and await self._exists(row, spec)
            result = await self.db.execute(self._statement(row, spec))
            pk = result.scalar_one_or_none()
            await self.db.commit()

        except OperationalError as e:
            await self.db.rollback()
            raise DatabaseError(
                f"Database unavailable while loading {spec.table_name}",
                context={"operation": spec.mode.value, "table_name": spec.table_name, "record": key},
                original_exception=e
            )

        except (DBAPIError, StatementError) as e:
            await self.db.rollback()
            reason = str(getattr(e, "orig", None) or e).splitlines()[0]
            logger.error(f"Failed to load {spec.table_name} record {key}: {reason}")
            return LoadOutcome(kind=OutcomeKind.FAILED_MALFORMED, key=key, reason=reason)

        if pk is None:
            logger.debug(f"Skipped existing {spec.table_name} record {key}")
            return LoadOutcome(kind=OutcomeKind.SKIPPED_DUPLICATE, key=key)

        if existed:
            return LoadOutcome(kind=OutcomeKind.UPDATED, key=key, record_id=pk)

        if self.journal is not None:
            self.journal.record(spec.model, pk)
        return LoadOutcome(kind=OutcomeKind.INSERTED, key=key, record_id=pk)

    async def load_batch(self, records: Iterable[RecordBase], spec: InsertSpec) -> BatchResult:
        """
        Load records one by one.

        Args:
            records: Validated create-schemas
            spec: Target model, natural key and conflict mode

        Returns:
            BatchResult with per-record outcomes
        """
        batch = BatchResult(table=spec.table_name)

        for record in records:
            batch.add(await self.load_one(record, spec))

        logger.info(
            f"Loaded {spec.table_name}: {batch.inserted_count} inserted, "
            f"{batch.updated_count} updated, {batch.skipped_count} skipped, "
            f"{batch.failed_count} failed"
        )
        return batch

    # ------------------------------------------------------------------
    # Step rollback
    # ------------------------------------------------------------------

    async def delete_inserted(self, journal: StepJournal) -> int:
        """
        Delete every row a step inserted, recording each in the audit log.

        Returns:
            Number of rows deleted
        """
        deleted = 0

        try:
            for model, ids in journal.inserted.items():
                if not ids:
                    continue

                result = await self.db.execute(select(model).where(model.id.in_(ids)))
                for row in result.scalars().all():
                    self.db.add(AuditLog(
                        entity_type=model.__tablename__,
                        entity_id=str(row.id),
                        action=AuditAction.DELETE,
                        old_values=json.dumps(_snapshot(row), default=str),
                        user_id=f"migration:{journal.step_id}",
                    ))

                result = await self.db.execute(delete(model).where(model.id.in_(ids)))
                deleted += result.rowcount or 0

            await self.db.commit()

        except DBAPIError as e:
            await self.db.rollback()
            raise DatabaseError(
                f"Failed to clear rows inserted by {journal.step_id}",
                context={"operation": "DELETE", "step_id": journal.step_id},
                original_exception=e
            )

        logger.info(f"Cleared {deleted} rows inserted by {journal.step_id}")
        return deleted


def _snapshot(row) -> Dict[str, Any]:
    return {column.name: getattr(row, column.key) for column in row.__mapper__.columns}
