# door_catalog/services/importers/base.py
"""
Shared upsert orchestration for the CSV import commands.

Each importer owns a different subset of columns on the rows it touches,
so they stay separate classes; what they share is the per-row loop, the
natural-key upsert and the partial-failure policy implemented here.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from door_catalog.core.exceptions import CatalogError, RecordNotFoundError
from door_catalog.services.importers.csv_reader import CSVRow

logger = logging.getLogger(__name__)

CREATED = "created"
UPDATED = "updated"
UNCHANGED = "unchanged"
SKIPPED = "skipped"


def new_stats() -> Dict[str, int]:
    return {
        "total": 0,
        CREATED: 0,
        UPDATED: 0,
        UNCHANGED: 0,
        SKIPPED: 0,
        "errors": 0,
    }


def cell(row: CSVRow, column: str) -> str:
    """Trimmed cell value; a column missing from the file reads as ''."""
    value = row.get(column)
    return value.strip() if value else ""


class BaseImporter:
    """
    Row-by-row importer with natural-key upserts.

    Subclasses implement ``import_row`` and may override ``prepare`` for
    checks that must pass before any row is read (e.g. a referenced supplier
    existing). Each row is committed on its own; a row that fails is rolled
    back, logged and skipped while the rest of the file carries on.

    Attributes:
        db (AsyncSession): Session the rows are written through.
        stats (Dict[str, int]): Row and entity counters for the current run.
    """

    entity_name = "row"

    def __init__(self, db: AsyncSession):
        self.db = db
        self.stats = new_stats()

    async def prepare(self) -> None:
        """Top-level prerequisite checks. Errors raised here abort the run."""
        return None

    async def import_row(self, row: CSVRow) -> List[str]:
        """Import one row and return one outcome per entity written."""
        raise NotImplementedError

    async def run(self, rows: Iterable[CSVRow]) -> Dict[str, int]:
        """
        Import every row in source order.

        Returns:
            Dict[str, int]: total rows plus created/updated/unchanged/skipped
            entity counts and the number of failed rows.

        Raises:
            CatalogError: If ``prepare`` fails or the row source itself
                cannot be read. Row-level failures never propagate.
        """
        self.stats = new_stats()
        await self.prepare()

        # header is line 1
        for line_no, row in enumerate(rows, start=2):
            self.stats["total"] += 1
            try:
                outcomes = await self.import_row(row)
                await self.db.commit()
            except RecordNotFoundError as e:
                await self.db.rollback()
                self.stats[SKIPPED] += 1
                logger.warning(f"Line {line_no}: {e}, skipping")
                continue
            except (CatalogError, SQLAlchemyError) as e:
                await self.db.rollback()
                self.stats["errors"] += 1
                logger.error(f"Line {line_no}: failed to import {self.entity_name}: {e}")
                continue

            for outcome in outcomes:
                self.stats[outcome] += 1

        logger.info(
            f"Imported {self.stats['total']} rows: created {self.stats[CREATED]}, "
            f"updated {self.stats[UPDATED]}, unchanged {self.stats[UNCHANGED]}, "
            f"skipped {self.stats[SKIPPED]}, errors {self.stats['errors']}"
        )
        return self.stats

    async def find_one(self, model: Type[Any], **key: Any) -> Optional[Any]:
        result = await self.db.execute(select(model).filter_by(**key))
        return result.scalar_one_or_none()

    async def upsert(
        self,
        model: Type[Any],
        key: Dict[str, Any],
        values: Dict[str, Any],
        owned: Iterable[str] = (),
    ) -> Tuple[Any, str]:
        """
        Insert ``model(**key, **values)`` or update an existing row in place.

        Only the ``owned`` fields are written on update; columns that other
        importers or the PATCH endpoints maintain are left alone.
        """
        instance = await self.find_one(model, **key)
        if instance is None:
            instance = model(**key, **values)
            self.db.add(instance)
            await self.db.flush()
            return instance, CREATED

        changed = False
        for field in owned:
            if getattr(instance, field) != values[field]:
                setattr(instance, field, values[field])
                changed = True

        if not changed:
            return instance, UNCHANGED

        await self.db.flush()
        return instance, UPDATED
