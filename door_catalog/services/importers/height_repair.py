# door_catalog/services/importers/height_repair.py
"""
One-shot repair that splits multi-height panel models into per-height rows.

The repair runs in three phases inside a single transaction:

1. delete the supplier links of the listed panel model codes,
2. delete those panel models,
3. create one panel model per height variant, always coded
   ``{code}-{height digits}`` so no output code is ever an input code.

Every row is validated and expanded before phase 1, so a malformed file is
rejected without touching the database, and any failure after that rolls
the whole repair back. Re-running it finds no original codes to delete and
skips variants that already exist.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from door_catalog.core.exceptions import CSVParseError, CodeConflictError
from door_catalog.models.panel import PanelModel
from door_catalog.models.supplier import SupplierPanel
from door_catalog.services.importers.base import cell
from door_catalog.services.importers.csv_reader import CSVRow
from door_catalog.services.importers.normalize import parse_widths, parse_heights, expand_height_variants

logger = logging.getLogger(__name__)


@dataclass
class RepairPlan:
    """The panel models one source row turns into."""
    base_code: str
    material: str
    collection: str
    widths: List[str]
    variants: List[Tuple[str, str]] = field(default_factory=list)


def plan_row(row: CSVRow, line_no: int) -> RepairPlan:
    base_code = cell(row, "model_code")
    if not base_code:
        raise CSVParseError(f"Line {line_no}: missing model_code")

    heights = parse_heights(row.get("height"))
    if not heights:
        raise CSVParseError(f"Line {line_no}: {base_code} has no height")

    return RepairPlan(
        base_code=base_code,
        material=cell(row, "material"),
        collection=cell(row, "collection"),
        widths=parse_widths(row.get("widths")),
        variants=expand_height_variants(base_code, heights, always_suffix=True),
    )


class PanelHeightRepair:
    """Delete-and-recreate repair for panel models listed in a CSV file."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def build_plans(self, rows: Iterable[CSVRow]) -> List[RepairPlan]:
        """Validate every row and make sure no two variants share a code."""
        plans = [plan_row(row, line_no) for line_no, row in enumerate(rows, start=2)]

        owners: Dict[str, str] = {}
        for plan in plans:
            for code, _ in plan.variants:
                if code in owners:
                    raise CodeConflictError(
                        f"Variant code {code} is produced by both {owners[code]} and {plan.base_code}"
                    )
                owners[code] = plan.base_code
        return plans

    async def run(self, rows: Iterable[CSVRow]) -> Dict[str, int]:
        """
        Apply the repair.

        Returns:
            Dict[str, int]: counts of deleted supplier links, deleted panel
            models, created variants and skipped (already present) variants.

        Raises:
            CatalogError: If the file is invalid. Nothing is deleted.
            SQLAlchemyError: If the database fails; the repair is rolled back.
        """
        plans = self.build_plans(rows)
        codes = [plan.base_code for plan in plans]
        logger.info(f"Found {len(codes)} panel models to fix: {codes}")

        stats = {
            "supplier_panels_deleted": 0,
            "panel_models_deleted": 0,
            "created": 0,
            "skipped": 0,
        }

        try:
            target_ids = select(PanelModel.id).where(PanelModel.code.in_(codes))

            result = await self.db.execute(
                delete(SupplierPanel)
                .where(SupplierPanel.panel_model_id.in_(target_ids))
                .execution_options(synchronize_session=False)
            )
            stats["supplier_panels_deleted"] = result.rowcount
            logger.info(f"Deleted {result.rowcount} supplier panels")

            result = await self.db.execute(
                delete(PanelModel)
                .where(PanelModel.code.in_(codes))
                .execution_options(synchronize_session=False)
            )
            stats["panel_models_deleted"] = result.rowcount
            logger.info(f"Deleted {result.rowcount} panel models")

            for plan in plans:
                logger.info(
                    f"Processing {plan.base_code} with heights: "
                    f"{', '.join(height for _, height in plan.variants)}"
                )
                for code, height in plan.variants:
                    existing = await self.db.execute(select(PanelModel.id).where(PanelModel.code == code))
                    if existing.scalar_one_or_none() is not None:
                        logger.warning(f"Panel model {code} already exists, skipping")
                        stats["skipped"] += 1
                        continue

                    self.db.add(PanelModel(
                        code=code,
                        name=plan.base_code,
                        material=plan.material,
                        collection=plan.collection,
                        height=height,
                        widths=list(plan.widths),
                    ))
                    await self.db.flush()
                    stats["created"] += 1
                    logger.info(f"Created panel model: {code} with height {height}")

            await self.db.commit()
        except Exception:
            await self.db.rollback()
            logger.error("Panel height repair failed, all changes rolled back")
            raise

        logger.info(
            f"Panel height fix completed: {stats['created']} created, {stats['skipped']} skipped"
        )
        return stats
