# door_catalog/services/importers/supplier_panel_importer.py
import logging
from decimal import Decimal
from typing import Dict, List, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from door_catalog.core.exceptions import RecordNotFoundError
from door_catalog.models.panel import PanelModel
from door_catalog.models.supplier import Supplier, SupplierPanel
from door_catalog.services.importers.base import BaseImporter, SKIPPED, cell
from door_catalog.services.importers.csv_reader import CSVRow
from door_catalog.services.importers.normalize import (
    parse_widths, parse_heights, parse_price, expand_height_variants
)

logger = logging.getLogger(__name__)

SUPPLIER_PANEL_OWNED_FIELDS = ("base_price", "price_per_width", "lead_time", "is_active")


def build_price_per_width(widths: List[str], price: Decimal) -> Dict[str, float]:
    """Same price for every width until per-width prices are edited by hand."""
    return {width: float(price) for width in widths}


class SupplierAwareImporter(BaseImporter):
    """Importer that writes supplier links for one configured supplier."""

    always_suffix = False

    def __init__(self, db: AsyncSession, supplier_id: str):
        super().__init__(db)
        self.supplier_id = supplier_id
        self.supplier_name: Optional[str] = None

    async def prepare(self) -> None:
        supplier = await self.db.get(Supplier, self.supplier_id)
        if supplier is None:
            raise RecordNotFoundError(f"Supplier with ID {self.supplier_id} not found")
        # kept as a plain string: a row rollback expires ORM instances
        self.supplier_name = supplier.name
        logger.info(f"Using supplier: {supplier.name} ({supplier.id})")

    def variant_codes(self, row: CSVRow) -> List[str]:
        base_code = cell(row, "model_code")
        heights = parse_heights(row.get("height"))
        if not heights:
            return [base_code]
        return [code for code, _ in expand_height_variants(base_code, heights, self.always_suffix)]


class SupplierPanelImporter(SupplierAwareImporter):
    """
    Attaches a supplier's price list to existing panel models.

    Rows whose panel model code is unknown are skipped; the supplier must
    already exist or the whole run is refused.
    """

    entity_name = "supplier panel"

    def __init__(self, db: AsyncSession, supplier_id: str, lead_time: str = "2-3 weeks"):
        super().__init__(db, supplier_id)
        self.lead_time = lead_time

    async def import_row(self, row: CSVRow) -> List[str]:
        if not cell(row, "model_code"):
            logger.warning(f"Skipping row with missing model_code: {row}")
            return [SKIPPED]

        panels = []
        for code in self.variant_codes(row):
            panel = await self.find_one(PanelModel, code=code)
            if panel is None:
                raise RecordNotFoundError(f"Panel model with code {code} not found")
            panels.append(panel)

        base_price = parse_price(row.get("price"))
        row_widths = parse_widths(row.get("widths"))

        outcomes = []
        for panel in panels:
            widths = row_widths or list(panel.widths or [])
            unknown = [width for width in widths if width not in (panel.widths or [])]
            if unknown:
                logger.warning(
                    f"{panel.code}: pricing widths {unknown} that the panel model does not list"
                )

            _, outcome = await self.upsert(
                SupplierPanel,
                {"supplier_id": self.supplier_id, "panel_model_id": panel.id},
                {
                    "base_price": base_price,
                    "price_per_width": build_price_per_width(widths, base_price),
                    "lead_time": self.lead_time,
                    "is_active": True,
                },
                owned=SUPPLIER_PANEL_OWNED_FIELDS,
            )
            logger.info(f"Supplier panel {outcome}: {self.supplier_name} / {panel.code} - ${base_price}")
            outcomes.append(outcome)
        return outcomes


class SupplierPanelReattacher(SupplierAwareImporter):
    """
    Re-links a supplier to the variants produced by the height repair.

    The repair drops supplier links together with the original panel
    models; this recreates them at a placeholder price. Existing links are
    only re-activated so edited prices survive a re-run.
    """

    entity_name = "supplier panel"
    always_suffix = True

    def __init__(self, db: AsyncSession, supplier_id: str, base_price: Union[Decimal, float] = 100):
        super().__init__(db, supplier_id)
        self.base_price = Decimal(str(base_price))

    async def import_row(self, row: CSVRow) -> List[str]:
        if not cell(row, "model_code"):
            logger.warning(f"Skipping row with missing model_code: {row}")
            return [SKIPPED]

        outcomes = []
        for code in self.variant_codes(row):
            panel = await self.find_one(PanelModel, code=code)
            if panel is None:
                logger.warning(f"Panel model not found: {code}")
                outcomes.append(SKIPPED)
                continue

            _, outcome = await self.upsert(
                SupplierPanel,
                {"supplier_id": self.supplier_id, "panel_model_id": panel.id},
                {"base_price": self.base_price, "is_active": True},
                owned=("is_active",),
            )
            logger.info(f"Supplier panel {outcome} for {code} with height {panel.height}")
            outcomes.append(outcome)
        return outcomes
