# door_catalog/services/importers/door_importer.py
import logging
from decimal import Decimal
from typing import List, Union

from sqlalchemy.ext.asyncio import AsyncSession

from door_catalog.models.catalog import Category, Subcategory, Door
from door_catalog.services.importers.base import BaseImporter, SKIPPED, cell
from door_catalog.services.importers.csv_reader import CSVRow
from door_catalog.services.importers.normalize import parse_widths, parse_price

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("Category", "Subcategory", "Height", "Name")
DOOR_OWNED_FIELDS = ("widths", "subcategory_name", "category_name", "material", "height", "base_price")


class DoorImporter(BaseImporter):
    """Seeds the category > subcategory > door tree from the collection export."""

    entity_name = "door"

    def __init__(self, db: AsyncSession, default_price: Union[Decimal, float] = 500):
        super().__init__(db)
        self.default_price = default_price

    async def import_row(self, row: CSVRow) -> List[str]:
        category_name = cell(row, "Category")
        subcategory_name = cell(row, "Subcategory")
        height = cell(row, "Height")
        name = cell(row, "Name")

        if not (category_name and subcategory_name and height and name):
            logger.warning(f"Skipping incomplete row: {row}")
            return [SKIPPED]

        widths = parse_widths(row.get("Widths"))
        base_price = parse_price(row.get("Price"), default=self.default_price)

        category, _ = await self.upsert(Category, {"name": category_name}, {})
        subcategory, _ = await self.upsert(
            Subcategory,
            {"category_id": category.id, "name": subcategory_name},
            {},
        )
        door, outcome = await self.upsert(
            Door,
            {"subcategory_id": subcategory.id, "name": name},
            {
                "widths": widths,
                "subcategory_name": subcategory_name,
                "category_name": category_name,
                "material": subcategory_name.lower(),
                "height": height,
                "base_price": base_price,
            },
            owned=DOOR_OWNED_FIELDS,
        )

        logger.info(
            f"Door {outcome}: {name} ({category_name} > {subcategory_name} > {height}) "
            f"- Widths: [{', '.join(widths)}] - ${base_price}"
        )
        return [outcome]
