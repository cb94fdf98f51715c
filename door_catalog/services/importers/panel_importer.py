# door_catalog/services/importers/panel_importer.py
import logging
from typing import List

from door_catalog.models.panel import PanelModel
from door_catalog.services.importers.base import BaseImporter, SKIPPED, cell
from door_catalog.services.importers.csv_reader import CSVRow
from door_catalog.services.importers.normalize import parse_widths, parse_heights, expand_height_variants

logger = logging.getLogger(__name__)

# widths are only set on insert; the panel-models PATCH endpoint extends them afterwards
PANEL_OWNED_FIELDS = ("name", "material", "collection", "height")


class PanelImporter(BaseImporter):
    """Seeds panel models, one per (model code, height) variant."""

    entity_name = "panel model"

    async def import_row(self, row: CSVRow) -> List[str]:
        base_code = cell(row, "model_code")
        if not base_code:
            logger.warning(f"Skipping row with missing model_code: {row}")
            return [SKIPPED]

        heights = parse_heights(row.get("height"))
        if not heights:
            logger.warning(f"Skipping {base_code}: no height given")
            return [SKIPPED]

        widths = parse_widths(row.get("widths"))
        outcomes = []
        for code, height in expand_height_variants(base_code, heights):
            _, outcome = await self.upsert(
                PanelModel,
                {"code": code},
                {
                    "name": base_code,
                    "material": cell(row, "material"),
                    "collection": cell(row, "collection"),
                    "height": height,
                    "widths": widths,
                },
                owned=PANEL_OWNED_FIELDS,
            )
            logger.info(f"Panel model {outcome}: {code} with height {height}")
            outcomes.append(outcome)
        return outcomes
