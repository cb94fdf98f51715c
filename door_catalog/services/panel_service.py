"""
Panel model queries: material/collection pickers, filtered panel lists and
the two pricing edits (width merge, supplier panel overwrite).
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from door_catalog.core.exceptions import RecordNotFoundError
from door_catalog.models.panel import PanelModel
from door_catalog.models.supplier import SupplierPanel
from door_catalog.services.base import BaseService, store_errors


def merge_widths(existing: List[str], added: List[str]) -> List[str]:
    """Union of both lists: existing order first, new labels appended, no duplicates."""
    return list(dict.fromkeys([*existing, *added]))


class PanelService(BaseService):

    @store_errors("fetch materials")
    async def list_materials(self) -> List[Dict[str, str]]:
        result = await self.db.execute(
            select(PanelModel.material).distinct().order_by(PanelModel.material)
        )
        return [{"id": material, "name": material} for material in result.scalars().all()]

    @store_errors("fetch collections")
    async def list_collections(self, material: str) -> List[Dict[str, str]]:
        result = await self.db.execute(
            select(PanelModel.collection)
            .where(PanelModel.material == material)
            .distinct()
            .order_by(PanelModel.collection)
        )
        return [
            {"id": collection, "name": collection, "material_id": material}
            for collection in result.scalars().all()
        ]

    @store_errors("fetch panels")
    async def list_panels(
        self,
        material: Optional[str] = None,
        collection: Optional[str] = None,
        supplier_id: Optional[str] = None,
    ) -> List[PanelModel]:
        """
        Panel models matching every given filter, ordered by code.

        Filters are exact, case-sensitive equality. With ``supplier_id`` only
        panels that supplier actively offers are returned, and only that
        supplier's links are included.
        """
        query = select(PanelModel)

        if material:
            query = query.where(PanelModel.material == material)
        if collection:
            query = query.where(PanelModel.collection == collection)

        if supplier_id:
            query = query.where(
                PanelModel.supplier_panels.any(
                    (SupplierPanel.supplier_id == supplier_id) & SupplierPanel.is_active.is_(True)
                )
            )
            links = PanelModel.supplier_panels.and_(SupplierPanel.supplier_id == supplier_id)
        else:
            links = PanelModel.supplier_panels

        query = query.options(
            selectinload(links).selectinload(SupplierPanel.supplier)
        ).order_by(PanelModel.code).execution_options(populate_existing=True)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    @store_errors("update panel model")
    async def add_widths(self, panel_model_id: str, widths: List[str]) -> PanelModel:
        panel = await self.db.get(PanelModel, panel_model_id)
        if panel is None:
            raise RecordNotFoundError(f"Panel model {panel_model_id} not found")

        panel.widths = merge_widths(list(panel.widths or []), widths)
        await self.db.commit()
        await self.db.refresh(panel)
        return panel

    @store_errors("update supplier panel")
    async def update_supplier_panel(self, supplier_panel_id: str, changes: Dict[str, Any]) -> SupplierPanel:
        """Overwrite the given fields only."""
        supplier_panel = await self.db.get(SupplierPanel, supplier_panel_id)
        if supplier_panel is None:
            raise RecordNotFoundError(f"Supplier panel {supplier_panel_id} not found")

        for field, value in changes.items():
            setattr(supplier_panel, field, value)

        await self.db.commit()
        await self.db.refresh(supplier_panel)
        return supplier_panel
