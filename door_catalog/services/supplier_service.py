"""
Supplier listing, per-supplier panel statistics and the price-editing list.
"""

from typing import Any, Dict, List

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from door_catalog.core.exceptions import RecordNotFoundError
from door_catalog.models.panel import PanelModel
from door_catalog.models.supplier import Supplier, SupplierPanel
from door_catalog.services.base import BaseService, store_errors


class SupplierService(BaseService):

    @store_errors("fetch suppliers")
    async def list_suppliers(self) -> List[Supplier]:
        result = await self.db.execute(
            select(Supplier).where(Supplier.is_active.is_(True)).order_by(Supplier.name)
        )
        return list(result.scalars().all())

    async def _get_supplier(self, supplier_id: str) -> Supplier:
        supplier = await self.db.get(Supplier, supplier_id)
        if supplier is None:
            raise RecordNotFoundError(f"Supplier {supplier_id} not found")
        return supplier

    @store_errors("fetch supplier")
    async def get_supplier_detail(self, supplier_id: str) -> Dict[str, Any]:
        """
        Supplier with its active panel count grouped by material, then collection.

        Both levels are sorted alphabetically.
        """
        supplier = await self._get_supplier(supplier_id)

        result = await self.db.execute(
            select(PanelModel.material, PanelModel.collection, func.count(SupplierPanel.id))
            .join(SupplierPanel.panel_model)
            .where(SupplierPanel.supplier_id == supplier_id, SupplierPanel.is_active.is_(True))
            .group_by(PanelModel.material, PanelModel.collection)
            .order_by(PanelModel.material, PanelModel.collection)
        )

        materials: Dict[str, List[Dict[str, Any]]] = {}
        total = 0
        for material, collection, count in result.all():
            materials.setdefault(material, []).append({"name": collection, "count": count})
            total += count

        return {
            "supplier": supplier,
            "total_panels": total,
            "materials": [
                {"material": material, "collections": collections}
                for material, collections in materials.items()
            ],
        }

    @store_errors("fetch supplier panels")
    async def list_supplier_panels(self, supplier_id: str) -> List[SupplierPanel]:
        """All of a supplier's panels, active or not, in price-sheet order."""
        await self._get_supplier(supplier_id)

        result = await self.db.execute(
            select(SupplierPanel)
            .join(SupplierPanel.panel_model)
            .where(SupplierPanel.supplier_id == supplier_id)
            .options(selectinload(SupplierPanel.panel_model))
            .order_by(PanelModel.material, PanelModel.collection, PanelModel.height, PanelModel.code)
        )
        return list(result.scalars().all())
