from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from door_catalog.core.exceptions import RecordNotFoundError, StoreError
from door_catalog.dependencies import get_db
from door_catalog.schemas.panel import (
    MaterialOption,
    CollectionOption,
    PanelModelRead,
    PanelWithSupplierPanels,
    PanelModelWidthsUpdate,
    SupplierPanelRead,
    SupplierPanelUpdate,
)
from door_catalog.services.panel_service import PanelService

router = APIRouter(
    prefix="/api",
    tags=["panels"],
    responses={404: {"description": "Not found"}},
)

@router.get("/materials", response_model=List[MaterialOption])
async def list_materials(db: AsyncSession = Depends(get_db)):
    """Distinct panel materials, alphabetical."""
    try:
        return await PanelService(db).list_materials()
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to fetch materials")

@router.get("/collections", response_model=List[CollectionOption])
async def list_collections(
    material: Optional[str] = None,
    db: AsyncSession = Depends(get_db)
):
    """Distinct collections of one material, alphabetical."""
    if not material:
        raise HTTPException(status_code=400, detail="Material is required")
    try:
        return await PanelService(db).list_collections(material)
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to fetch collections")

@router.get("/panels", response_model=List[PanelWithSupplierPanels])
async def list_panels(
    material: Optional[str] = None,
    collection: Optional[str] = None,
    supplier_id: Optional[str] = Query(None, alias="supplierId"),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await PanelService(db).list_panels(material, collection, supplier_id)
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to fetch panels")

@router.patch("/panel-models/{panel_model_id}", response_model=PanelModelRead)
async def add_panel_model_widths(
    panel_model_id: str,
    body: PanelModelWidthsUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Merge widths into a panel model. Widths are only ever added."""
    try:
        return await PanelService(db).add_widths(panel_model_id, body.widths)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Panel model not found")
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to update panel model")

@router.patch("/supplier-panels/{supplier_panel_id}", response_model=SupplierPanelRead)
async def update_supplier_panel(
    supplier_panel_id: str,
    body: SupplierPanelUpdate,
    db: AsyncSession = Depends(get_db)
):
    try:
        return await PanelService(db).update_supplier_panel(
            supplier_panel_id, body.model_dump(exclude_unset=True)
        )
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Supplier panel not found")
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to update supplier panel")
