from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from door_catalog.core.exceptions import RecordNotFoundError, StoreError
from door_catalog.dependencies import get_db
from door_catalog.schemas.panel import SupplierRead, SupplierDetail, SupplierPanelWithPanel
from door_catalog.services.supplier_service import SupplierService

router = APIRouter(
    prefix="/api/suppliers",
    tags=["suppliers"],
    responses={404: {"description": "Not found"}},
)

@router.get("", response_model=List[SupplierRead])
async def list_suppliers(db: AsyncSession = Depends(get_db)):
    """Active suppliers by name."""
    try:
        return await SupplierService(db).list_suppliers()
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to fetch suppliers")

@router.get("/{supplier_id}", response_model=SupplierDetail)
async def supplier_detail(supplier_id: str, db: AsyncSession = Depends(get_db)):
    """Supplier with active panel counts per material and collection."""
    try:
        detail = await SupplierService(db).get_supplier_detail(supplier_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Supplier not found")
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to fetch supplier")

    return SupplierDetail(
        supplier=SupplierRead.model_validate(detail["supplier"]),
        total_panels=detail["total_panels"],
        materials=detail["materials"],
    )

@router.get("/{supplier_id}/panels", response_model=List[SupplierPanelWithPanel])
async def supplier_panels(supplier_id: str, db: AsyncSession = Depends(get_db)):
    """Every panel of a supplier, in the order the price editor lists them."""
    try:
        return await SupplierService(db).list_supplier_panels(supplier_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Supplier not found")
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to fetch supplier panels")
