from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from door_catalog.core.exceptions import RecordNotFoundError, StoreError
from door_catalog.dependencies import get_db
from door_catalog.schemas.catalog import CategoryRead, SubcategoryRead, DoorRead, DoorDetail
from door_catalog.services.catalog_service import CatalogService

router = APIRouter(
    prefix="/api",
    tags=["catalog"],
    responses={404: {"description": "Not found"}},
)

@router.get("/categories", response_model=List[CategoryRead])
async def list_categories(db: AsyncSession = Depends(get_db)):
    try:
        return await CatalogService(db).list_categories()
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to fetch categories")

@router.get("/subcategories", response_model=List[SubcategoryRead])
async def list_subcategories(
    category_id: Optional[str] = Query(None, alias="categoryId"),
    db: AsyncSession = Depends(get_db)
):
    if not category_id:
        raise HTTPException(status_code=400, detail="Category ID is required")
    try:
        return await CatalogService(db).list_subcategories(category_id)
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to fetch subcategories")

@router.get("/doors", response_model=List[DoorRead])
async def list_doors(
    subcategory_id: Optional[str] = Query(None, alias="subcategoryId"),
    db: AsyncSession = Depends(get_db)
):
    """Active doors of one subcategory, by name."""
    if not subcategory_id:
        raise HTTPException(status_code=400, detail="Subcategory ID is required")
    try:
        return await CatalogService(db).list_doors(subcategory_id)
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to fetch doors")

@router.get("/doors/{door_id}", response_model=DoorDetail)
async def door_detail(door_id: str, db: AsyncSession = Depends(get_db)):
    try:
        return await CatalogService(db).get_door(door_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Door not found")
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to fetch door")
