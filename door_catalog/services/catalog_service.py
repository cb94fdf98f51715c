"""
Read queries for the category > subcategory > door tree.
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from door_catalog.core.exceptions import RecordNotFoundError
from door_catalog.models.catalog import Category, Subcategory, Door
from door_catalog.services.base import BaseService, store_errors

DOOR_WITH_PARENTS = selectinload(Door.subcategory).selectinload(Subcategory.category)


class CatalogService(BaseService):

    @store_errors("fetch categories")
    async def list_categories(self) -> List[Category]:
        result = await self.db.execute(select(Category).order_by(Category.name))
        return list(result.scalars().all())

    @store_errors("fetch subcategories")
    async def list_subcategories(self, category_id: str) -> List[Subcategory]:
        result = await self.db.execute(
            select(Subcategory)
            .where(Subcategory.category_id == category_id)
            .order_by(Subcategory.name)
        )
        return list(result.scalars().all())

    @store_errors("fetch doors")
    async def list_doors(self, subcategory_id: str) -> List[Door]:
        """Active doors of a subcategory, with their subcategory and category."""
        result = await self.db.execute(
            select(Door)
            .where(Door.subcategory_id == subcategory_id, Door.is_active.is_(True))
            .options(DOOR_WITH_PARENTS)
            .order_by(Door.name)
        )
        return list(result.scalars().all())

    @store_errors("fetch door")
    async def get_door(self, door_id: str) -> Door:
        result = await self.db.execute(
            select(Door).where(Door.id == door_id).options(DOOR_WITH_PARENTS)
        )
        door = result.scalar_one_or_none()
        if door is None:
            raise RecordNotFoundError(f"Door {door_id} not found")
        return door
