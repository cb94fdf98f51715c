"""
Schemas for the category > subcategory > door endpoints.
"""

from typing import List

from door_catalog.schemas.base import BaseSchema


class CategoryRead(BaseSchema):
    id: str
    name: str


class SubcategoryRead(BaseSchema):
    id: str
    name: str
    category_id: str


class SubcategoryWithCategory(SubcategoryRead):
    category: CategoryRead


class DoorRead(BaseSchema):
    id: str
    name: str
    subcategory_id: str
    category_name: str
    subcategory_name: str
    material: str
    height: str
    widths: List[str]
    base_price: float
    is_active: bool
    subcategory: SubcategoryWithCategory


class DoorDetail(DoorRead):
    image_path: str
