"""
Schemas for panel models, the material/collection pickers and supplier pricing.
"""

from typing import Dict, List, Optional

from pydantic import Field, field_validator

from door_catalog.schemas.base import BaseSchema


class MaterialOption(BaseSchema):
    id: str
    name: str


class CollectionOption(BaseSchema):
    id: str
    name: str
    material_id: str


class SupplierRead(BaseSchema):
    id: str
    name: str
    location: Optional[str] = None
    is_active: bool


class PanelModelRead(BaseSchema):
    id: str
    code: str
    name: str
    material: str
    collection: str
    height: str
    widths: List[str]
    description: Optional[str] = None
    image_url: Optional[str] = None


class SupplierPanelRead(BaseSchema):
    id: str
    supplier_id: str
    panel_model_id: str
    base_price: float
    price_per_width: Optional[Dict[str, float]] = None
    lead_time: Optional[str] = None
    is_active: bool


class SupplierPanelWithSupplier(SupplierPanelRead):
    supplier: SupplierRead


class SupplierPanelWithPanel(SupplierPanelRead):
    panel_model: PanelModelRead


class PanelWithSupplierPanels(PanelModelRead):
    supplier_panels: List[SupplierPanelWithSupplier] = []


class PanelModelWidthsUpdate(BaseSchema):
    """Widths to add to a panel model. Existing widths are never removed."""
    widths: List[str]


class SupplierPanelUpdate(BaseSchema):
    """Fields left out of the request body are not touched."""
    base_price: Optional[float] = Field(default=None, ge=0)
    price_per_width: Optional[Dict[str, float]] = None
    is_active: Optional[bool] = None

    @field_validator('base_price', 'is_active')
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f'{info.field_name} cannot be null')
        return v


class CollectionCount(BaseSchema):
    name: str
    count: int


class MaterialStats(BaseSchema):
    material: str
    collections: List[CollectionCount]


class SupplierDetail(BaseSchema):
    supplier: SupplierRead
    total_panels: int
    materials: List[MaterialStats]
