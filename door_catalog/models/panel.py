"""
Panel models: one row per (model code, height) variant.
"""

from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship

from door_catalog.database import Base
from door_catalog.models.catalog import new_id
from door_catalog.models.types import JSONList, created_at_column, updated_at_column


class PanelModel(Base):
    __tablename__ = "panel_models"

    id = Column(String(36), primary_key=True, default=new_id)
    code = Column(String, unique=True, nullable=False)  # base code, or {base}-{height digits} for split variants
    name = Column(String, nullable=False)
    material = Column(String, nullable=False, index=True)
    collection = Column(String, nullable=False, index=True)
    height = Column(String, nullable=False)
    widths = Column(JSONList, nullable=False, default=list)
    description = Column(Text, nullable=True)
    image_url = Column(String, nullable=True)

    created_at = created_at_column()
    updated_at = updated_at_column()

    supplier_panels = relationship("SupplierPanel", back_populates="panel_model")

    def __repr__(self):
        return f"<PanelModel {self.code} ({self.height})>"
