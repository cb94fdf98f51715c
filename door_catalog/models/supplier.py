"""
Suppliers and their per-panel pricing.
"""

from sqlalchemy import Column, String, Numeric, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from door_catalog.database import Base
from door_catalog.models.catalog import new_id
from door_catalog.models.types import JSONDict, created_at_column, updated_at_column


class Supplier(Base):
    __tablename__ = "suppliers"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    location = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = created_at_column()
    updated_at = updated_at_column()

    supplier_panels = relationship("SupplierPanel", back_populates="supplier")

    def __repr__(self):
        return f"<Supplier {self.name}>"


class SupplierPanel(Base):
    __tablename__ = "supplier_panels"
    __table_args__ = (
        UniqueConstraint("supplier_id", "panel_model_id", name="uq_supplier_panels_supplier_id_panel_model_id"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    supplier_id = Column(String(36), ForeignKey("suppliers.id"), nullable=False, index=True)
    panel_model_id = Column(String(36), ForeignKey("panel_models.id"), nullable=False, index=True)

    base_price = Column(Numeric(10, 2), nullable=False)
    price_per_width = Column(JSONDict, nullable=True)  # width label -> price override
    lead_time = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = created_at_column()
    updated_at = updated_at_column()

    supplier = relationship("Supplier", back_populates="supplier_panels")
    panel_model = relationship("PanelModel", back_populates="supplier_panels")

    def __repr__(self):
        return f"<SupplierPanel {self.supplier_id} / {self.panel_model_id}>"
