"""
Models for the door catalog: categories, subcategories and doors.

Doors carry denormalized copies of their category and subcategory names so
listing pages can render without joins.
"""

import uuid

from sqlalchemy import Column, String, Numeric, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from door_catalog.database import Base
from door_catalog.models.types import JSONList, created_at_column, updated_at_column


def new_id() -> str:
    return str(uuid.uuid4())


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, unique=True, nullable=False)

    created_at = created_at_column()
    updated_at = updated_at_column()

    subcategories = relationship("Subcategory", back_populates="category")

    def __repr__(self):
        return f"<Category {self.name}>"


class Subcategory(Base):
    __tablename__ = "subcategories"
    __table_args__ = (
        UniqueConstraint("category_id", "name", name="uq_subcategories_category_id_name"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=False, index=True)

    created_at = created_at_column()
    updated_at = updated_at_column()

    category = relationship("Category", back_populates="subcategories")
    doors = relationship("Door", back_populates="subcategory")

    def __repr__(self):
        return f"<Subcategory {self.name}>"


class Door(Base):
    __tablename__ = "doors"
    __table_args__ = (
        UniqueConstraint("subcategory_id", "name", name="uq_doors_subcategory_id_name"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    subcategory_id = Column(String(36), ForeignKey("subcategories.id"), nullable=False, index=True)

    # Denormalized for listing pages
    category_name = Column(String, nullable=False)
    subcategory_name = Column(String, nullable=False)

    material = Column(String, nullable=False, index=True)  # lower-cased subcategory name
    height = Column(String, nullable=False)                 # size label, e.g. 6'8"
    widths = Column(JSONList, nullable=False, default=list)
    base_price = Column(Numeric(10, 2), nullable=False, default=500)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = created_at_column()
    updated_at = updated_at_column()

    subcategory = relationship("Subcategory", back_populates="doors")

    @property
    def image_path(self) -> str:
        """Static image location, laid out by category/material/height/name."""
        return f"/images/doors/{self.category_name.lower()}/{self.material}/{self.height}/{self.name}.png"

    def __repr__(self):
        return f"<Door {self.name} ({self.category_name} > {self.subcategory_name})>"
