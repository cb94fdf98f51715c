from .catalog import Category, Subcategory, Door
from .panel import PanelModel
from .supplier import Supplier, SupplierPanel

# This ensures all models are registered with SQLAlchemy
__all__ = [
    'Category',
    'Subcategory',
    'Door',
    'PanelModel',
    'Supplier',
    'SupplierPanel',
]
