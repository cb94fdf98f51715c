from .base import BaseSchema
from .catalog import CategoryRead, SubcategoryRead, SubcategoryWithCategory, DoorRead, DoorDetail
from .panel import (
    MaterialOption,
    CollectionOption,
    SupplierRead,
    PanelModelRead,
    SupplierPanelRead,
    SupplierPanelWithSupplier,
    SupplierPanelWithPanel,
    PanelWithSupplierPanels,
    PanelModelWidthsUpdate,
    SupplierPanelUpdate,
    CollectionCount,
    MaterialStats,
    SupplierDetail,
)
