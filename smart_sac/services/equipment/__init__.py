from smart_sac.services.equipment.equipment_catalog_service import EquipmentCatalogService
from smart_sac.services.equipment.equipment_history_service import EquipmentHistoryService
from smart_sac.services.equipment.equipment_lifecycle_service import (
    EquipmentLifecycleService,
    TransitionOutcome,
)

__all__ = [
    "EquipmentCatalogService",
    "EquipmentHistoryService",
    "EquipmentLifecycleService",
    "TransitionOutcome",
]
