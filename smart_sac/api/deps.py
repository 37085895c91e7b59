# smart_sac/api/deps.py
"""
Service providers for route handlers.

Example usage in a router:
    from fastapi import Depends, APIRouter
    from smart_sac.api import deps

    router = APIRouter()

    @router.get("/equipment")
    def list_equipment(catalog = Depends(deps.get_catalog_service)):
        return catalog.list_equipment()
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from smart_sac.db.session import Database, get_database, get_db
from smart_sac.services.dashboard import DashboardService
from smart_sac.services.equipment import (
    EquipmentCatalogService,
    EquipmentHistoryService,
    EquipmentLifecycleService,
)


def get_lifecycle_service(db: Session = Depends(get_db)) -> EquipmentLifecycleService:
    return EquipmentLifecycleService(db)


def get_history_service(db: Session = Depends(get_db)) -> EquipmentHistoryService:
    return EquipmentHistoryService(db)


def get_catalog_service(db: Session = Depends(get_db)) -> EquipmentCatalogService:
    return EquipmentCatalogService(db)


def get_dashboard_service(database: Database = Depends(get_database)) -> DashboardService:
    return DashboardService(database)


__all__ = [
    "get_db",
    "get_database",
    "get_lifecycle_service",
    "get_history_service",
    "get_catalog_service",
    "get_dashboard_service",
]
