"""
Admin endpoints: equipment desk, history browsing, catalog and dashboard.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from smart_sac.api import deps
from smart_sac.schemas.common.response import SuccessResponse
from smart_sac.schemas.dashboard import AdminDashboard
from smart_sac.schemas.equipment import EquipmentCreate, EquipmentResponse, EquipmentStatusUpdate, EquipmentUpdateResult
from smart_sac.schemas.equipment_history import (
    HistoryByEquipment,
    HistoryCount,
    HistoryPage,
    HistoryQuery,
    RecentHistory,
)
from smart_sac.schemas.game import EquipmentAdded, EquipmentRemoved, GameCreate, GameResponse
from smart_sac.services.dashboard import DashboardService
from smart_sac.services.equipment import (
    EquipmentCatalogService,
    EquipmentHistoryService,
    EquipmentLifecycleService,
)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/update-equipment", response_model=SuccessResponse[EquipmentUpdateResult])
def update_equipment(
    payload: EquipmentStatusUpdate,
    service: EquipmentLifecycleService = Depends(deps.get_lifecycle_service),
):
    outcome = service.transition(
        payload.equipment_id,
        payload.status,
        occupant_hint=payload.roll_no,
        duration=payload.duration,
    )
    return SuccessResponse.create("Equipment updated", outcome.to_schema())


@router.get("/get-equipment", response_model=SuccessResponse[List[EquipmentResponse]])
def get_equipment(service: EquipmentCatalogService = Depends(deps.get_catalog_service)):
    return SuccessResponse.create("Equipment fetched", service.list_equipment())


@router.get("/get-equipment-history", response_model=SuccessResponse[HistoryPage])
def get_equipment_history(
    equipment_id: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    service: EquipmentHistoryService = Depends(deps.get_history_service),
):
    query = HistoryQuery(equipment_id=equipment_id, page=page)
    return SuccessResponse.create(
        "Equipment history fetched",
        service.list_history(query.equipment_id, query.page),
    )


@router.get("/get-no-of-equipment-history/{equipment_id}", response_model=SuccessResponse[HistoryCount])
def get_no_of_equipment_history(
    equipment_id: str,
    service: EquipmentHistoryService = Depends(deps.get_history_service),
):
    return SuccessResponse.create("History count fetched", service.count_history(equipment_id))


@router.get("/get-recent-equipment-history", response_model=SuccessResponse[RecentHistory])
def get_recent_equipment_history(service: EquipmentHistoryService = Depends(deps.get_history_service)):
    return SuccessResponse.create("Recent history fetched", service.recent_history())


@router.get(
    "/get-equipment-recent-history-dict",
    response_model=SuccessResponse[HistoryByEquipment],
)
def get_equipment_recent_history_dict(service: EquipmentHistoryService = Depends(deps.get_history_service)):
    return SuccessResponse.create("Recent history fetched", service.recent_history_by_equipment())


@router.get("/dashboard", response_model=SuccessResponse[AdminDashboard])
def admin_dashboard(service: DashboardService = Depends(deps.get_dashboard_service)):
    return SuccessResponse.create("Dashboard fetched", service.admin_dashboard())


@router.post("/add-game", response_model=SuccessResponse[GameResponse], status_code=201)
def add_game(payload: GameCreate, service: EquipmentCatalogService = Depends(deps.get_catalog_service)):
    return SuccessResponse.create("Game added", service.add_game(payload.name))


@router.post("/remove-game", response_model=SuccessResponse[GameResponse])
def remove_game(
    name: str = Query(..., min_length=1),
    service: EquipmentCatalogService = Depends(deps.get_catalog_service),
):
    return SuccessResponse.create("Game removed", service.remove_game(name))


@router.post("/add-equipment", response_model=SuccessResponse[EquipmentAdded], status_code=201)
def add_equipment(payload: EquipmentCreate, service: EquipmentCatalogService = Depends(deps.get_catalog_service)):
    return SuccessResponse.create("Equipment added", service.add_equipment(payload.game_name, payload.name))


@router.post("/remove-equipment", response_model=SuccessResponse[EquipmentRemoved])
def remove_equipment(
    game_name: str = Query(..., min_length=1),
    name: str = Query(..., min_length=1),
    service: EquipmentCatalogService = Depends(deps.get_catalog_service),
):
    return SuccessResponse.create("Equipment removed", service.remove_equipment(game_name, name))
