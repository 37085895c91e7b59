from fastapi import APIRouter, Depends

from smart_sac.api import deps
from smart_sac.schemas.common.response import SuccessResponse
from smart_sac.schemas.dashboard import StudentDashboard
from smart_sac.services.dashboard import DashboardService

router = APIRouter(prefix="/students", tags=["Students"])


@router.get("/{user_id}/dashboard", response_model=SuccessResponse[StudentDashboard])
def student_dashboard(user_id: str, service: DashboardService = Depends(deps.get_dashboard_service)):
    return SuccessResponse.create("Dashboard fetched", service.student_dashboard(user_id))
