from fastapi import APIRouter, Depends
from starlette.responses import RedirectResponse

from ....application.builder import DashboardServices
from ..dependencies import get_services

router = APIRouter(tags=["meta"])

@router.get("/", include_in_schema=False)
def root() -> RedirectResponse:
    # Visiting the root opens Swagger UI
    return RedirectResponse(url="/docs")

@router.get("/health")
def health(services: DashboardServices = Depends(get_services)):
    return {"status": "ok", "database": services.database.state.value}

@router.get("/metrics")
def get_metrics(services: DashboardServices = Depends(get_services)):
    return services.metrics.get_metrics().to_dict()
