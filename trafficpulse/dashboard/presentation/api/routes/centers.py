"""
Center lookup (map marker click) and marker listing.
"""
from typing import Any, List

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from .....common.schemas import AdminPublic, CenterLookupResponse
from ....application.builder import DashboardServices
from ..dependencies import get_services

router = APIRouter(tags=["centers"])

@router.post(
    "/centre",
    response_model=CenterLookupResponse,
    responses={404: {"description": "No center at this coordinate"}},
)
def resolve_centre(payload: Any = Body(...), services: DashboardServices = Depends(get_services)):
    """
    Resolves a marker coordinate to its center's headline counters.

    Body example:
    {"lat": 18.5204, "lng": 73.8567}
    """
    response = services.resolver.lookup(payload)
    if response is None:
        return JSONResponse({"error": "No data found"}, status_code=404)
    return response

@router.get("/centers", response_model=List[AdminPublic])
def list_center_markers(services: DashboardServices = Depends(get_services)):
    """Registered centers with their marker positions."""
    return services.admin_service.markers()
