"""
Dashboard data: raw records, aggregated summary and simulated decorations.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ....domain.entities import ALL, AggregationFilter
from ....application.builder import DashboardServices
from ..dependencies import get_services
from ..serializers import serialize_result

router = APIRouter(prefix="/dash", tags=["dashboard"])

@router.get("")
def fetch_dashboard_data(services: DashboardServices = Depends(get_services)):
    """Every incident record in the store, in one bulk response."""
    records = services.incidents.list_all()
    return {
        "message": "Fetch Success!",
        "data": [record.to_document() for record in records],
    }

@router.get("/summary")
def dashboard_summary(
    zone: str = Query(ALL),
    center_id: str = Query(ALL, alias="centerId"),
    services: DashboardServices = Depends(get_services),
):
    filters = AggregationFilter(zone=zone, center_id=center_id)
    result = services.aggregator.aggregate(services.incidents.list_all(), filters)
    return serialize_result(result)

@router.get("/simulation")
def dashboard_simulation(
    zone: str = Query(ALL),
    center_id: str = Query(ALL, alias="centerId"),
    seed: Optional[int] = Query(None),
    services: DashboardServices = Depends(get_services),
):
    """Demo-only predictive and trend figures. Not measurements."""
    if services.simulation is None:
        raise HTTPException(status_code=404, detail="Simulation is disabled")
    filters = AggregationFilter(zone=zone, center_id=center_id)
    result = services.aggregator.aggregate(services.incidents.list_all(), filters)
    return services.simulation.simulate(result, seed=seed)
