from fastapi import HTTPException, Request

from ...application.builder import DashboardServices

def get_services(request: Request) -> DashboardServices:
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise HTTPException(status_code=503, detail="Dashboard services not initialized")
    return services
