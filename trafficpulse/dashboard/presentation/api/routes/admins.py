"""
Center admin registration and login.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .....common.exceptions import AuthenticationError
from .....common.schemas import AdminCreate, AdminLogin, AdminPublic, AdminToken
from ....application.builder import DashboardServices
from ..dependencies import get_services

router = APIRouter(prefix="/admins", tags=["admins"])
bearer_scheme = HTTPBearer(auto_error=False)

@router.post("", response_model=AdminPublic, status_code=201)
def add_admin(data: AdminCreate, services: DashboardServices = Depends(get_services)):
    """
    Registers the admin of a center.

    Body example:
    {"centerID": "C001", "password": "secret123", "lat": 18.52, "lng": 73.85, "centerName": "Shivajinagar"}
    """
    admin = services.admin_service.add_admin(data)
    return services.admin_service.to_public(admin)

@router.get("", response_model=List[AdminPublic])
def list_admins(services: DashboardServices = Depends(get_services)):
    return [services.admin_service.to_public(a) for a in services.admin_service.list_admins()]

@router.post("/login", response_model=AdminToken)
def login(credentials: AdminLogin, services: DashboardServices = Depends(get_services)):
    token = services.admin_service.authenticate(credentials.center_id, credentials.password)
    return AdminToken(access_token=token, center_id=credentials.center_id)

@router.get("/me", response_model=AdminPublic)
def current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    services: DashboardServices = Depends(get_services),
):
    if credentials is None:
        raise AuthenticationError("Missing bearer token")
    admin = services.admin_service.current_admin(credentials.credentials)
    return services.admin_service.to_public(admin)
