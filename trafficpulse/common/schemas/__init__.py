from .incident import (
    IncidentRecord, Location, Violations, Challans, Accidents,
    TrafficVolume, Cameras, ResponseStats
)
from .center import Coordinate, CenterLookupResponse
from .admin import AdminCreate, AdminLogin, AdminPublic, AdminToken

__all__ = [
    "IncidentRecord",
    "Location",
    "Violations",
    "Challans",
    "Accidents",
    "TrafficVolume",
    "Cameras",
    "ResponseStats",
    "Coordinate",
    "CenterLookupResponse",
    "AdminCreate",
    "AdminLogin",
    "AdminPublic",
    "AdminToken",
]
