"""
Domain repositories for the dashboard module.
"""
from typing import List, Optional, Protocol
from ...common.schemas import IncidentRecord
from .entities import CenterAdmin

class IncidentRepository(Protocol):
    """
    Read access to incident snapshots (plus save, used for seeding).
    """
    def find_by_coordinate(self, lat: float, lng: float, tolerance: float) -> Optional[IncidentRecord]:
        ...

    def list_all(self) -> List[IncidentRecord]:
        ...

    def save(self, record: IncidentRecord) -> None:
        ...

class AdminRepository(Protocol):
    """
    Storage of center admin credentials.
    """
    def get(self, center_id: str) -> Optional[CenterAdmin]:
        ...

    def list_all(self) -> List[CenterAdmin]:
        ...

    def add(self, admin: CenterAdmin) -> None:
        ...
