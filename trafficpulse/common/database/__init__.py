from .database import Base, ConnectionState, Database
from .models import IncidentRecordDB, CenterAdminDB

__all__ = [
    "Base", "ConnectionState", "Database",
    "IncidentRecordDB", "CenterAdminDB",
]
