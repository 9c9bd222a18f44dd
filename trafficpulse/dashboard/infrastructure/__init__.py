"""
Infrastructure module initialization.
"""
from .repositories import SQLAlchemyIncidentRepository, SQLAlchemyAdminRepository
from .security import PasswordHasher, TokenSigner
from .loaders import (
    records_to_frame, frame_to_records, load_incident_csv,
    write_incident_csv, generate_synthetic_records
)

__all__ = [
    "SQLAlchemyIncidentRepository",
    "SQLAlchemyAdminRepository",
    "PasswordHasher",
    "TokenSigner",
    "records_to_frame",
    "frame_to_records",
    "load_incident_csv",
    "write_incident_csv",
    "generate_synthetic_records",
]
