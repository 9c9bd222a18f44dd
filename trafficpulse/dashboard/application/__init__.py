"""
Application services for the dashboard module.
"""
from .normalization import normalize_record, coerce_record, lookup_field, BASELINE_FIELDS
from .aggregator import IncidentAggregator, aggregate
from .geo_resolver import GeoResolver
from .admin_service import AdminService
from .simulation import SimulationService
from .builder import DashboardBuilder, DashboardServices

__all__ = [
    "normalize_record",
    "coerce_record",
    "lookup_field",
    "BASELINE_FIELDS",
    "IncidentAggregator",
    "aggregate",
    "GeoResolver",
    "AdminService",
    "SimulationService",
    "DashboardBuilder",
    "DashboardServices",
]
