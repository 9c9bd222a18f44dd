"""
Domain module initialization.
"""
from .entities import (
    ALL,
    AccidentStats,
    ViolationStats,
    ChallanStats,
    TrafficVolumeStats,
    CameraStats,
    IncidentStats,
    NormalizedRecord,
    DerivedMetrics,
    CenterAggregate,
    AggregationFilter,
    Totals,
    AggregationResult,
    CenterAdmin
)
from .repositories import IncidentRepository, AdminRepository
