"""
Domain entities for the dashboard module.
"""
from dataclasses import dataclass, field, fields, asdict
from typing import Dict, List, Optional

from ...common.exceptions import InvalidInputError

ALL = "all"


class _Summable:
    """
    Field-wise addition for stat blocks: numbers add, count mappings merge,
    nested blocks recurse.
    """
    def __add__(self, other):
        if not isinstance(other, type(self)):
            return NotImplemented
        values = {}
        for f in fields(self):
            mine, theirs = getattr(self, f.name), getattr(other, f.name)
            if isinstance(mine, dict):
                merged = dict(mine)
                for key, count in theirs.items():
                    merged[key] = merged.get(key, 0) + count
                values[f.name] = merged
            else:
                values[f.name] = mine + theirs
        return type(self)(**values)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class AccidentStats(_Summable):
    today: int = 0
    overall: int = 0
    fatal: int = 0
    non_fatal: int = 0

@dataclass
class ViolationStats(_Summable):
    total: int = 0
    reported: int = 0
    speeding: int = 0
    red_light: int = 0
    drunk_driving: int = 0
    no_helmet: int = 0

@dataclass
class ChallanStats(_Summable):
    total: int = 0
    collected_amount: float = 0.0
    pending_amount: float = 0.0
    online_payment: float = 0.0
    offline_payment: float = 0.0
    breakdown: Dict[str, int] = field(default_factory=dict)

@dataclass
class TrafficVolumeStats(_Summable):
    peak: int = 0
    off_peak: int = 0
    daily: int = 0

@dataclass
class CameraStats(_Summable):
    operational: int = 0
    total: int = 0

@dataclass
class IncidentStats(_Summable):
    """
    Every additive counter of one or more incident records.
    """
    accidents: AccidentStats = field(default_factory=AccidentStats)
    violations: ViolationStats = field(default_factory=ViolationStats)
    challans: ChallanStats = field(default_factory=ChallanStats)
    traffic_volume: TrafficVolumeStats = field(default_factory=TrafficVolumeStats)
    cameras: CameraStats = field(default_factory=CameraStats)
    enforcement_officers: int = 0
    response_time_minutes: float = 0.0


@dataclass(frozen=True)
class NormalizedRecord:
    """
    An incident record after the fill-defaults step: required fields checked,
    optional counters defaulted to zero.
    """
    center_id: str
    zone: str
    stats: IncidentStats
    district: Optional[int] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


@dataclass(frozen=True)
class DerivedMetrics:
    violation_rate_per_1000: float = 0.0
    challan_efficiency: float = 0.0
    fatal_accident_rate: float = 0.0
    camera_effectiveness: float = 0.0

    @classmethod
    def from_stats(cls, stats: IncidentStats) -> "DerivedMetrics":
        officers = stats.enforcement_officers
        return cls(
            violation_rate_per_1000=stats.violations.total / max(stats.traffic_volume.daily, 1) * 1000,
            challan_efficiency=stats.challans.total / officers if officers else 0.0,
            fatal_accident_rate=stats.accidents.fatal / max(stats.accidents.overall, 1) * 100,
            camera_effectiveness=stats.cameras.operational / max(stats.cameras.total, 1) * 100,
        )


@dataclass
class CenterAggregate:
    """
    Summed statistics of one enforcement center.
    """
    center_id: str
    zone: str
    stats: IncidentStats = field(default_factory=IncidentStats)
    record_count: int = 0
    metrics: DerivedMetrics = field(default_factory=DerivedMetrics)


@dataclass(frozen=True)
class AggregationFilter:
    """
    Active dashboard selection; "all" disables a dimension.
    """
    zone: str = ALL
    center_id: str = ALL

    def __post_init__(self):
        for name in ("zone", "center_id"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise InvalidInputError(name, "must be a non-empty string or 'all'")

    def matches_zone(self, zone: str) -> bool:
        return self.zone == ALL or zone == self.zone

    def matches_center(self, center_id: str) -> bool:
        return self.center_id == ALL or center_id == self.center_id


@dataclass
class Totals:
    """
    Field-wise sum over the filtered centers plus dashboard averages.
    """
    stats: IncidentStats = field(default_factory=IncidentStats)
    center_count: int = 0
    avg_response_time_minutes: float = 0.0
    avg_violation_rate_per_1000: float = 0.0
    avg_challan_efficiency: float = 0.0
    camera_effectiveness: float = 0.0

    @property
    def accidents(self) -> int:
        return self.stats.accidents.overall

    @property
    def violations(self) -> int:
        return self.stats.violations.total

    @property
    def challans(self) -> int:
        return self.stats.challans.total

    @property
    def revenue(self) -> float:
        return self.stats.challans.collected_amount


@dataclass
class AggregationResult:
    per_center: Dict[str, CenterAggregate]
    zones: List[str]
    center_ids: List[str]
    totals: Totals
    filter: AggregationFilter = field(default_factory=AggregationFilter)


@dataclass(frozen=True)
class CenterAdmin:
    """
    Credentials and marker position of a center's administrator.
    """
    center_id: str
    password_hash: str
    lat: float
    lng: float
    center_name: str
