import copy
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import MalformedRecordError
from ..logging import setup_logger

logger = setup_logger("trafficpulse.schemas")

UNKNOWN_CENTER = "<unknown>"

# Dotted paths every incident record must carry with a valid value
REQUIRED_FIELDS = (
    "location.zone",
    "accidents.today",
    "accidents.overall",
    "violations.total",
    "violations.reported",
    "challans.total",
    "challans.collected_amount",
)

_REQUIRED_PATHS = set(REQUIRED_FIELDS) | {"challans.collectedAmount", "centerId", "center_id"}


def _is_required(path: str) -> bool:
    """True when the path is, contains or lies inside a required field."""
    return any(
        path == required or required.startswith(path + ".") or path.startswith(required + ".")
        for required in _REQUIRED_PATHS
    )


def _discard(document: Dict[str, Any], loc) -> bool:
    node = document
    for part in loc[:-1]:
        if not isinstance(node, dict) or part not in node:
            return False
        node = node[part]
    if isinstance(node, dict) and loc[-1] in node:
        del node[loc[-1]]
        return True
    return False


class _Section(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

class Location(_Section):
    """
    Fixed position and grouping of an enforcement center.
    """
    zone: Optional[str] = Field(None, description="Coarse grouping label (region name)")
    district: Optional[int] = Field(None, description="District number")
    latitude: Optional[float] = Field(None, description="Latitude")
    longitude: Optional[float] = Field(None, description="Longitude")

class Violations(_Section):
    total: Optional[int] = Field(None, ge=0, description="Violations detected")
    reported: Optional[int] = Field(None, ge=0, description="Violations reported")
    speeding: Optional[int] = Field(None, ge=0)
    red_light: Optional[int] = Field(None, ge=0, alias="redLight")
    drunk_driving: Optional[int] = Field(None, ge=0, alias="drunkDriving")
    no_helmet: Optional[int] = Field(None, ge=0, alias="noHelmet")

class Challans(_Section):
    total: Optional[int] = Field(None, ge=0, description="Citations issued")
    collected_amount: Optional[float] = Field(
        None, ge=0, validation_alias=AliasChoices("collected_amount", "collectedAmount"),
        description="Fines actually paid",
    )
    breakdown: Optional[Dict[str, int]] = Field(None, description="Violation type -> citation count")
    pending_amount: Optional[float] = Field(None, ge=0)
    online_payment: Optional[float] = Field(None, ge=0)
    offline_payment: Optional[float] = Field(None, ge=0)

class Accidents(_Section):
    today: Optional[int] = Field(None, ge=0)
    overall: Optional[int] = Field(None, ge=0)
    fatal: Optional[int] = Field(None, ge=0)
    non_fatal: Optional[int] = Field(None, ge=0, alias="nonFatal")

class TrafficVolume(_Section):
    peak: Optional[int] = Field(None, ge=0)
    off_peak: Optional[int] = Field(None, ge=0, alias="offPeak")
    daily: Optional[int] = Field(None, ge=0)

class Cameras(_Section):
    operational: Optional[int] = Field(None, ge=0)
    total: Optional[int] = Field(None, ge=0)

class ResponseStats(_Section):
    avg_time_minutes: Optional[float] = Field(None, ge=0, alias="avgTimeMinutes")

class IncidentRecord(_Section):
    """
    One enforcement center's current snapshot of accident, violation and
    challan counters. Every section is optional here; required fields are
    enforced when the record enters the aggregator.
    """
    center_id: str = Field(..., alias="centerId", min_length=1, description="Enforcement center identifier")
    date: Optional[datetime] = Field(None, description="Reporting date of the snapshot")
    location: Optional[Location] = None
    violations: Optional[Violations] = None
    challans: Optional[Challans] = None
    accidents: Optional[Accidents] = None
    weather_conditions: Optional[str] = None
    peak_hour: Optional[bool] = None
    enforcement_officers: Optional[int] = Field(None, ge=0)
    traffic_volume: Optional[TrafficVolume] = Field(None, alias="trafficVolume")
    cameras: Optional[Cameras] = None
    response: Optional[ResponseStats] = None

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "IncidentRecord":
        """
        Parses a store document. Invalid values in extended fields are
        discarded so they fall back to their defaults; schema violations in a
        required field raise MalformedRecordError naming the center and field.
        """
        if not isinstance(document, Mapping):
            raise MalformedRecordError(UNKNOWN_CENTER, "<record>")
        center_id = str(document.get("centerId") or document.get("center_id") or UNKNOWN_CENTER)
        working = copy.deepcopy(dict(document))
        discarded = []

        while True:
            try:
                record = cls.model_validate(working)
                break
            except ValidationError as e:
                fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
                locs = [err["loc"] for err in e.errors()]
                for field in fields:
                    if not field or _is_required(field):
                        raise MalformedRecordError(center_id, field or "<record>") from e
                removed = [field for field, loc in zip(fields, locs) if _discard(working, loc)]
                if not removed:
                    raise MalformedRecordError(center_id, fields[0]) from e
                discarded.extend(removed)

        if discarded:
            logger.warning(f"Center {center_id}: ignored invalid extended fields {discarded}")
        return record

    def to_document(self) -> dict:
        """Store/wire form: camelCase keys, unset sections dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
