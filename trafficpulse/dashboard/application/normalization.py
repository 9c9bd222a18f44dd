"""
Single fill-defaults step run once per record on its way into the aggregator.
"""
from typing import Any, Mapping, Tuple, Union

from ...common.exceptions import MalformedRecordError
from ...common.schemas import IncidentRecord
from ...common.schemas.incident import REQUIRED_FIELDS, UNKNOWN_CENTER
from ..domain.entities import (
    AccidentStats, CameraStats, ChallanStats, IncidentStats,
    NormalizedRecord, TrafficVolumeStats, ViolationStats
)

# Dotted paths that must be present on every record
BASELINE_FIELDS: Tuple[str, ...] = REQUIRED_FIELDS


def coerce_record(item: Union[IncidentRecord, Mapping[str, Any]]) -> IncidentRecord:
    """
    Accepts a parsed record or a raw store document.
    Schema violations surface as MalformedRecordError.
    """
    if isinstance(item, IncidentRecord):
        return item
    if not isinstance(item, Mapping):
        raise MalformedRecordError(UNKNOWN_CENTER, "<record>")
    return IncidentRecord.from_document(item)


def lookup_field(record: IncidentRecord, path: str) -> Any:
    value: Any = record
    for part in path.split("."):
        value = getattr(value, part, None)
        if value is None:
            return None
    return value


def _or_zero(value):
    return value if value is not None else 0


def normalize_record(record: IncidentRecord) -> NormalizedRecord:
    """
    Checks the baseline fields and defaults every optional counter to zero.
    """
    for path in BASELINE_FIELDS:
        value = lookup_field(record, path)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise MalformedRecordError(record.center_id, path)

    acc = record.accidents
    vio = record.violations
    cha = record.challans
    vol = record.traffic_volume
    cam = record.cameras

    stats = IncidentStats(
        accidents=AccidentStats(
            today=acc.today,
            overall=acc.overall,
            fatal=_or_zero(acc.fatal),
            non_fatal=_or_zero(acc.non_fatal),
        ),
        violations=ViolationStats(
            total=vio.total,
            reported=vio.reported,
            speeding=_or_zero(vio.speeding),
            red_light=_or_zero(vio.red_light),
            drunk_driving=_or_zero(vio.drunk_driving),
            no_helmet=_or_zero(vio.no_helmet),
        ),
        challans=ChallanStats(
            total=cha.total,
            collected_amount=cha.collected_amount,
            pending_amount=_or_zero(cha.pending_amount),
            online_payment=_or_zero(cha.online_payment),
            offline_payment=_or_zero(cha.offline_payment),
            breakdown=dict(cha.breakdown or {}),
        ),
        traffic_volume=TrafficVolumeStats(
            peak=_or_zero(vol.peak) if vol else 0,
            off_peak=_or_zero(vol.off_peak) if vol else 0,
            daily=_or_zero(vol.daily) if vol else 0,
        ),
        cameras=CameraStats(
            operational=_or_zero(cam.operational) if cam else 0,
            total=_or_zero(cam.total) if cam else 0,
        ),
        enforcement_officers=_or_zero(record.enforcement_officers),
        response_time_minutes=_or_zero(record.response.avg_time_minutes) if record.response else 0.0,
    )

    location = record.location
    return NormalizedRecord(
        center_id=record.center_id,
        zone=location.zone,
        stats=stats,
        district=location.district,
        latitude=location.latitude,
        longitude=location.longitude,
    )
