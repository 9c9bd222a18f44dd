"""
Re-identifies an enforcement center from a marker coordinate.

This is a point-identity check with floating point slack, not a nearest
neighbour search: a coordinate that drifted beyond the tolerance resolves to
nothing, and callers show a "no data for this location" state.
"""
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from ...common.exceptions import InvalidInputError, MalformedRecordError
from ...common.logging import setup_logger
from ...common.metrics import QueryMetricsCollector
from ...common.schemas import CenterLookupResponse, Coordinate, IncidentRecord
from ..domain.repositories import IncidentRepository
from .normalization import lookup_field

logger = setup_logger("trafficpulse.geo_resolver")

DEFAULT_TOLERANCE = 0.00001

RESPONSE_FIELDS = (
    "location.zone",
    "location.district",
    "location.latitude",
    "location.longitude",
    "violations.total",
    "violations.reported",
    "challans.total",
    "challans.collected_amount",
    "accidents.today",
    "accidents.overall",
)


class GeoResolver:
    """
    Finds the incident record whose stored position lies within
    `tolerance` degrees of the query on both axes.
    """

    def __init__(
        self,
        repository: IncidentRepository,
        tolerance: float = DEFAULT_TOLERANCE,
        metrics: Optional[QueryMetricsCollector] = None,
    ):
        self.repository = repository
        self.tolerance = tolerance
        self.metrics = metrics

    def resolve(self, coordinate: Coordinate) -> Optional[IncidentRecord]:
        """
        Returns the matching record, or None when nothing is within tolerance.
        Several matches resolve to the first in store order.
        """
        record = self.repository.find_by_coordinate(coordinate.lat, coordinate.lng, self.tolerance)
        if self.metrics:
            self.metrics.record_lookup(found=record is not None)
        if record is None:
            logger.info(f"No center at ({coordinate.lat}, {coordinate.lng})")
        return record

    def resolve_payload(self, payload: Any) -> Optional[IncidentRecord]:
        """Validates a raw {lat, lng} body, then resolves it."""
        return self.resolve(self.parse_coordinate(payload))

    def lookup(self, payload: Any) -> Optional[CenterLookupResponse]:
        record = self.resolve_payload(payload)
        if record is None:
            return None
        return self.to_response(record)

    @staticmethod
    def parse_coordinate(payload: Any) -> Coordinate:
        if not isinstance(payload, Mapping):
            raise InvalidInputError("body", "expected an object with numeric 'lat' and 'lng'")
        try:
            return Coordinate.model_validate(dict(payload))
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or "body"
            raise InvalidInputError(field, first["msg"]) from e

    @staticmethod
    def to_response(record: IncidentRecord) -> CenterLookupResponse:
        """
        Reshapes a stored record into the lookup view. Only the headline
        counters are exposed; the challan type breakdown is left out.
        """
        for path in RESPONSE_FIELDS:
            if lookup_field(record, path) is None:
                raise MalformedRecordError(record.center_id, path)

        loc = record.location
        return CenterLookupResponse.model_validate({
            "centerId": record.center_id,
            "location": {
                "zone": loc.zone,
                "district": loc.district,
                "coordinates": {
                    "latitude": loc.latitude,
                    "longitude": loc.longitude,
                },
            },
            "violations": {
                "total": record.violations.total,
                "reported": record.violations.reported,
            },
            "challans": {
                "total": record.challans.total,
                "breakdown": {"collected_amount": record.challans.collected_amount},
            },
            "accidents": {
                "today": record.accidents.today,
                "overall": record.accidents.overall,
            },
        })
