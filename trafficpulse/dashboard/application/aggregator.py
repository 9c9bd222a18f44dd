"""
Roll-up of per-center incident records into dashboard summaries.
"""
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from ...common.logging import setup_logger
from ...common.schemas import IncidentRecord
from ..domain.entities import (
    AggregationFilter, AggregationResult, CenterAggregate,
    DerivedMetrics, IncidentStats, Totals
)
from .normalization import coerce_record, normalize_record

logger = setup_logger("trafficpulse.aggregator")

RecordLike = Union[IncidentRecord, Mapping[str, Any]]


class IncidentAggregator:
    """
    Pure, stateless reduction of an incident record set.

    Records sharing a center id are summed field by field; the center keeps
    the zone of the first record seen for it.
    """

    def aggregate(
        self,
        records: Iterable[RecordLike],
        filters: Optional[AggregationFilter] = None,
    ) -> AggregationResult:
        filters = filters or AggregationFilter()

        per_center = self.group_by_center(records)
        zones = self.extract_zones(per_center)
        center_ids = [
            center_id for center_id, agg in per_center.items()
            if filters.matches_zone(agg.zone)
        ]
        filtered = self.apply_filter(per_center, filters)
        totals = self.compute_totals(filtered.values())

        logger.debug(
            f"Aggregated {len(per_center)} centers, {len(filtered)} selected "
            f"(zone={filters.zone}, center={filters.center_id})"
        )
        return AggregationResult(
            per_center=filtered,
            zones=zones,
            center_ids=center_ids,
            totals=totals,
            filter=filters,
        )

    def group_by_center(self, records: Iterable[RecordLike]) -> Dict[str, CenterAggregate]:
        """
        Folds records into center aggregates, preserving first-seen order.
        """
        per_center: Dict[str, CenterAggregate] = {}
        for item in records:
            normalized = normalize_record(coerce_record(item))
            agg = per_center.get(normalized.center_id)
            if agg is None:
                agg = CenterAggregate(center_id=normalized.center_id, zone=normalized.zone)
                per_center[normalized.center_id] = agg
            agg.stats = agg.stats + normalized.stats
            agg.record_count += 1

        for agg in per_center.values():
            agg.metrics = DerivedMetrics.from_stats(agg.stats)
        return per_center

    @staticmethod
    def extract_zones(per_center: Mapping[str, CenterAggregate]) -> List[str]:
        """Distinct zones in order of first appearance."""
        return list(dict.fromkeys(agg.zone for agg in per_center.values()))

    @staticmethod
    def apply_filter(
        per_center: Mapping[str, CenterAggregate],
        filters: AggregationFilter,
    ) -> Dict[str, CenterAggregate]:
        """Order-preserving subset by zone, then by center."""
        by_zone = {
            center_id: agg for center_id, agg in per_center.items()
            if filters.matches_zone(agg.zone)
        }
        return {
            center_id: agg for center_id, agg in by_zone.items()
            if filters.matches_center(center_id)
        }

    @staticmethod
    def compute_totals(centers: Iterable[CenterAggregate]) -> Totals:
        centers = list(centers)
        stats = IncidentStats()
        for agg in centers:
            stats = stats + agg.stats

        count = len(centers)
        if not count:
            return Totals(stats=stats)

        camera_total = stats.cameras.total
        return Totals(
            stats=stats,
            center_count=count,
            avg_response_time_minutes=sum(a.stats.response_time_minutes for a in centers) / count,
            avg_violation_rate_per_1000=sum(a.metrics.violation_rate_per_1000 for a in centers) / count,
            avg_challan_efficiency=sum(a.metrics.challan_efficiency for a in centers) / count,
            camera_effectiveness=stats.cameras.operational / camera_total * 100 if camera_total else 0.0,
        )


_default_aggregator = IncidentAggregator()


def aggregate(
    records: Iterable[RecordLike],
    filters: Optional[AggregationFilter] = None,
) -> AggregationResult:
    """Module-level shortcut for IncidentAggregator().aggregate."""
    return _default_aggregator.aggregate(records, filters)
