"""
JSON shapes consumed by the dashboard charts and stat cards.
"""
from typing import Any, Dict

from ...domain.entities import AggregationResult, CenterAggregate, DerivedMetrics, IncidentStats, Totals


def serialize_stats(stats: IncidentStats) -> Dict[str, Any]:
    acc, vio, cha = stats.accidents, stats.violations, stats.challans
    return {
        "accidents": {
            "today": acc.today,
            "overall": acc.overall,
            "fatal": acc.fatal,
            "nonFatal": acc.non_fatal,
        },
        "violations": {
            "total": vio.total,
            "reported": vio.reported,
            "speeding": vio.speeding,
            "redLight": vio.red_light,
            "drunkDriving": vio.drunk_driving,
            "noHelmet": vio.no_helmet,
        },
        "challans": {
            "total": cha.total,
            "collected_amount": cha.collected_amount,
            "pending_amount": cha.pending_amount,
            "online_payment": cha.online_payment,
            "offline_payment": cha.offline_payment,
            "breakdown": dict(cha.breakdown),
        },
        "trafficVolume": {
            "peak": stats.traffic_volume.peak,
            "offPeak": stats.traffic_volume.off_peak,
            "daily": stats.traffic_volume.daily,
        },
        "cameras": {
            "operational": stats.cameras.operational,
            "total": stats.cameras.total,
        },
        "enforcementOfficers": stats.enforcement_officers,
        "responseTimeMinutes": stats.response_time_minutes,
    }


def serialize_metrics(metrics: DerivedMetrics) -> Dict[str, float]:
    return {
        "violationRatePer1k": metrics.violation_rate_per_1000,
        "challanEfficiency": metrics.challan_efficiency,
        "fatalAccidentRate": metrics.fatal_accident_rate,
        "cameraEffectiveness": metrics.camera_effectiveness,
    }


def serialize_center(agg: CenterAggregate) -> Dict[str, Any]:
    data = {"zone": agg.zone, "recordCount": agg.record_count}
    data.update(serialize_stats(agg.stats))
    data["metrics"] = serialize_metrics(agg.metrics)
    return data


def serialize_totals(totals: Totals) -> Dict[str, Any]:
    stats = totals.stats
    return {
        "accidents": totals.accidents,
        "accidentsToday": stats.accidents.today,
        "fatalAccidents": stats.accidents.fatal,
        "violations": totals.violations,
        "violationsReported": stats.violations.reported,
        "challans": totals.challans,
        "revenue": totals.revenue,
        "pendingAmount": stats.challans.pending_amount,
        "officers": stats.enforcement_officers,
        "cameras": stats.cameras.operational,
        "trafficVolume": stats.traffic_volume.daily,
        "centerCount": totals.center_count,
        "avgResponseTimeMinutes": totals.avg_response_time_minutes,
        "avgViolationRate": totals.avg_violation_rate_per_1000,
        "avgChallanEfficiency": totals.avg_challan_efficiency,
        "cameraEffectiveness": totals.camera_effectiveness,
    }


def serialize_result(result: AggregationResult) -> Dict[str, Any]:
    return {
        "filter": {"zone": result.filter.zone, "centerId": result.filter.center_id},
        "zones": list(result.zones),
        "centerIds": list(result.center_ids),
        "perCenter": {
            center_id: serialize_center(agg) for center_id, agg in result.per_center.items()
        },
        "totals": serialize_totals(result.totals),
    }
