"""
CSV import/export of incident snapshots and synthetic demo data.

CSV columns are the dotted paths of the camelCase document
(e.g. "location.zone", "challans.breakdown.Speeding").
"""
import random
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from ...common.schemas import IncidentRecord

STRING_COLUMNS = {"centerId": str, "location.zone": str, "weather_conditions": str}

VIOLATION_TYPES = (
    "Speeding", "No Helmet", "No Seatbelt", "Drunk Driving", "No License",
    "Invalid Insurance", "Phone While Driving", "Lane Violation",
    "No Registration", "Modified Vehicle", "Noise Pollution",
)

DEFAULT_ZONES = ("North", "South", "East", "West", "Central")
WEATHER = ("Clear", "Cloudy", "Rain", "Fog")

# Pune city centre, where the reference deployment is
BASE_LAT = 18.517436621033905
BASE_LNG = 73.8560968090087


def records_to_frame(records: Iterable[IncidentRecord]) -> pd.DataFrame:
    documents = [record.to_document() for record in records]
    if not documents:
        return pd.DataFrame(columns=["centerId"])
    return pd.json_normalize(documents, sep=".")


def _to_python(value: Any) -> Any:
    if isinstance(value, np.generic):
        return value.item()
    return value


def _is_missing(value: Any) -> bool:
    return value is None or (not isinstance(value, str) and bool(pd.isna(value)))


def _set_path(document: Dict[str, Any], path: Sequence[str], value: Any):
    node = document
    for part in path[:-1]:
        node = node.setdefault(part, {})
    node[path[-1]] = value


def frame_to_records(frame: pd.DataFrame) -> List[IncidentRecord]:
    """Rebuilds nested documents from dotted columns; empty cells are dropped."""
    records = []
    for row in frame.to_dict(orient="records"):
        document: Dict[str, Any] = {}
        for column, value in row.items():
            if _is_missing(value):
                continue
            # Only the first two levels are structural; breakdown labels are kept whole
            _set_path(document, str(column).split(".", 2), _to_python(value))
        records.append(IncidentRecord.from_document(document))
    return records


def write_incident_csv(records: Iterable[IncidentRecord], path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    records_to_frame(records).to_csv(path, index=False)
    return path


def load_incident_csv(path: Union[str, Path]) -> List[IncidentRecord]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Incident CSV not found: {path}")
    frame = pd.read_csv(path, dtype=STRING_COLUMNS)
    return frame_to_records(frame)


def generate_synthetic_records(
    count: int = 12,
    seed: Optional[int] = None,
    zones: Sequence[str] = DEFAULT_ZONES,
    date: Optional[datetime] = None,
) -> List[IncidentRecord]:
    """
    Demo snapshots, one per center, spread around the city centre.
    """
    rng = random.Random(seed)
    date = date or datetime(2024, 1, 1)
    records = []

    for i in range(count):
        zone = zones[i % len(zones)]
        is_peak = rng.random() > 0.5

        violations_total = rng.randint(50, 400) if is_peak else rng.randint(10, 150)
        breakdown_types = rng.sample(VIOLATION_TYPES, k=4)
        breakdown = {label: rng.randint(0, violations_total // 4) for label in breakdown_types}
        challans_total = sum(breakdown.values()) + rng.randint(0, 20)
        collected = float(challans_total * rng.choice([500, 1000, 1500]))
        overall_accidents = rng.randint(5, 120)
        fatal = rng.randint(0, overall_accidents // 5)
        cameras_total = rng.randint(4, 16)
        daily_volume = rng.randint(5000, 60000)

        records.append(IncidentRecord.model_validate({
            "centerId": f"C{i + 1:03d}",
            "date": (date + timedelta(days=rng.randint(0, 30))).isoformat(),
            "location": {
                "zone": zone,
                "district": rng.randint(1, 12),
                "latitude": round(BASE_LAT + rng.uniform(-0.08, 0.08), 6),
                "longitude": round(BASE_LNG + rng.uniform(-0.08, 0.08), 6),
            },
            "violations": {
                "total": violations_total,
                "reported": rng.randint(0, violations_total),
                "speeding": breakdown.get("Speeding", 0),
                "drunkDriving": breakdown.get("Drunk Driving", 0),
                "noHelmet": breakdown.get("No Helmet", 0),
                "redLight": rng.randint(0, violations_total // 5),
            },
            "challans": {
                "total": challans_total,
                "collected_amount": collected,
                "pending_amount": float(rng.randint(0, 50) * 500),
                "online_payment": round(collected * 0.6, 2),
                "offline_payment": round(collected * 0.4, 2),
                "breakdown": breakdown,
            },
            "accidents": {
                "today": rng.randint(0, 5),
                "overall": overall_accidents,
                "fatal": fatal,
                "nonFatal": overall_accidents - fatal,
            },
            "weather_conditions": rng.choice(WEATHER),
            "peak_hour": is_peak,
            "enforcement_officers": rng.randint(2, 20),
            "trafficVolume": {
                "peak": int(daily_volume * 0.4),
                "offPeak": int(daily_volume * 0.6),
                "daily": daily_volume,
            },
            "cameras": {
                "operational": rng.randint(0, cameras_total),
                "total": cameras_total,
            },
            "response": {"avgTimeMinutes": round(rng.uniform(3, 25), 1)},
        }))
    return records
