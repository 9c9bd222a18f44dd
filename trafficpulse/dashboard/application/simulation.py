"""
Simulated dashboard decorations.

Nothing produced here is a measurement: predictive figures, sparkline trend
series and the per-violation revenue estimate are demo stand-ins. Every
payload is flagged "simulated" and none of it feeds back into aggregates.
"""
import random
from typing import Any, Dict, Optional

from ..domain.entities import AggregationResult, CenterAggregate


class SimulationService:
    def __init__(self, revenue_per_violation: float = 1000.0, trend_days: int = 7):
        self.revenue_per_violation = revenue_per_violation
        self.trend_days = trend_days

    def simulate(self, result: AggregationResult, seed: Optional[int] = None) -> Dict[str, Any]:
        """Same seed and same aggregates give the same payload."""
        rng = random.Random(seed)
        return {
            "simulated": True,
            "seed": seed,
            "centers": {
                center_id: self._simulate_center(agg, rng)
                for center_id, agg in result.per_center.items()
            },
        }

    def _simulate_center(self, agg: CenterAggregate, rng: random.Random) -> Dict[str, Any]:
        violations = agg.stats.violations.total
        return {
            "predictive": {
                "accidentRisk": round(rng.random() * 30 + 10, 2),
                "expectedViolations": violations * 1.2,
                "revenueForecast": agg.stats.challans.collected_amount * 1.15,
            },
            "trendData": {
                "accidents": [rng.randint(0, 9) for _ in range(self.trend_days)],
                "violations": [rng.randint(0, 49) for _ in range(self.trend_days)],
                "revenue": [rng.randint(0, 99999) for _ in range(self.trend_days)],
            },
            "syntheticRevenue": violations * self.revenue_per_violation,
        }
