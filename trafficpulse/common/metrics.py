import threading
import time
from dataclasses import dataclass
from typing import Dict, List

@dataclass
class QueryMetrics:
    """Store query metrics"""
    uptime_seconds: float
    queries: int
    failures: int
    timeouts: int
    avg_query_time_ms: float
    lookups: int
    lookup_misses: int

    def to_dict(self) -> Dict:
        return {
            'uptime_seconds': self.uptime_seconds,
            'queries': self.queries,
            'failures': self.failures,
            'timeouts': self.timeouts,
            'avg_query_time_ms': self.avg_query_time_ms,
            'lookups': self.lookups,
            'lookup_misses': self.lookup_misses
        }


class QueryMetricsCollector:
    """Collects and aggregates store query metrics"""

    def __init__(self):
        self.query_times: List[float] = []
        self.queries = 0
        self.failures = 0
        self.timeouts = 0
        self.lookups = 0
        self.lookup_misses = 0
        self.start_time = time.time()
        self._lock = threading.Lock()

    def record_query(self, duration_ms: float):
        with self._lock:
            self.queries += 1
            self.query_times.append(duration_ms)
            # Keep buffer size manageable
            if len(self.query_times) > 1000:
                self.query_times.pop(0)

    def record_failure(self, timed_out: bool = False):
        with self._lock:
            self.failures += 1
            if timed_out:
                self.timeouts += 1

    def record_lookup(self, found: bool):
        with self._lock:
            self.lookups += 1
            if not found:
                self.lookup_misses += 1

    def get_metrics(self) -> QueryMetrics:
        with self._lock:
            elapsed = time.time() - self.start_time
            avg = sum(self.query_times) / len(self.query_times) if self.query_times else 0.0
            return QueryMetrics(
                uptime_seconds=elapsed,
                queries=self.queries,
                failures=self.failures,
                timeouts=self.timeouts,
                avg_query_time_ms=avg,
                lookups=self.lookups,
                lookup_misses=self.lookup_misses
            )
