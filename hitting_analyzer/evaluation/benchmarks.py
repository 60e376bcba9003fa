"""Reference ranges by playing level (youth through elite MLB)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class Benchmark:
    level: str
    min: float
    max: float
    avg: Optional[float] = None

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


BENCHMARKS: Dict[str, Tuple[Benchmark, ...]] = {
    "bat_speed": (
        Benchmark("Youth (12-14)", 55, 65),
        Benchmark("High School", 65, 75),
        Benchmark("College", 72, 78),
        Benchmark("MLB", 72, 79, avg=73),
        Benchmark("Elite MLB", 78, 82),
    ),
    "attack_angle": (
        Benchmark("Youth", 8, 15),
        Benchmark("High School", 10, 18),
        Benchmark("College", 10, 20),
        Benchmark("MLB Avg", 8, 12, avg=10),
        Benchmark("Ideal Range", 5, 20),
    ),
    "exit_velocity": (
        Benchmark("Youth", 65, 75),
        Benchmark("High School", 75, 85),
        Benchmark("College", 85, 92),
        Benchmark("MLB", 88, 90),
        Benchmark("Hard Hit", 95, 120),
    ),
    "ideal_attack_angle_rate": (
        Benchmark("Average", 40, 50, avg=50),
        Benchmark("Good", 60, 70),
        Benchmark("Elite MLB", 70, 75),
    ),
}


def get_benchmarks(metric_id: str) -> Tuple[Benchmark, ...]:
    """Benchmarks for *metric_id*; empty for metrics without published ranges."""
    return BENCHMARKS.get(metric_id, ())
