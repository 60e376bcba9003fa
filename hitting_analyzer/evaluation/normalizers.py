"""Metric normalizers: map a raw metric value onto a 0-100 score.

Every ``MetricDefinition`` carries its own normalizer, so adding a metric
never means touching a central switch.  Normalizers are small frozen
callables; NaN always scores 0.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple

import numpy as np


class Normalizer(ABC):
    """Base class for a raw-value → 0-100 mapping."""

    def __call__(self, value: float) -> float:
        value = float(value)
        if math.isnan(value):
            return 0.0
        return float(self.score(value))

    @abstractmethod
    def score(self, value: float) -> float:
        """Score a non-NaN value."""
        ...


@dataclass(frozen=True)
class Clamp(Normalizer):
    """Pass-through for values that are already percentages."""
    low: float = 0.0
    high: float = 100.0

    def score(self, value: float) -> float:
        return float(np.clip(value, self.low, self.high))


@dataclass(frozen=True)
class LinearScale(Normalizer):
    """``low → floor``, ``high → ceiling``, linear in between, clamped outside."""
    low: float
    high: float
    floor: float = 0.0
    ceiling: float = 100.0

    def score(self, value: float) -> float:
        if self.high == self.low:
            return self.ceiling if value >= self.high else self.floor
        t = (value - self.low) / (self.high - self.low)
        return float(np.clip(self.floor + t * (self.ceiling - self.floor), self.floor, self.ceiling))


@dataclass(frozen=True)
class IdealPointPenalty(Normalizer):
    """100 at the ideal value, minus ``penalty`` points per unit of deviation."""
    ideal: float
    penalty: float
    floor: float = 0.0

    def score(self, value: float) -> float:
        return max(self.floor, 100.0 - self.penalty * abs(value - self.ideal))


@dataclass(frozen=True)
class DistanceBands(Normalizer):
    """Banded score by distance from an ideal value.

    ``bands`` holds ``(max_distance, score)`` pairs in ascending distance;
    the first band containing the distance wins.
    """
    ideal: float
    bands: Tuple[Tuple[float, float], ...]
    default: float

    def score(self, value: float) -> float:
        d = abs(value - self.ideal)
        for max_distance, band_score in self.bands:
            if d <= max_distance:
                return band_score
        return self.default


@dataclass(frozen=True)
class RangeBands(Normalizer):
    """Banded score by value range.

    ``bands`` holds ``(low, high, score)`` triples checked in order with
    inclusive bounds; earlier bands take precedence on shared edges.
    """
    bands: Tuple[Tuple[float, float, float], ...]
    default: float

    def score(self, value: float) -> float:
        for low, high, band_score in self.bands:
            if low <= value <= high:
                return band_score
        return self.default


PERCENT = Clamp()
