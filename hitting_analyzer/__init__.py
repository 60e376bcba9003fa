"""Hitting Analyzer: swing biomechanics and the 4 B's grading engine."""

__version__ = "1.0.0"

from .analysis import (
    BodySegmentData,
    PlayerPhysicalData,
    SegmentPosition,
    SwingPhases,
    BiomechanicsMetrics,
    analyze_biomechanics,
    calibrate_pixel_to_feet,
)
from .config import DEFAULT_CONFIG, EngineConfig, MembershipTier
from .evaluation import (
    BCategory,
    build_scorecard,
    calculate_b_grade,
    calculate_overall_grade,
    normalize_metric_value,
)
