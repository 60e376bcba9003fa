"""The 4 B's metric catalog and the tier access gate.

The hitting chain, in order:
    BRAIN  makes the decision
    BODY   executes the movement
    BAT    delivers the tool
    BALL   creates the result

Each metric belongs to one B, has a minimum membership tier, a data source
with a nominal accuracy, and its own normalizer (see ``normalizers``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from ..config.tiers import MembershipTier
from .normalizers import (
    PERCENT,
    DistanceBands,
    IdealPointPenalty,
    LinearScale,
    Normalizer,
    RangeBands,
)

TierLike = Union[MembershipTier, str]


class BCategory(str, Enum):
    BRAIN = "brain"
    BODY = "body"
    BAT = "bat"
    BALL = "ball"

    @classmethod
    def coerce(cls, category: Union["BCategory", str]) -> "BCategory":
        """Accept either the enum member or its string value, any case."""
        if isinstance(category, cls):
            return category
        return cls(str(category).lower())


class DataSource(str, Enum):
    CAMERA = "camera"
    AI_ESTIMATED = "ai_estimated"
    BLAST_MOTION = "blast_motion"
    REBOOT_MOTION = "reboot_motion"
    HITTRAX = "hittrax"
    RAPSODO = "rapsodo"


@dataclass(frozen=True)
class MetricDefinition:
    """Static description of one gradeable metric."""
    id: str
    name: str
    category: BCategory
    description: str
    data_source: DataSource
    accuracy: int                 # nominal, 0-100
    unit: str
    required_tier: MembershipTier
    gamification_visual: str
    sensor_required: Optional[str] = None
    normalizer: Normalizer = PERCENT

    def normalize(self, value: float) -> float:
        return self.normalizer(value)


# ── Normalizers shared by paired estimated / sensor metrics ──────────

BAT_SPEED_SCALE = LinearScale(low=50.0, high=80.0)
EXIT_VELOCITY_SCALE = LinearScale(low=60.0, high=110.0)
ATTACK_ANGLE_PENALTY = IdealPointPenalty(ideal=12.5, penalty=8.0)

INF = float("inf")


def _metric(
    id: str,
    name: str,
    category: BCategory,
    description: str,
    data_source: DataSource,
    accuracy: int,
    unit: str,
    required_tier: MembershipTier,
    visual: str,
    sensor: Optional[str] = None,
    normalizer: Normalizer = PERCENT,
) -> MetricDefinition:
    return MetricDefinition(
        id=id,
        name=name,
        category=category,
        description=description,
        data_source=data_source,
        accuracy=accuracy,
        unit=unit,
        required_tier=required_tier,
        gamification_visual=visual,
        sensor_required=sensor,
        normalizer=normalizer,
    )


_B = BCategory
_S = DataSource
_T = MembershipTier

METRIC_DEFINITIONS: Tuple[MetricDefinition, ...] = (
    # BRAIN
    _metric("swing_decision_rate", "Swing Decision Rate", _B.BRAIN,
            "Percentage of good swing decisions vs. all pitches",
            _S.CAMERA, 75, "%", _T.CHALLENGE, "traffic_light"),
    _metric("chase_rate", "Chase Rate", _B.BRAIN,
            "Percentage of swings at pitches outside the zone",
            _S.AI_ESTIMATED, 65, "%", _T.DIY, "target"),
    _metric("timing_consistency", "Timing Consistency", _B.BRAIN,
            "Consistency of swing timing across multiple swings",
            _S.CAMERA, 80, "%", _T.DIY, "stopwatch"),

    # BODY
    _metric("kinematic_sequence", "Kinematic Sequence", _B.BODY,
            "Proper order: Pelvis → Torso → Hands → Bat",
            _S.CAMERA, 90, "%", _T.FREE, "relay_race"),
    _metric("hip_shoulder_separation", "Hip-Shoulder Separation", _B.BODY,
            "Maximum angle between hips and shoulders",
            _S.CAMERA, 85, "°", _T.CHALLENGE, "angle_meter",
            normalizer=RangeBands(((40, 60, 95), (30, 40, 85), (20, 30, 75)), default=60)),
    _metric("tempo_ratio", "Tempo/Rhythm", _B.BODY,
            "Load to fire timing ratio",
            _S.CAMERA, 90, "ratio", _T.FREE, "metronome",
            normalizer=DistanceBands(3.0, ((0.5, 95), (1.0, 85), (1.5, 75), (2.0, 65)), default=50)),
    _metric("weight_transfer", "Weight Transfer", _B.BODY,
            "Center of mass forward movement",
            _S.CAMERA, 85, "inches", _T.DIY, "balance_scale",
            normalizer=RangeBands(((10, 16, 95), (8, 10, 85), (6, 8, 75), (4, 6, 65)), default=50)),
    _metric("ground_force", "Ground Force", _B.BODY,
            "Maximum ground reaction force",
            _S.REBOOT_MOTION, 95, "%BW", _T.ELITE, "power_meter",
            sensor="Reboot Motion with force plates",
            normalizer=RangeBands(((120, INF, 100), (110, INF, 90), (100, INF, 80), (90, INF, 70)), default=60)),

    # BAT
    _metric("bat_speed", "Bat Speed", _B.BAT,
            "Speed of bat at contact",
            _S.AI_ESTIMATED, 65, "mph", _T.CHALLENGE, "speedometer",
            normalizer=BAT_SPEED_SCALE),
    _metric("bat_speed_sensor", "Bat Speed (Verified)", _B.BAT,
            "Sensor-verified bat speed",
            _S.BLAST_MOTION, 95, "mph", _T.ELITE, "speedometer",
            sensor="Blast Motion", normalizer=BAT_SPEED_SCALE),
    _metric("attack_angle", "Attack Angle", _B.BAT,
            "Vertical angle of bat at contact (ideal: 5-20°)",
            _S.AI_ESTIMATED, 70, "°", _T.CHALLENGE, "launch_ramp",
            normalizer=ATTACK_ANGLE_PENALTY),
    _metric("attack_angle_sensor", "Attack Angle (Verified)", _B.BAT,
            "Sensor-verified attack angle",
            _S.BLAST_MOTION, 90, "°", _T.ELITE, "launch_ramp",
            sensor="Blast Motion", normalizer=ATTACK_ANGLE_PENALTY),
    _metric("ideal_attack_angle_rate", "Ideal Attack Angle Rate", _B.BAT,
            "% of swings in 5-20° range",
            _S.AI_ESTIMATED, 70, "%", _T.CHALLENGE, "progress_bar"),
    _metric("swing_path_tilt", "Swing Path Tilt", _B.BAT,
            "Angular orientation of swing plane",
            _S.AI_ESTIMATED, 75, "°", _T.CHALLENGE, "swing_path"),
    _metric("attack_direction", "Attack Direction", _B.BAT,
            "Horizontal angle - pull vs. opposite field",
            _S.BLAST_MOTION, 90, "°", _T.ELITE, "spray_chart",
            sensor="Blast Motion"),
    _metric("time_in_zone", "Time in Zone", _B.BAT,
            "Time bat spends in hitting zone",
            _S.AI_ESTIMATED, 70, "ms", _T.DIY, "zone_timer",
            normalizer=RangeBands(((150, 200, 95), (120, 150, 85), (100, 120, 75)), default=60)),

    # BALL
    _metric("exit_velocity", "Exit Velocity", _B.BALL,
            "Speed of ball off bat",
            _S.AI_ESTIMATED, 55, "mph", _T.CHALLENGE, "rocket",
            normalizer=EXIT_VELOCITY_SCALE),
    _metric("exit_velocity_sensor", "Exit Velocity (Verified)", _B.BALL,
            "Radar-verified exit velocity",
            _S.HITTRAX, 98, "mph", _T.ELITE, "rocket",
            sensor="HitTrax or Rapsodo", normalizer=EXIT_VELOCITY_SCALE),
    _metric("launch_angle", "Launch Angle", _B.BALL,
            "Vertical angle of batted ball",
            _S.AI_ESTIMATED, 60, "°", _T.CHALLENGE, "arc",
            normalizer=RangeBands(((10, 30, 90), (5, 10, 80), (0, 5, 70), (30, 40, 75)), default=60)),
    _metric("barrel_rate", "Barrel Rate", _B.BALL,
            "% of balls with optimal EV + LA",
            _S.AI_ESTIMATED, 50, "%", _T.DIY, "target"),
    _metric("hard_hit_rate", "Hard Hit %", _B.BALL,
            "% of balls hit 95+ mph",
            _S.AI_ESTIMATED, 55, "%", _T.DIY, "power_meter"),
    _metric("estimated_distance", "Estimated Distance", _B.BALL,
            "Projected ball flight distance",
            _S.AI_ESTIMATED, 50, "ft", _T.CHALLENGE, "distance_marker",
            normalizer=LinearScale(low=100.0, high=400.0, floor=40.0, ceiling=100.0)),
)


# ── Access gate ──────────────────────────────────────────────────────

def has_metric_access(tier: TierLike, metric: MetricDefinition) -> bool:
    """True if *tier* ranks at or above the metric's required tier."""
    return MembershipTier.coerce(tier).rank >= metric.required_tier.rank


class MetricCatalog:
    """Read-only registry of metric definitions, indexed by id."""

    def __init__(self, definitions: Iterable[MetricDefinition]):
        self._definitions: Tuple[MetricDefinition, ...] = tuple(definitions)
        self._by_id: Dict[str, MetricDefinition] = {m.id: m for m in self._definitions}
        if len(self._by_id) != len(self._definitions):
            raise ValueError("Duplicate metric id in catalog")

    def __iter__(self) -> Iterator[MetricDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, metric_id: object) -> bool:
        return metric_id in self._by_id

    def get(self, metric_id: str) -> Optional[MetricDefinition]:
        return self._by_id.get(metric_id)

    def by_category(self, category: Union[BCategory, str]) -> List[MetricDefinition]:
        category = BCategory.coerce(category)
        return [m for m in self._definitions if m.category is category]

    def _filter(
        self,
        tier: TierLike,
        category: Optional[Union[BCategory, str]],
        accessible: bool,
    ) -> List[MetricDefinition]:
        pool = self._definitions if category is None else self.by_category(category)
        return [m for m in pool if has_metric_access(tier, m) is accessible]

    def available(self, tier: TierLike, category: Optional[Union[BCategory, str]] = None) -> List[MetricDefinition]:
        return self._filter(tier, category, True)

    def locked(self, tier: TierLike, category: Optional[Union[BCategory, str]] = None) -> List[MetricDefinition]:
        return self._filter(tier, category, False)


DEFAULT_CATALOG = MetricCatalog(METRIC_DEFINITIONS)


def get_available_metrics(
    tier: TierLike,
    category: Optional[Union[BCategory, str]] = None,
    catalog: MetricCatalog = DEFAULT_CATALOG,
) -> List[MetricDefinition]:
    """Metrics unlocked at *tier*, optionally limited to one B."""
    return catalog.available(tier, category)


def get_locked_metrics(
    tier: TierLike,
    category: Optional[Union[BCategory, str]] = None,
    catalog: MetricCatalog = DEFAULT_CATALOG,
) -> List[MetricDefinition]:
    """Metrics that need an upgrade from *tier*."""
    return catalog.locked(tier, category)
