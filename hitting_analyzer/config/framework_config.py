"""Swing biomechanics engine configuration.

All physical constants, window sizes and calibration constants are centralised
here so that tuning the engine never requires touching analysis code.

Sources:
    - Welch et al. (1995) - Biomechanical Description of Baseball Hitting
    - Fortenbaugh (2011) - Elite Database Study
    - Dempster-style segment mass fractions (population averages)
"""

from __future__ import annotations
from dataclasses import dataclass, field


# =====================================================================
# Kinematics
# =====================================================================

@dataclass(frozen=True)
class KinematicsConfig:
    """Finite-difference windows and unit conversions."""

    # Central difference uses frames i-2 and i+2
    half_window_frames: int = 2

    # "Peak" = max over the frames preceding contact (inclusive)
    peak_window_frames: int = 10

    # Bat speed at contact is measured over this many pre-contact frames
    bat_speed_window_frames: int = 5

    fps_to_mph: float = 0.681818

    @property
    def window_frames(self) -> int:
        return 2 * self.half_window_frames


# =====================================================================
# Anthropometry
# =====================================================================

@dataclass(frozen=True)
class AnthropometricConfig:
    """Population-average segment model.

    Valid for relative / trend comparison only.  Not adjusted for age,
    sex, or playing level.
    """

    # Fraction of total body mass
    pelvis_mass_ratio: float = 0.142
    torso_mass_ratio: float = 0.497      # includes head, trunk
    upper_arm_mass_ratio: float = 0.028  # per arm
    forearm_mass_ratio: float = 0.016    # per arm
    hand_mass_ratio: float = 0.006       # per hand

    # Cylinder radius as a fraction of standing height
    pelvis_radius_ratio: float = 0.12
    torso_radius_ratio: float = 0.15

    bat_weight_lbs: float = 2.0
    bat_length_inches: float = 34.0

    lbs_per_slug: float = 32.174


# =====================================================================
# Power
# =====================================================================

@dataclass(frozen=True)
class PowerConfig:
    """Instantaneous power and frame-timeline parameters."""

    ft_lb_per_s_per_hp: float = 550.0

    # Timeline spans [launch, contact + follow_frames]
    follow_frames: int = 5


# =====================================================================
# Sequencing
# =====================================================================

@dataclass(frozen=True)
class SequencingConfig:
    """Pelvis → torso → bat timing targets.

    The two penalty scales are empirical calibration constants carried over
    unchanged; they have no physiological derivation and should be reviewed
    against measured data before being tuned.
    """

    expected_torso_delay_s: float = 0.030
    expected_bat_delay_s: float = 0.060
    torso_penalty_per_s: float = 1000.0
    bat_penalty_per_s: float = 500.0


# =====================================================================
# Efficiency
# =====================================================================

@dataclass(frozen=True)
class EfficiencyConfig:
    """Output bounds for the efficiency ratios."""

    max_percent: float = 100.0
    # Retention when no initial momentum was measured ("no measurable decay")
    retention_without_initial: float = 100.0
    decimals: int = 1


# =====================================================================
# Master Configuration
# =====================================================================

@dataclass(frozen=True)
class EngineConfig:
    """Top-level configuration aggregating all sub-configs."""

    kinematics: KinematicsConfig = field(default_factory=KinematicsConfig)
    anthropometry: AnthropometricConfig = field(default_factory=AnthropometricConfig)
    power: PowerConfig = field(default_factory=PowerConfig)
    sequencing: SequencingConfig = field(default_factory=SequencingConfig)
    efficiency: EfficiencyConfig = field(default_factory=EfficiencyConfig)


# Default configuration instance
DEFAULT_CONFIG = EngineConfig()
