"""Anthropometric segment model: masses (slugs) and moments of inertia.

Each segment is a solid cylinder spinning about its long axis
(``I = 0.5·m·r²``).  Radii are fixed fractions of standing height, masses
fixed fractions of body weight.  These are population averages: the numbers
support relative and trend comparison between swings, not absolute
biomechanical ground truth.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..config.framework_config import DEFAULT_CONFIG, AnthropometricConfig
from .segment_data import PlayerPhysicalData


def segment_mass(weight_lbs: float, mass_ratio: float, lbs_per_slug: float = 32.174) -> float:
    """Segment mass in slugs for a body of *weight_lbs*."""
    if lbs_per_slug <= 0:
        return 0.0
    return (weight_lbs * mass_ratio) / lbs_per_slug


def moment_of_inertia(mass: float, radius: float) -> float:
    """Solid cylinder about its axis (slug·ft²)."""
    return 0.5 * mass * radius ** 2


@dataclass(frozen=True)
class SegmentModel:
    mass: float      # slugs
    radius: float    # ft
    inertia: float   # slug·ft²


@dataclass(frozen=True)
class BodyModel:
    """Per-swing rigid-body parameters for the modelled segments."""
    pelvis: SegmentModel
    torso: SegmentModel
    bat: SegmentModel
    arm_mass: float  # slugs, one upper arm + forearm + hand

    @classmethod
    def from_player(
        cls,
        player: PlayerPhysicalData,
        cfg: AnthropometricConfig = DEFAULT_CONFIG.anthropometry,
    ) -> "BodyModel":
        weight = max(0.0, float(player.weight_lbs))
        height_ft = max(0.0, float(player.height_inches)) / 12.0
        k = cfg.lbs_per_slug

        pelvis_mass = segment_mass(weight, cfg.pelvis_mass_ratio, k)
        torso_mass = segment_mass(weight, cfg.torso_mass_ratio, k)
        bat_mass = segment_mass(cfg.bat_weight_lbs, 1.0, k)

        pelvis_radius = height_ft * cfg.pelvis_radius_ratio
        torso_radius = height_ft * cfg.torso_radius_ratio
        bat_radius = (cfg.bat_length_inches / 12.0) / 2.0

        arm_ratio = cfg.upper_arm_mass_ratio + cfg.forearm_mass_ratio + cfg.hand_mass_ratio

        return cls(
            pelvis=SegmentModel(pelvis_mass, pelvis_radius, moment_of_inertia(pelvis_mass, pelvis_radius)),
            torso=SegmentModel(torso_mass, torso_radius, moment_of_inertia(torso_mass, torso_radius)),
            bat=SegmentModel(bat_mass, bat_radius, moment_of_inertia(bat_mass, bat_radius)),
            arm_mass=segment_mass(weight, arm_ratio, k),
        )
