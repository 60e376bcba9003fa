"""Bat speed, linear / rotational momentum, and kinetic energy.

Units are imperial throughout: slugs, feet, seconds.  Angular velocities
enter in deg/s (what the kinematic calculator produces) and are converted to
rad/s here.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from ..config.framework_config import DEFAULT_CONFIG, KinematicsConfig
from .kinematic_calculator import distance, finite_or_zero, velocity, windowed_peak
from .segment_data import SegmentPosition

logger = logging.getLogger(__name__)


# ── Result containers ────────────────────────────────────────────────

@dataclass(frozen=True)
class BatSpeedMetrics:
    """Bat speeds in mph.

    ``bat_speed_at_impact`` is reported separately from ``bat_speed`` even
    though both come from the same pre-contact window today.
    """
    bat_speed: float
    peak_bat_speed: float
    bat_speed_at_impact: float


@dataclass(frozen=True)
class KineticEnergy:
    translational: float  # ft·lb
    rotational: float     # ft·lb
    total: float          # ft·lb


# ── Bat speed ────────────────────────────────────────────────────────

def bat_speed_mph(
    barrel_positions: Sequence[SegmentPosition],
    frame_index: int,
    pixel_to_feet_ratio: float,
    frame_rate: float,
    cfg: KinematicsConfig = DEFAULT_CONFIG.kinematics,
) -> float:
    """Instantaneous barrel speed (mph) by central difference."""
    return velocity(barrel_positions, frame_index, pixel_to_feet_ratio, frame_rate, cfg) * cfg.fps_to_mph


def calculate_bat_speed(
    barrel_positions: Sequence[SegmentPosition],
    contact_frame: int,
    pixel_to_feet_ratio: float,
    frame_rate: float,
    cfg: KinematicsConfig = DEFAULT_CONFIG.kinematics,
) -> BatSpeedMetrics:
    """Barrel speed over the 5 frames before contact, plus the pre-contact peak."""
    if frame_rate <= 0 or not 0 <= contact_frame < len(barrel_positions):
        logger.warning(
            "Contact frame %d outside barrel track of %d frames; bat speed set to 0",
            contact_frame, len(barrel_positions),
        )
        return BatSpeedMetrics(0.0, 0.0, 0.0)

    pre_contact = max(0, contact_frame - cfg.bat_speed_window_frames)
    elapsed = (contact_frame - pre_contact) / frame_rate
    if elapsed <= 0:
        speed = 0.0
    else:
        feet = distance(barrel_positions[pre_contact], barrel_positions[contact_frame]) * pixel_to_feet_ratio
        speed = finite_or_zero(feet / elapsed * cfg.fps_to_mph)

    peak = windowed_peak(
        lambda i: bat_speed_mph(barrel_positions, i, pixel_to_feet_ratio, frame_rate, cfg),
        contact_frame,
        initial=speed,
        cfg=cfg,
    )
    return BatSpeedMetrics(bat_speed=speed, peak_bat_speed=peak, bat_speed_at_impact=speed)


# ── Momentum ─────────────────────────────────────────────────────────

def linear_momentum(
    positions: Sequence[SegmentPosition],
    frame_index: int,
    segment_mass: float,
    pixel_to_feet_ratio: float,
    frame_rate: float,
    cfg: KinematicsConfig = DEFAULT_CONFIG.kinematics,
) -> float:
    """p = m·v (slug·ft/s)."""
    return segment_mass * velocity(positions, frame_index, pixel_to_feet_ratio, frame_rate, cfg)


def rotational_momentum(angular_velocity_deg: float, moment_of_inertia: float) -> float:
    """L = I·ω (slug·ft²/s)."""
    return moment_of_inertia * math.radians(angular_velocity_deg)


# ── Energy ───────────────────────────────────────────────────────────

def kinetic_energy(
    linear_velocity: float,
    angular_velocity_deg: float,
    mass: float,
    moment_of_inertia: float,
) -> KineticEnergy:
    """Translational ``0.5·m·v²`` plus rotational ``0.5·I·ω²``."""
    omega = math.radians(angular_velocity_deg)
    # v * v overflows to inf where v ** 2 raises
    translational = finite_or_zero(0.5 * mass * (linear_velocity * linear_velocity))
    rotational = finite_or_zero(0.5 * moment_of_inertia * (omega * omega))
    return KineticEnergy(translational, rotational, finite_or_zero(translational + rotational))


def sum_energy(*parts: KineticEnergy) -> KineticEnergy:
    translational = finite_or_zero(sum(p.translational for p in parts))
    rotational = finite_or_zero(sum(p.rotational for p in parts))
    return KineticEnergy(translational, rotational, finite_or_zero(translational + rotational))
