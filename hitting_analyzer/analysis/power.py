"""Instantaneous power and the per-frame swing timeline.

Power is the rate of change of total body kinetic energy, taken as a
±2-frame central difference and expressed in horsepower
(1 hp = 550 ft·lb/s).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from ..config.framework_config import DEFAULT_CONFIG, EngineConfig, PowerConfig
from .kinematic_calculator import angular_velocity, finite_or_zero, velocity
from .momentum import bat_speed_mph, kinetic_energy, linear_momentum, rotational_momentum
from .segment_data import BodySegmentData, SwingPhases
from .segment_dynamics import BodyModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameMetrics:
    """Snapshot of one frame inside ``[launch, contact + 5]``."""
    frame: int
    time: float                 # s
    bat_speed: float            # mph
    linear_momentum: float      # slug·ft/s
    rotational_momentum: float  # slug·ft²/s
    kinetic_energy: float       # ft·lb
    power: float                # hp


@dataclass(frozen=True)
class PowerMetrics:
    peak_power: float
    average_power: float
    power_at_contact: float


def calculate_power(
    energy: Sequence[float],
    times: Sequence[float],
    frame_index: int,
    half_window: int = DEFAULT_CONFIG.kinematics.half_window_frames,
    cfg: PowerConfig = DEFAULT_CONFIG.power,
) -> float:
    """ΔE/Δt over ``frame_index ± half_window`` in horsepower.

    0 when the window leaves the profile or the two timestamps coincide.
    """
    if frame_index < half_window or frame_index >= len(energy) - half_window:
        return 0.0
    if len(times) != len(energy):
        return 0.0

    delta_energy = energy[frame_index + half_window] - energy[frame_index - half_window]
    delta_time = times[frame_index + half_window] - times[frame_index - half_window]
    if delta_time == 0:
        return 0.0
    return finite_or_zero((delta_energy / delta_time) / cfg.ft_lb_per_s_per_hp)


def timeline_bounds(
    phases: SwingPhases,
    num_frames: int,
    cfg: PowerConfig = DEFAULT_CONFIG.power,
) -> range:
    """Frames covered by the timeline: ``[launch, min(contact + 5, last)]``."""
    start = max(0, phases.launch)
    end = min(phases.contact + cfg.follow_frames, num_frames - 1)
    return range(start, end + 1)


def build_frame_timeline(
    data: BodySegmentData,
    phases: SwingPhases,
    body: BodyModel,
    pixel_to_feet_ratio: float,
    frame_rate: float,
    cfg: EngineConfig = DEFAULT_CONFIG,
) -> List[FrameMetrics]:
    """Per-frame bat speed, momentum, energy and power from launch to follow-through.

    The energy profile of the whole window is built first; each frame's
    power is then the central difference on that profile, so the first and
    last two frames of the window carry 0 power.
    """
    if frame_rate <= 0:
        logger.warning("Non-positive frame rate %.3f; empty timeline", frame_rate)
        return []

    frames = timeline_bounds(phases, data.num_frames, cfg.power)
    if len(frames) == 0:
        logger.debug("Empty timeline window (launch=%d, contact=%d)", phases.launch, phases.contact)
        return []

    kin = cfg.kinematics
    rows = []
    energy_profile: List[float] = []
    time_profile: List[float] = []

    for i in frames:
        p_vel = velocity(data.pelvis, i, pixel_to_feet_ratio, frame_rate, kin)
        t_vel = velocity(data.torso, i, pixel_to_feet_ratio, frame_rate, kin)
        p_ang = angular_velocity(data.pelvis, i, frame_rate, kin)
        t_ang = angular_velocity(data.torso, i, frame_rate, kin)

        p_ke = kinetic_energy(p_vel, p_ang, body.pelvis.mass, body.pelvis.inertia)
        t_ke = kinetic_energy(t_vel, t_ang, body.torso.mass, body.torso.inertia)
        frame_energy = p_ke.total + t_ke.total

        energy_profile.append(frame_energy)
        time_profile.append(i / frame_rate)
        rows.append((
            i,
            bat_speed_mph(data.bat_barrel, i, pixel_to_feet_ratio, frame_rate, kin),
            linear_momentum(data.pelvis, i, body.pelvis.mass, pixel_to_feet_ratio, frame_rate, kin)
            + linear_momentum(data.torso, i, body.torso.mass, pixel_to_feet_ratio, frame_rate, kin),
            rotational_momentum(p_ang, body.pelvis.inertia) + rotational_momentum(t_ang, body.torso.inertia),
            frame_energy,
        ))

    timeline = []
    for k, (frame, bat, lin, rot, energy) in enumerate(rows):
        timeline.append(FrameMetrics(
            frame=frame,
            time=time_profile[k],
            bat_speed=bat,
            linear_momentum=lin,
            rotational_momentum=rot,
            kinetic_energy=energy,
            power=calculate_power(energy_profile, time_profile, k, kin.half_window_frames, cfg.power),
        ))
    return timeline


def summarize_power(timeline: Sequence[FrameMetrics], contact_frame: int) -> PowerMetrics:
    """Peak, mean, and at-contact power of a timeline (all 0 when empty)."""
    if not timeline:
        return PowerMetrics(0.0, 0.0, 0.0)

    powers = np.array([f.power for f in timeline], dtype=np.float64)
    at_contact: Optional[FrameMetrics] = next((f for f in timeline if f.frame == contact_frame), None)
    return PowerMetrics(
        peak_power=float(np.max(powers)),
        average_power=float(np.mean(powers)),
        power_at_contact=at_contact.power if at_contact is not None else 0.0,
    )
