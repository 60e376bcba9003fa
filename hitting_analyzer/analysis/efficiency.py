"""Swing efficiency ratios (all percentages, one decimal)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from ..config.framework_config import DEFAULT_CONFIG, EfficiencyConfig, KinematicsConfig, SequencingConfig
from .kinematic_calculator import angular_velocity, finite_or_zero
from .segment_data import SegmentPosition


@dataclass(frozen=True)
class EfficiencyMetrics:
    energy_transfer: Optional[float]  # None without a bat track
    sequencing: float
    momentum_retention: float


def _round(value: float, cfg: EfficiencyConfig) -> float:
    return round(finite_or_zero(value), cfg.decimals)


def energy_transfer_efficiency(
    bat_kinetic_energy: float,
    body_kinetic_energy: float,
    cfg: EfficiencyConfig = DEFAULT_CONFIG.efficiency,
) -> float:
    """Bat KE as a share of body KE, clamped to ``[0, 100]``."""
    if body_kinetic_energy <= 0:
        return 0.0
    ratio = bat_kinetic_energy / body_kinetic_energy * 100.0
    return _round(float(np.clip(ratio, 0.0, cfg.max_percent)), cfg)


def _peak_frame(
    positions: Sequence[SegmentPosition],
    start: int,
    stop: int,
    frame_rate: float,
    cfg: KinematicsConfig,
) -> int:
    # First frame reaching the maximum wins (strict comparison)
    best, best_value = start, angular_velocity(positions, start, frame_rate, cfg)
    for i in range(start, stop + 1):
        value = angular_velocity(positions, i, frame_rate, cfg)
        if value > best_value:
            best, best_value = i, value
    return best


def sequencing_efficiency(
    pelvis: Sequence[SegmentPosition],
    torso: Sequence[SegmentPosition],
    launch_frame: int,
    contact_frame: int,
    frame_rate: float,
    cfg: SequencingConfig = DEFAULT_CONFIG.sequencing,
    kin: KinematicsConfig = DEFAULT_CONFIG.kinematics,
    eff: EfficiencyConfig = DEFAULT_CONFIG.efficiency,
) -> float:
    """Score the pelvis → torso → bat timing.

    Peak pelvis and torso angular velocity frames are located in
    ``[launch, contact]``.  The torso should peak 30 ms after the pelvis and
    contact should come 60 ms after the pelvis peak; each miss is penalised
    linearly and the two scores averaged.
    """
    if frame_rate <= 0:
        return 0.0

    pelvis_peak = _peak_frame(pelvis, launch_frame, contact_frame, frame_rate, kin)
    torso_peak = _peak_frame(torso, launch_frame, contact_frame, frame_rate, kin)

    torso_delay = (torso_peak - pelvis_peak) / frame_rate
    bat_delay = (contact_frame - pelvis_peak) / frame_rate

    torso_score = max(0.0, 100.0 - abs(torso_delay - cfg.expected_torso_delay_s) * cfg.torso_penalty_per_s)
    bat_score = max(0.0, 100.0 - abs(bat_delay - cfg.expected_bat_delay_s) * cfg.bat_penalty_per_s)
    return _round((torso_score + bat_score) / 2.0, eff)


def momentum_retention(
    initial_momentum: float,
    final_momentum: float,
    cfg: EfficiencyConfig = DEFAULT_CONFIG.efficiency,
) -> float:
    """Contact momentum as a share of launch momentum, capped at 100.

    A swing with no measurable launch momentum retains 100 %.
    """
    if initial_momentum <= 0:
        return cfg.retention_without_initial
    return _round(min(cfg.max_percent, final_momentum / initial_momentum * 100.0), cfg)
