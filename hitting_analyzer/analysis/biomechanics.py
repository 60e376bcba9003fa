"""Full swing analysis: the single entry point of the biomechanics half.

``analyze_biomechanics`` walks one swing through calibration-free kinematics,
the segment model, momentum / energy, the power timeline and the efficiency
ratios, and returns a nested ``BiomechanicsMetrics`` record.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from ..config.framework_config import DEFAULT_CONFIG, EngineConfig
from .efficiency import EfficiencyMetrics, energy_transfer_efficiency, momentum_retention, sequencing_efficiency
from .kinematic_calculator import angular_velocity, finite_or_zero, velocity, windowed_peak
from .momentum import (
    BatSpeedMetrics,
    KineticEnergy,
    calculate_bat_speed,
    kinetic_energy,
    linear_momentum,
    rotational_momentum,
    sum_energy,
)
from .power import FrameMetrics, PowerMetrics, build_frame_timeline, summarize_power
from .segment_data import BodySegmentData, PlayerPhysicalData, SwingPhases
from .segment_dynamics import BodyModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AngularVelocityMetrics:
    """deg/s at contact, plus pre-contact peaks."""
    pelvis: float
    torso: float
    shoulder: float
    peak_pelvis: float
    peak_torso: float


@dataclass(frozen=True)
class LinearMomentumMetrics:
    pelvis: float
    torso: float
    total: float
    peak: float


@dataclass(frozen=True)
class RotationalMomentumMetrics:
    pelvis: float
    torso: float
    total: float


@dataclass(frozen=True)
class BiomechanicsMetrics:
    """Everything measured for one swing.

    ``bat_speed`` and ``efficiency.energy_transfer`` are None when no bat
    barrel track was supplied; ``frame_metrics`` is None when the timeline
    was not requested.
    """
    bat_speed: Optional[BatSpeedMetrics]
    angular_velocity: AngularVelocityMetrics
    linear_momentum: LinearMomentumMetrics
    rotational_momentum: RotationalMomentumMetrics
    kinetic_energy: KineticEnergy
    power: PowerMetrics
    efficiency: EfficiencyMetrics
    frame_metrics: Optional[List[FrameMetrics]] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def analyze_biomechanics(
    data: BodySegmentData,
    phases: SwingPhases,
    player: PlayerPhysicalData,
    pixel_to_feet_ratio: float,
    frame_rate: float,
    include_timeline: bool = True,
    cfg: EngineConfig = DEFAULT_CONFIG,
) -> BiomechanicsMetrics:
    """Analyze one swing.

    Args:
        data: Frame-aligned segment tracks.
        phases: Swing phase frame indices.
        player: Height / weight used by the segment model.
        pixel_to_feet_ratio: Feet per pixel (see ``calibrate_pixel_to_feet``).
        frame_rate: Capture rate in frames per second.
        include_timeline: Also return the per-frame ``FrameMetrics`` list.
        cfg: Engine configuration.

    Returns:
        BiomechanicsMetrics. Never raises on data-quality issues: frames
        outside a track, a zero frame rate or an empty track degrade to 0.
    """
    kin = cfg.kinematics
    contact = phases.contact
    body = BodyModel.from_player(player, cfg.anthropometry)

    if not phases.is_ordered():
        logger.warning("Swing phases are not in temporal order: %s", phases.as_tuple())
    if not data.is_aligned():
        logger.warning("Segment tracks have different lengths: %s", data.lengths())
    if not 0 <= contact < data.num_frames:
        logger.warning("Contact frame %d outside %d tracked frames", contact, data.num_frames)

    has_bat = len(data.bat_barrel) > 0

    # Bat speed
    bat: Optional[BatSpeedMetrics] = None
    if has_bat:
        bat = calculate_bat_speed(data.bat_barrel, contact, pixel_to_feet_ratio, frame_rate, kin)

    # Angular velocity
    pelvis_ang = angular_velocity(data.pelvis, contact, frame_rate, kin)
    torso_ang = angular_velocity(data.torso, contact, frame_rate, kin)
    angular = AngularVelocityMetrics(
        pelvis=pelvis_ang,
        torso=torso_ang,
        shoulder=angular_velocity(data.lead_shoulder, contact, frame_rate, kin),
        peak_pelvis=windowed_peak(
            lambda i: angular_velocity(data.pelvis, i, frame_rate, kin), contact, pelvis_ang, kin),
        peak_torso=windowed_peak(
            lambda i: angular_velocity(data.torso, i, frame_rate, kin), contact, torso_ang, kin),
    )

    # Linear momentum
    def total_linear(i: int) -> float:
        return (linear_momentum(data.pelvis, i, body.pelvis.mass, pixel_to_feet_ratio, frame_rate, kin)
                + linear_momentum(data.torso, i, body.torso.mass, pixel_to_feet_ratio, frame_rate, kin))

    pelvis_lin = linear_momentum(data.pelvis, contact, body.pelvis.mass, pixel_to_feet_ratio, frame_rate, kin)
    torso_lin = linear_momentum(data.torso, contact, body.torso.mass, pixel_to_feet_ratio, frame_rate, kin)
    total_lin = pelvis_lin + torso_lin
    linear = LinearMomentumMetrics(
        pelvis=pelvis_lin,
        torso=torso_lin,
        total=total_lin,
        peak=windowed_peak(total_linear, contact, total_lin, kin),
    )

    # Rotational momentum
    pelvis_rot = rotational_momentum(pelvis_ang, body.pelvis.inertia)
    torso_rot = rotational_momentum(torso_ang, body.torso.inertia)
    rotational = RotationalMomentumMetrics(pelvis_rot, torso_rot, pelvis_rot + torso_rot)

    # Kinetic energy
    energy = sum_energy(
        kinetic_energy(velocity(data.pelvis, contact, pixel_to_feet_ratio, frame_rate, kin),
                       pelvis_ang, body.pelvis.mass, body.pelvis.inertia),
        kinetic_energy(velocity(data.torso, contact, pixel_to_feet_ratio, frame_rate, kin),
                       torso_ang, body.torso.mass, body.torso.inertia),
    )

    # Power
    timeline = build_frame_timeline(data, phases, body, pixel_to_feet_ratio, frame_rate, cfg)
    power = summarize_power(timeline, contact)

    # Efficiency
    transfer: Optional[float] = None
    if has_bat:
        bat_velocity = velocity(data.bat_barrel, contact, pixel_to_feet_ratio, frame_rate, kin)
        bat_energy = finite_or_zero(0.5 * body.bat.mass * (bat_velocity * bat_velocity))
        transfer = energy_transfer_efficiency(bat_energy, energy.total, cfg.efficiency)

    initial_momentum = timeline[0].linear_momentum if timeline else total_linear(max(0, phases.launch))
    efficiency = EfficiencyMetrics(
        energy_transfer=transfer,
        sequencing=sequencing_efficiency(
            data.pelvis, data.torso, phases.launch, contact, frame_rate,
            cfg.sequencing, kin, cfg.efficiency,
        ),
        momentum_retention=momentum_retention(initial_momentum, total_lin, cfg.efficiency),
    )

    return BiomechanicsMetrics(
        bat_speed=bat,
        angular_velocity=angular,
        linear_momentum=linear,
        rotational_momentum=rotational,
        kinetic_energy=energy,
        power=power,
        efficiency=efficiency,
        frame_metrics=timeline if include_timeline else None,
    )
