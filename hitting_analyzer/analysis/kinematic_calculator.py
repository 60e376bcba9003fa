"""Kinematic calculator: distances, velocities, and angular velocities.

All functions are pure (stateless) and operate on frame-indexed
``SegmentPosition`` sequences.  Every derivative is a central difference
over frames ``i-2`` and ``i+2``; frames too close to either end of the
sequence yield 0 instead of raising.
"""

from __future__ import annotations

import math
from typing import Callable, Optional, Sequence

import numpy as np

from ..config.framework_config import DEFAULT_CONFIG, KinematicsConfig
from .segment_data import BodySegmentData, SegmentPosition


# ── Low-level helpers ─────────────────────────────────────────────────

def finite_or_zero(value: float) -> float:
    """Collapse NaN / ±inf to 0."""
    return value if math.isfinite(value) else 0.0


def _has_window(positions: Sequence[SegmentPosition], frame_index: int, half: int) -> bool:
    return half <= frame_index < len(positions) - half


def distance(p1: SegmentPosition, p2: SegmentPosition) -> float:
    """Euclidean distance between two points (pixels)."""
    return float(np.hypot(p2.x - p1.x, p2.y - p1.y))


# ── Calibration ───────────────────────────────────────────────────────

def calibrate_pixel_to_feet(
    bat_pixel_length: float,
    bat_length_inches: float = DEFAULT_CONFIG.anthropometry.bat_length_inches,
) -> float:
    """Feet-per-pixel ratio from the bat's known length.

    Single reference object, no perspective correction: the ratio is only
    exact in the plane of the bat.  Returns 0 for a non-positive length.
    """
    if not bat_pixel_length or bat_pixel_length <= 0:
        return 0.0
    return (bat_length_inches / 12.0) / float(bat_pixel_length)


def bat_pixel_length(data: BodySegmentData, frame_index: int) -> Optional[float]:
    """Knob-to-barrel distance at *frame_index*, or None if either is missing."""
    knob, barrel = data.bat_knob, data.bat_barrel
    if not (0 <= frame_index < len(knob) and 0 <= frame_index < len(barrel)):
        return None
    return distance(knob[frame_index], barrel[frame_index])


# ── Linear velocity ───────────────────────────────────────────────────

def velocity(
    positions: Sequence[SegmentPosition],
    frame_index: int,
    pixel_to_feet_ratio: float,
    frame_rate: float,
    cfg: KinematicsConfig = DEFAULT_CONFIG.kinematics,
) -> float:
    """Speed (ft/s) at *frame_index* by central difference.

    Returns 0 for any index outside ``[2, len-3]`` or a non-positive frame rate.
    """
    half = cfg.half_window_frames
    if frame_rate <= 0 or not _has_window(positions, frame_index, half):
        return 0.0

    p1 = positions[frame_index - half]
    p2 = positions[frame_index + half]

    distance_feet = distance(p1, p2) * pixel_to_feet_ratio
    time_seconds = cfg.window_frames / frame_rate
    return finite_or_zero(distance_feet / time_seconds)


# ── Angular velocity ──────────────────────────────────────────────────

def angular_velocity(
    positions: Sequence[SegmentPosition],
    frame_index: int,
    frame_rate: float,
    cfg: KinematicsConfig = DEFAULT_CONFIG.kinematics,
) -> float:
    """Magnitude of the change in travel direction at *frame_index* (deg/s).

    The direction of motion is taken over ``i-2 → i`` and ``i → i+2``; the
    wrapped difference is spread over the 4-frame window.  Direction-agnostic.
    """
    half = cfg.half_window_frames
    if frame_rate <= 0 or not _has_window(positions, frame_index, half):
        return 0.0

    p1 = positions[frame_index - half]
    p2 = positions[frame_index]
    p3 = positions[frame_index + half]

    angle1 = float(np.arctan2(p2.y - p1.y, p2.x - p1.x))
    angle2 = float(np.arctan2(p3.y - p2.y, p3.x - p2.x))

    diff = angle2 - angle1
    # Wrap to [-pi, pi]
    if diff > math.pi:
        diff -= 2 * math.pi
    elif diff < -math.pi:
        diff += 2 * math.pi

    time_seconds = cfg.window_frames / frame_rate
    return finite_or_zero(abs(float(np.degrees(diff)) / time_seconds))


# ── Peak-before-contact policy ────────────────────────────────────────

def peak_window(contact_frame: int, cfg: KinematicsConfig = DEFAULT_CONFIG.kinematics) -> range:
    """Frames scanned for a "peak": the 10 preceding contact, contact included."""
    return range(max(0, contact_frame - cfg.peak_window_frames), contact_frame + 1)


def windowed_peak(
    value_at: Callable[[int], float],
    contact_frame: int,
    initial: float = 0.0,
    cfg: KinematicsConfig = DEFAULT_CONFIG.kinematics,
) -> float:
    """Max of ``value_at(i)`` over the pre-contact window, never below *initial*.

    This is the one peak convention shared by bat speed, angular velocity and
    linear momentum.
    """
    peak = initial
    for i in peak_window(contact_frame, cfg):
        value = value_at(i)
        if value > peak:
            peak = value
    return peak
