from __future__ import annotations

from typing import Callable, Tuple

from hitting_analyzer.analysis.segment_data import (
    BodySegmentData,
    PlayerPhysicalData,
    SegmentPosition,
    SwingPhases,
    positions_from_xy,
)


def line_track(n: int, dx: float = 10.0, fps: float = 240.0, x0: float = 100.0, y: float = 200.0
               ) -> Tuple[SegmentPosition, ...]:
    """Straight, constant-speed motion along x."""
    return positions_from_xy([(x0 + dx * i, y) for i in range(n)], fps=fps)


def path_track(n: int, fn: Callable[[int], Tuple[float, float]], fps: float = 240.0
               ) -> Tuple[SegmentPosition, ...]:
    return positions_from_xy([fn(i) for i in range(n)], fps=fps)


def turn_track(n: int, turn: int, fps: float = 100.0) -> Tuple[SegmentPosition, ...]:
    """Moves along x until *turn*, then along y: the angular velocity peaks exactly at *turn*."""
    return path_track(n, lambda i: (float(min(i, turn)), float(max(0, i - turn))), fps=fps)


def constant_swing(n: int = 30, dx: float = 10.0, fps: float = 240.0, with_bat: bool = True
                   ) -> BodySegmentData:
    track = line_track(n, dx=dx, fps=fps)
    kwargs = dict(
        pelvis=track,
        torso=track,
        lead_shoulder=track,
        rear_shoulder=track,
        lead_hand=track,
        rear_hand=track,
    )
    if with_bat:
        kwargs["bat_knob"] = track
        kwargs["bat_barrel"] = line_track(n, dx=2 * dx, fps=fps, y=100.0)
    return BodySegmentData(**kwargs)


PLAYER = PlayerPhysicalData(height_inches=72.0, weight_lbs=180.0)
PHASES = SwingPhases(stance=0, load=4, stride_foot_down=8, launch=10, contact=20, extension=25)


def stepped_track(steps, fps: float = 240.0) -> Tuple[SegmentPosition, ...]:
    """Straight motion along x; ``steps[i]`` is the travel from frame i to i+1."""
    xs = [0.0]
    for step in steps:
        xs.append(xs[-1] + step)
    return positions_from_xy([(x, 0.0) for x in xs], fps=fps)


def decelerating_track(n: int, fps: float = 240.0) -> Tuple[SegmentPosition, ...]:
    """100 px/frame until frame 8, 30 until frame 20, then 10.

    Central-difference travel (px over 4 frames): 190 at frame 9, 120 on
    frames 10-18, 100 at 19, 80 at 20, 40 from 22 on.
    """
    return stepped_track([100.0 if i < 8 else 30.0 if i < 20 else 10.0 for i in range(n - 1)], fps=fps)


def reverse_then_turn_track(n: int, fps: float = 240.0) -> Tuple[SegmentPosition, ...]:
    """Reverses direction at frame 5 (180°) and turns 90° onto +y at frame 16."""
    def point(i: int) -> Tuple[float, float]:
        if i <= 5:
            return float(i), 0.0
        if i <= 16:
            return float(10 - i), 0.0
        return -6.0, float(i - 16)
    return path_track(n, point, fps=fps)
