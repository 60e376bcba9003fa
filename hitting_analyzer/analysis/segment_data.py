"""Per-segment position time series and swing context.

The pose pipeline emits one ``SegmentPosition`` per tracked segment per
frame.  ``BodySegmentData`` groups the eight frame-aligned sequences of a
single swing; ``SwingPhases`` and ``PlayerPhysicalData`` carry the rest of
the per-swing input.  Everything here is read-only once built.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple

from ..config.segments import PAYLOAD_KEYS, PHASE_NAMES, PHASE_PAYLOAD_KEYS, SEGMENT_NAMES


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{what}: expected an object, got {type(data).__name__}")
    return data


def _field(data: Mapping[str, Any], keys: Tuple[str, ...], convert: Callable[[Any], Any], what: str) -> Any:
    """First present key of *keys*, converted; ValueError names the field."""
    for key in keys:
        if data.get(key) is not None:
            try:
                return convert(data[key])
            except (TypeError, ValueError, OverflowError):
                raise ValueError(f"{what}.{key}: invalid value {data[key]!r}") from None
    raise ValueError(f"{what}: missing field {keys[0]!r}")


def _to_int(value: Any) -> int:
    return int(float(value))


@dataclass(frozen=True)
class SegmentPosition:
    """A single tracked point (pixels) for one segment at one frame."""
    x: float
    y: float
    frame: int
    time: float  # seconds

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SegmentPosition":
        data = _mapping(data, "position")
        return cls(
            x=_field(data, ("x",), float, "position"),
            y=_field(data, ("y",), float, "position"),
            frame=_field(data, ("frame",), _to_int, "position") if data.get("frame") is not None else 0,
            time=_field(data, ("time",), float, "position") if data.get("time") is not None else 0.0,
        )


def positions_from_xy(
    points: Iterable[Tuple[float, float]],
    fps: float = 30.0,
    start_frame: int = 0,
) -> Tuple[SegmentPosition, ...]:
    """Build a frame-indexed sequence from bare (x, y) pairs."""
    out = []
    for i, (x, y) in enumerate(points):
        frame = start_frame + i
        out.append(SegmentPosition(float(x), float(y), frame, frame / fps if fps > 0 else 0.0))
    return tuple(out)


@dataclass(frozen=True)
class BodySegmentData:
    """Frame-aligned position sequences for every tracked segment.

    Frame ``i`` in one sequence is assumed time-synchronised with frame ``i``
    in all the others.  Alignment is the caller's contract and is not
    validated here.
    """
    pelvis: Tuple[SegmentPosition, ...] = ()
    torso: Tuple[SegmentPosition, ...] = ()
    lead_shoulder: Tuple[SegmentPosition, ...] = ()
    rear_shoulder: Tuple[SegmentPosition, ...] = ()
    lead_hand: Tuple[SegmentPosition, ...] = ()
    rear_hand: Tuple[SegmentPosition, ...] = ()
    bat_knob: Tuple[SegmentPosition, ...] = ()
    bat_barrel: Tuple[SegmentPosition, ...] = ()

    def segment(self, name: str) -> Tuple[SegmentPosition, ...]:
        if name not in SEGMENT_NAMES:
            raise KeyError(f"Unknown segment: {name}")
        return getattr(self, name)

    @property
    def num_frames(self) -> int:
        """Length of the pelvis track (the reference sequence)."""
        return len(self.pelvis)

    def lengths(self) -> Dict[str, int]:
        return {f.name: len(getattr(self, f.name)) for f in fields(self)}

    def is_aligned(self) -> bool:
        """True if every non-empty track has the same length."""
        sizes = {n for n in self.lengths().values() if n > 0}
        return len(sizes) <= 1

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BodySegmentData":
        """Parse the pose pipeline payload (camelCase or snake_case keys)."""
        kwargs: Dict[str, Tuple[SegmentPosition, ...]] = {}
        for key, seq in _mapping(data, "segments").items():
            name = PAYLOAD_KEYS.get(key, key)
            if name not in SEGMENT_NAMES:
                continue
            if seq is not None and not isinstance(seq, (list, tuple)):
                raise ValueError(f"segments.{key}: expected a list of positions")
            kwargs[name] = tuple(SegmentPosition.from_dict(p) for p in seq or ())
        return cls(**kwargs)


@dataclass(frozen=True)
class PlayerPhysicalData:
    """Anthropometric input.

    ``age`` and ``experience_level`` are carried for the record only: the
    segment model uses population averages regardless of their values.
    """
    height_inches: float
    weight_lbs: float
    age: Optional[int] = None
    experience_level: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PlayerPhysicalData":
        data = _mapping(data, "player")
        return cls(
            height_inches=_field(data, ("heightInches", "height_inches"), float, "player"),
            weight_lbs=_field(data, ("weightLbs", "weight_lbs"), float, "player"),
            age=data.get("age"),
            experience_level=data.get("experienceLevel", data.get("experience_level")),
        )


@dataclass(frozen=True)
class SwingPhases:
    """Frame indices of the swing phases.

    Indices are expected to be non-decreasing in temporal order; ``contact``
    is the pivot for every peak-window scan.
    """
    stance: int
    load: int
    stride_foot_down: int
    launch: int
    contact: int
    extension: int

    def as_tuple(self) -> Tuple[int, ...]:
        return tuple(getattr(self, name) for name in PHASE_NAMES)

    def is_ordered(self) -> bool:
        seq = self.as_tuple()
        return all(a <= b for a, b in zip(seq, seq[1:]))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SwingPhases":
        data = _mapping(data, "phases")
        camel = {name: key for key, name in PHASE_PAYLOAD_KEYS.items()}
        kwargs = {
            name: _field(data, (camel[name], name), _to_int, "phases")
            for name in PHASE_NAMES
        }
        return cls(**kwargs)

