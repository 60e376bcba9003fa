"""Tracked body-segment definitions.

Single source of truth for segment names as they appear on
``BodySegmentData`` and in the pose pipeline's JSON payload.
"""

from typing import Dict, Tuple

# ── Tracked segments (attribute order = payload order) ────────────────
SEGMENT_NAMES: Tuple[str, ...] = (
    "pelvis",
    "torso",
    "lead_shoulder",
    "rear_shoulder",
    "lead_hand",
    "rear_hand",
    "bat_knob",
    "bat_barrel",
)

# camelCase keys emitted by the pose pipeline -> attribute names
PAYLOAD_KEYS: Dict[str, str] = {
    "pelvis": "pelvis",
    "torso": "torso",
    "leadShoulder": "lead_shoulder",
    "rearShoulder": "rear_shoulder",
    "leadHand": "lead_hand",
    "rearHand": "rear_hand",
    "batKnob": "bat_knob",
    "batBarrel": "bat_barrel",
}

# Swing phase frame indices, in temporal order
PHASE_NAMES: Tuple[str, ...] = (
    "stance",
    "load",
    "stride_foot_down",
    "launch",
    "contact",
    "extension",
)

PHASE_PAYLOAD_KEYS: Dict[str, str] = {
    "stance": "stance",
    "load": "load",
    "strideFootDown": "stride_foot_down",
    "launch": "launch",
    "contact": "contact",
    "extension": "extension",
}
