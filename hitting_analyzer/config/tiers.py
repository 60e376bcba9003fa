"""Membership tiers and per-tier capability tables.

Tiers are totally ordered: ``free < challenge < diy < elite``.  Access never
shrinks as the tier rises.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union


class MembershipTier(str, Enum):
    FREE = "free"
    CHALLENGE = "challenge"
    DIY = "diy"
    ELITE = "elite"

    @property
    def rank(self) -> int:
        return TIER_ORDER.index(self)

    @classmethod
    def coerce(cls, tier: Union["MembershipTier", str]) -> "MembershipTier":
        """Accept either the enum member or its string value."""
        if isinstance(tier, cls):
            return tier
        return cls(str(tier).lower())


TIER_ORDER: Tuple[MembershipTier, ...] = (
    MembershipTier.FREE,
    MembershipTier.CHALLENGE,
    MembershipTier.DIY,
    MembershipTier.ELITE,
)


@dataclass(frozen=True)
class TierAccess:
    """What a membership tier unlocks.  Configuration data only."""

    tier: MembershipTier
    swings_per_month: Optional[int]   # None = unlimited
    price: str
    brain_access: bool
    body_access: str                  # none | basic | enhanced | full
    bat_access: str                   # none | estimated | improved | sensor
    ball_access: str                  # none | estimated | improved | sensor
    features: Tuple[str, ...] = ()

    @property
    def unlimited_swings(self) -> bool:
        return self.swings_per_month is None


TIER_ACCESS: Dict[MembershipTier, TierAccess] = {
    MembershipTier.FREE: TierAccess(
        tier=MembershipTier.FREE,
        swings_per_month=2,
        price="$0/year",
        brain_access=False,
        body_access="basic",
        bat_access="none",
        ball_access="none",
        features=(
            "Basic body mechanics (visual only)",
            "Kinematic sequence visualization",
            "Posture and balance analysis",
            "2 swings per month",
        ),
    ),
    MembershipTier.CHALLENGE: TierAccess(
        tier=MembershipTier.CHALLENGE,
        swings_per_month=None,
        price="$9.97 for 7 days",
        brain_access=True,
        body_access="basic",
        bat_access="estimated",
        ball_access="estimated",
        features=(
            "Unlimited swings for 7 days",
            "All 4 B's analysis",
            "AI-estimated bat speed",
            "AI-estimated exit velocity",
            "Swing decision analysis",
            "Basic benchmarks",
        ),
    ),
    MembershipTier.DIY: TierAccess(
        tier=MembershipTier.DIY,
        swings_per_month=None,
        price="$297/year",
        brain_access=True,
        body_access="enhanced",
        bat_access="improved",
        ball_access="improved",
        features=(
            "Unlimited swings",
            "Enhanced 4 B's analysis",
            "Improved AI estimates",
            "Progress tracking",
            "MLB benchmarks",
            "Detailed reports",
            "Drill recommendations",
        ),
    ),
    MembershipTier.ELITE: TierAccess(
        tier=MembershipTier.ELITE,
        swings_per_month=None,
        price="$997/year",
        brain_access=True,
        body_access="full",
        bat_access="sensor",
        ball_access="sensor",
        features=(
            "Unlimited swings",
            "Sensor-verified accuracy",
            "Blast Motion integration",
            "Reboot Motion 3D analysis",
            "Professional reports",
            "MLB comparisons",
            "Advanced biomechanics",
            "Injury risk analysis",
        ),
    ),
}


def get_tier_access(tier: Union[MembershipTier, str]) -> TierAccess:
    return TIER_ACCESS[MembershipTier.coerce(tier)]
