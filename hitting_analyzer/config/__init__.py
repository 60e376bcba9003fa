"""Configuration module for Hitting Analyzer."""

from .framework_config import (
    EngineConfig,
    DEFAULT_CONFIG,
)
from .segments import (
    SEGMENT_NAMES,
    PHASE_NAMES,
)
from .tiers import (
    MembershipTier,
    TierAccess,
    TIER_ORDER,
    TIER_ACCESS,
    get_tier_access,
)
