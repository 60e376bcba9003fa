"""Analysis module for swing biomechanics calculations."""

from .segment_data import (
    SegmentPosition,
    BodySegmentData,
    PlayerPhysicalData,
    SwingPhases,
    positions_from_xy,
)
from .kinematic_calculator import (
    distance,
    velocity,
    angular_velocity,
    calibrate_pixel_to_feet,
    windowed_peak,
)
from .segment_dynamics import BodyModel, SegmentModel
from .momentum import BatSpeedMetrics, KineticEnergy, calculate_bat_speed
from .power import FrameMetrics, PowerMetrics, build_frame_timeline, calculate_power
from .efficiency import EfficiencyMetrics
from .biomechanics import BiomechanicsMetrics, analyze_biomechanics
