from __future__ import annotations

import math

import pytest

from hitting_analyzer.analysis.biomechanics import analyze_biomechanics
from hitting_analyzer.analysis.kinematic_calculator import angular_velocity, velocity
from hitting_analyzer.analysis.segment_data import BodySegmentData, PlayerPhysicalData, SwingPhases
from hitting_analyzer.analysis.segment_dynamics import BodyModel

from helpers import PHASES, PLAYER, constant_swing, decelerating_track, line_track, reverse_then_turn_track


def _numbers(value):
    """Yield every number in a nested to_dict() structure."""
    if isinstance(value, dict):
        for v in value.values():
            yield from _numbers(v)
    elif isinstance(value, (list, tuple)):
        for v in value:
            yield from _numbers(v)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        yield value


def test_constant_velocity_swing_end_to_end():
    m = analyze_biomechanics(constant_swing(dx=10.0), PHASES, PLAYER, 0.01, 240.0)
    body = BodyModel.from_player(PLAYER)
    pelvis_speed = 10.0 * 0.01 * 240.0

    assert m.linear_momentum.pelvis == pytest.approx(body.pelvis.mass * pelvis_speed)
    assert m.linear_momentum.total == pytest.approx((body.pelvis.mass + body.torso.mass) * pelvis_speed)
    assert m.linear_momentum.peak == pytest.approx(m.linear_momentum.total)

    # straight-line motion has no rotation
    assert m.angular_velocity.pelvis == pytest.approx(0.0)
    assert m.rotational_momentum.total == pytest.approx(0.0)
    assert m.kinetic_energy.total == pytest.approx(
        0.5 * (body.pelvis.mass + body.torso.mass) * pelvis_speed ** 2)

    # steady kinetic energy means no power
    assert m.power.peak_power == pytest.approx(0.0)
    assert m.efficiency.momentum_retention == pytest.approx(100.0)

    bat_speed = 20.0 * 0.01 * 240.0
    expected_transfer = 0.5 * body.bat.mass * bat_speed ** 2 / m.kinetic_energy.total * 100.0
    assert m.efficiency.energy_transfer == pytest.approx(expected_transfer, abs=0.05)
    assert m.bat_speed.bat_speed == pytest.approx(bat_speed * 0.681818)


def test_peaks_come_from_the_ten_frames_before_contact():
    data = BodySegmentData(pelvis=reverse_then_turn_track(30), torso=decelerating_track(30))
    m = analyze_biomechanics(data, PHASES, PLAYER, 0.01, 240.0)
    body = BodyModel.from_player(PLAYER)

    # pelvis turns 90° at frame 16 and runs straight at contact
    assert m.angular_velocity.pelvis == pytest.approx(0.0, abs=1e-9)
    assert m.angular_velocity.peak_pelvis == pytest.approx(90.0 / (4 / 240.0))
    assert m.angular_velocity.peak_pelvis > m.angular_velocity.pelvis
    # the 180° reversal at frame 5 lies before the window
    assert angular_velocity(data.pelvis, 5, 240.0) == pytest.approx(180.0 / (4 / 240.0))
    assert m.angular_velocity.peak_torso == pytest.approx(0.0, abs=1e-9)

    # px over 4 frames -> ft/s; pelvis 4 px at contact and on frames 10-14, torso 120 px on 10-18, 80 at contact
    scale = 0.01 / (4 / 240.0)
    assert m.linear_momentum.total == pytest.approx(scale * (4.0 * body.pelvis.mass + 80.0 * body.torso.mass))
    assert m.linear_momentum.peak == pytest.approx(scale * (4.0 * body.pelvis.mass + 120.0 * body.torso.mass))
    # torso moves 190 px at frame 9, outside the window
    assert velocity(data.torso, 9, 0.01, 240.0) == pytest.approx(190.0 * scale)


def test_sequencing_for_non_rotating_swing():
    m = analyze_biomechanics(constant_swing(), PHASES, PLAYER, 0.01, 240.0)
    # peaks default to launch: torso 0 ms -> 70, contact 10 frames later (41.7 ms) -> 90.8
    assert m.efficiency.sequencing == pytest.approx(80.4)


def test_doubling_frame_rate_doubles_velocity_terms():
    slow = analyze_biomechanics(constant_swing(), PHASES, PLAYER, 0.01, 120.0)
    fast = analyze_biomechanics(constant_swing(), PHASES, PLAYER, 0.01, 240.0)
    assert fast.linear_momentum.pelvis == pytest.approx(2 * slow.linear_momentum.pelvis)
    assert fast.bat_speed.bat_speed == pytest.approx(2 * slow.bat_speed.bat_speed)


def test_timeline_present_only_when_requested():
    data = constant_swing()
    with_timeline = analyze_biomechanics(data, PHASES, PLAYER, 0.01, 240.0)
    without = analyze_biomechanics(data, PHASES, PLAYER, 0.01, 240.0, include_timeline=False)
    assert [f.frame for f in with_timeline.frame_metrics] == list(range(10, 26))
    assert without.frame_metrics is None
    assert without.efficiency == with_timeline.efficiency


def test_missing_bat_track():
    m = analyze_biomechanics(constant_swing(with_bat=False), PHASES, PLAYER, 0.01, 240.0)
    assert m.bat_speed is None
    assert m.efficiency.energy_transfer is None
    assert m.linear_momentum.total > 0


def test_static_swing_has_zero_transfer_and_full_retention():
    m = analyze_biomechanics(constant_swing(dx=0.0), PHASES, PLAYER, 0.01, 240.0)
    assert m.kinetic_energy.total == 0.0
    assert m.efficiency.energy_transfer == 0.0
    assert m.efficiency.momentum_retention == 100.0


@pytest.mark.parametrize(
    "data, ratio, fps",
    [
        (BodySegmentData(), 0.01, 240.0),
        (constant_swing(), 0.0, 0.0),
        (constant_swing(), float("nan"), 240.0),
        (BodySegmentData(pelvis=line_track(3), bat_barrel=line_track(3)), 0.01, 240.0),
        # tracker blow-up: squared speeds leave the float range
        (constant_swing(dx=1e160), 1.0, 240.0),
    ],
)
def test_degenerate_input_never_produces_non_finite_numbers(data, ratio, fps):
    m = analyze_biomechanics(data, PHASES, PLAYER, ratio, fps)
    for value in _numbers(m.to_dict()):
        assert math.isfinite(value)


def test_contact_out_of_range_degrades_to_zero():
    phases = SwingPhases(0, 5, 10, 15, 99, 105)
    m = analyze_biomechanics(constant_swing(), phases, PLAYER, 0.01, 240.0)
    assert m.bat_speed.bat_speed == 0.0
    assert m.linear_momentum.total == 0.0
    assert m.power.power_at_contact == 0.0


def test_weightless_player():
    m = analyze_biomechanics(constant_swing(), PHASES, PlayerPhysicalData(72.0, 0.0), 0.01, 240.0)
    assert m.kinetic_energy.total == 0.0
    assert m.efficiency.energy_transfer == 0.0
    assert m.efficiency.momentum_retention == 100.0


def test_to_dict_shape():
    d = analyze_biomechanics(constant_swing(), PHASES, PLAYER, 0.01, 240.0).to_dict()
    assert set(d) == {
        "bat_speed", "angular_velocity", "linear_momentum", "rotational_momentum",
        "kinetic_energy", "power", "efficiency", "frame_metrics",
    }
    assert set(d["bat_speed"]) == {"bat_speed", "peak_bat_speed", "bat_speed_at_impact"}
    assert d["frame_metrics"][0]["frame"] == 10
