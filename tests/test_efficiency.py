from __future__ import annotations

import pytest

from hitting_analyzer.analysis.efficiency import (
    energy_transfer_efficiency,
    momentum_retention,
    sequencing_efficiency,
)

from helpers import line_track, turn_track


def test_energy_transfer_ratio_and_clamp():
    assert energy_transfer_efficiency(50.0, 100.0) == pytest.approx(50.0)
    assert energy_transfer_efficiency(200.0, 100.0) == 100.0
    assert energy_transfer_efficiency(1.0, 3.0) == pytest.approx(33.3)


def test_energy_transfer_without_body_energy_is_zero():
    assert energy_transfer_efficiency(50.0, 0.0) == 0.0


def test_momentum_retention_without_initial_momentum_is_full():
    assert momentum_retention(0.0, 5.0) == 100.0
    assert momentum_retention(0.0, 0.0) == 100.0


def test_momentum_retention_ratio_capped():
    assert momentum_retention(10.0, 5.0) == pytest.approx(50.0)
    assert momentum_retention(10.0, 20.0) == 100.0
    assert momentum_retention(3.0, 1.0) == pytest.approx(33.3)


def test_sequencing_ideal_timing_scores_100():
    # 100 fps: pelvis peaks at 12, torso 30 ms later, contact 60 ms after the pelvis
    pelvis = turn_track(30, 12)
    torso = turn_track(30, 15)
    assert sequencing_efficiency(pelvis, torso, 10, 18, 100.0) == pytest.approx(100.0)


def test_sequencing_without_rotation_defaults_peaks_to_launch():
    track = line_track(30)
    # torso delay 0 s -> 70, bat delay 0.06 s -> 100
    assert sequencing_efficiency(track, track, 10, 16, 100.0) == pytest.approx(85.0)


def test_sequencing_penalties_floor_at_zero():
    pelvis = turn_track(60, 12)
    torso = turn_track(60, 40)
    score = sequencing_efficiency(pelvis, torso, 10, 50, 100.0)
    # torso 280 ms late -> 0; bat 380 ms -> 0
    assert score == 0.0


def test_sequencing_zero_frame_rate():
    track = line_track(30)
    assert sequencing_efficiency(track, track, 10, 16, 0.0) == 0.0


def test_energy_transfer_always_a_percentage():
    for bat in (0.0, 0.5, 10.0, 1e9):
        for body in (0.0, 1e-9, 1.0, 250.0):
            assert 0.0 <= energy_transfer_efficiency(bat, body) <= 100.0
