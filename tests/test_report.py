from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from hitting_analyzer.analysis.biomechanics import analyze_biomechanics
from hitting_analyzer.evaluation.grader import build_scorecard
from hitting_analyzer.main import load_swing, main
from hitting_analyzer.report.report_generator import ReportGenerator
from hitting_analyzer.report.visualizer import ChartGenerator

from helpers import PHASES, PLAYER, constant_swing


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _swing_payload(n: int = 30, with_ratio: bool = True) -> dict:
    def track(dx, y):
        return [{"x": 100.0 + dx * i, "y": y, "frame": i, "time": i / 240.0} for i in range(n)]

    payload = {
        "frameRate": 240,
        "player": {"heightInches": 72, "weightLbs": 180},
        "phases": {"stance": 0, "load": 4, "strideFootDown": 8, "launch": 10, "contact": 20, "extension": 25},
        "segments": {
            "pelvis": track(10.0, 200.0),
            "torso": track(10.0, 150.0),
            "leadShoulder": track(10.0, 120.0),
            "batKnob": track(20.0, 100.0),
            "batBarrel": track(20.0, 400.0),
        },
    }
    if with_ratio:
        payload["pixelToFeetRatio"] = 0.01
    return payload


def test_markdown_report_sections(tmp_path):
    metrics = analyze_biomechanics(constant_swing(), PHASES, PLAYER, 0.01, 240.0)
    card = build_scorecard({"kinematic_sequence": 90.0, "tempo_ratio": 3.0}, "free")
    gen = ReportGenerator(str(tmp_path))

    text = gen.render(metrics, card, swing_name="test")
    assert "## 4 B's Scorecard" in text
    assert "| BODY | Mechanics & Movement | Graded | 92.5 (A) |" in text
    assert "Locked (upgrade required)" in text
    assert "Bat Speed (Verified) (elite, needs Blast Motion)" in text
    assert "## Biomechanics" in text
    assert "Momentum retention | 100.0 %" in text

    path = Path(gen.generate(metrics, card, swing_name="test"))
    assert path.exists()
    assert path.read_text(encoding="utf-8").startswith("# Swing Analysis Report")


def test_report_without_bat_track_says_no_data():
    metrics = analyze_biomechanics(constant_swing(with_bat=False), PHASES, PLAYER, 0.01, 240.0)
    text = ReportGenerator().render(metrics=metrics)
    assert "Energy transfer | no data" in text
    assert "Bat speed |" not in text


def test_charts_written(tmp_path):
    metrics = analyze_biomechanics(constant_swing(), PHASES, PLAYER, 0.01, 240.0)
    card = build_scorecard({"kinematic_sequence": 90.0, "bat_speed": 70.0}, "challenge")

    timeline_png = ChartGenerator.timeline_chart(metrics.frame_metrics, str(tmp_path / "t.png"), contact_frame=20)
    score_png = ChartGenerator.scorecard_chart(card, str(tmp_path / "s.png"))
    assert Path(timeline_png).stat().st_size > 0
    assert Path(score_png).stat().st_size > 0
    assert ChartGenerator.timeline_chart(metrics.frame_metrics[:1], str(tmp_path / "x.png")) == ""


def test_timeline_legend_labels_the_drawn_contact_line(tmp_path, monkeypatch):
    import matplotlib.pyplot as plt

    metrics = analyze_biomechanics(constant_swing(), PHASES, PLAYER, 0.01, 240.0)
    monkeypatch.setattr(plt, "close", lambda *args, **kwargs: None)
    ChartGenerator.timeline_chart(metrics.frame_metrics, str(tmp_path / "t.png"), contact_frame=20)
    fig = plt.gcf()
    monkeypatch.undo()

    handles, labels = fig.axes[0].get_legend_handles_labels()
    assert labels == ["Contact"]
    assert handles[0].get_linewidth() == 2
    assert list(handles[0].get_xdata()) == [20, 20]
    for ax in fig.axes[1:]:
        assert ax.get_legend_handles_labels()[1] == []
    plt.close(fig)


def test_load_swing_calibrates_from_bat_when_ratio_missing(tmp_path):
    path = tmp_path / "swing.json"
    path.write_text(json.dumps(_swing_payload(with_ratio=False)), encoding="utf-8")
    swing = load_swing(str(path))
    # knob to barrel is 300 px at contact
    assert swing.pixel_to_feet_ratio == pytest.approx((34.0 / 12.0) / 300.0)
    assert swing.phases.stride_foot_down == 8
    assert swing.frame_rate == 240.0


def test_cli_analyse(tmp_path, capsys):
    path = tmp_path / "swing.json"
    path.write_text(json.dumps(_swing_payload()), encoding="utf-8")

    code = main(["analyse", str(path), "--report", "--chart", "--output-dir", str(tmp_path / "out")])
    assert code == 0
    out = json.loads(capsys.readouterr().out)
    bio = out["biomechanics"]
    assert bio["linear_momentum"]["pelvis"] > 0
    assert bio["frame_metrics"][0]["frame"] == 10
    assert Path(out["report"]).exists()
    assert Path(out["charts"]["timeline"]).exists()


def test_cli_analyse_without_timeline(tmp_path, capsys):
    path = tmp_path / "swing.json"
    path.write_text(json.dumps(_swing_payload()), encoding="utf-8")
    assert main(["analyse", str(path), "--no-timeline"]) == 0
    assert json.loads(capsys.readouterr().out)["biomechanics"]["frame_metrics"] is None


def test_cli_grade(tmp_path, capsys):
    path = tmp_path / "metrics.json"
    path.write_text(json.dumps({"metrics": {"kinematic_sequence": 90, "tempo_ratio": 3.0, "bat_speed": 65}}),
                    encoding="utf-8")
    assert main(["grade", str(path), "--tier", "challenge"]) == 0
    card = json.loads(capsys.readouterr().out)["scorecard"]
    assert card["categories"]["body"]["grade"] == pytest.approx(92.5)
    assert card["categories"]["bat"]["grade"] == pytest.approx(50.0)
    assert card["categories"]["brain"]["state"] == "educational_only"
    assert card["overall_grade"] == pytest.approx(71.25)


def test_cli_missing_file(tmp_path, capsys):
    assert main(["grade", str(tmp_path / "nope.json")]) == 1
    assert "Error" in capsys.readouterr().err


def _without(payload: dict, section: str, key: str) -> dict:
    payload[section] = {k: v for k, v in payload[section].items() if k != key}
    return payload


@pytest.mark.parametrize(
    "payload, field",
    [
        (_without(_swing_payload(), "player", "heightInches"), "heightInches"),
        (dict(_swing_payload(), phases={"launch": 10, "contact": 20}), "stance"),
        (dict(_swing_payload(), phases={"stance": 0, "load": 4, "strideFootDown": 8,
                                        "launch": "late", "contact": 20, "extension": 25}), "launch"),
        (dict(_swing_payload(), frameRate=None), "frameRate"),
        (dict(_swing_payload(), segments={"pelvis": [{"x": 1.0}]}), "'y'"),
        (dict(_swing_payload(), segments={"pelvis": 5}), "segments.pelvis"),
        (dict(_swing_payload(), player=[72, 180]), "player"),
    ],
)
def test_cli_analyse_malformed_swing_exits_1(tmp_path, capsys, payload, field):
    path = tmp_path / "swing.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    assert main(["analyse", str(path)]) == 1
    err = capsys.readouterr().err
    assert "Error" in err
    assert field in err


@pytest.mark.parametrize(
    "payload, field",
    [
        ({"metrics": [1, 2]}, "metrics"),
        ({"metrics": {"bat_speed": {"mph": 65}}}, "metrics.bat_speed"),
        ({"bat_speed": "fast"}, "metrics.bat_speed"),
    ],
)
def test_cli_grade_malformed_metrics_exits_1(tmp_path, capsys, payload, field):
    path = tmp_path / "metrics.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    assert main(["grade", str(path)]) == 1
    assert field in capsys.readouterr().err


def test_cli_without_command(capsys):
    assert main([]) == 1
