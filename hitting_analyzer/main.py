"""Hitting Analyzer: swing biomechanics and 4 B's grading from the command line.

Usage:
    # Analyse one tracked swing (JSON from the pose pipeline)
    hitting-analyzer analyse swing.json [--report] [--chart] [--output-dir ./output]

    # Grade a flat metric map for a membership tier
    hitting-analyzer grade metrics.json --tier diy [--report] [--chart]

Swing file layout::

    {
      "frameRate": 240,
      "pixelToFeetRatio": 0.01,        # optional, calibrated from the bat if absent
      "player": {"heightInches": 72, "weightLbs": 185},
      "phases": {"stance": 0, "load": 10, "strideFootDown": 20,
                 "launch": 30, "contact": 45, "extension": 55},
      "segments": {"pelvis": [{"x": .., "y": .., "frame": 0, "time": 0.0}, ...], ...}
    }
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .analysis.biomechanics import BiomechanicsMetrics, analyze_biomechanics
from .analysis.kinematic_calculator import bat_pixel_length, calibrate_pixel_to_feet
from .analysis.segment_data import BodySegmentData, PlayerPhysicalData, SwingPhases
from .config.tiers import TIER_ORDER, MembershipTier
from .evaluation.grader import Scorecard, build_scorecard
from .report.report_generator import ReportGenerator
from .report.visualizer import ChartGenerator
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


# =====================================================================
# Input
# =====================================================================

@dataclass(frozen=True)
class SwingInput:
    """One swing as read from disk."""
    data: BodySegmentData
    phases: SwingPhases
    player: PlayerPhysicalData
    frame_rate: float
    pixel_to_feet_ratio: float


def _read_json(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as fh:
        payload = json.load(fh)
    if not isinstance(payload, dict):
        raise ValueError(f"{path}: expected a JSON object")
    return payload


def _as_float(value: Any, what: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{what}: expected a number, got {value!r}") from None


def load_swing(path: str) -> SwingInput:
    """Parse a swing file; the pixel ratio falls back to bat calibration at contact."""
    payload = _read_json(path)
    data = BodySegmentData.from_dict(payload.get("segments", {}))
    phases = SwingPhases.from_dict(payload.get("phases"))
    player = PlayerPhysicalData.from_dict(payload.get("player"))
    frame_rate = _as_float(payload.get("frameRate", payload.get("frame_rate", 0.0)), "frameRate")

    ratio = payload.get("pixelToFeetRatio", payload.get("pixel_to_feet_ratio"))
    if ratio is None:
        length = bat_pixel_length(data, phases.contact)
        ratio = calibrate_pixel_to_feet(length) if length is not None else 0.0
        logger.info("Calibrated pixel-to-feet ratio from bat length: %.6f ft/px", ratio)

    return SwingInput(data, phases, player, frame_rate, _as_float(ratio, "pixelToFeetRatio"))


def load_metrics(path: str) -> Dict[str, Optional[float]]:
    """Read a flat ``{metric_id: value}`` map (a top-level ``metrics`` key is also accepted)."""
    payload = _read_json(path)
    raw = payload.get("metrics", payload)
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: metrics must be an object of metric_id: value")
    out: Dict[str, Optional[float]] = {}
    for key, value in raw.items():
        out[key] = None if value is None else _as_float(value, f"metrics.{key}")
    return out


# =====================================================================
# Commands
# =====================================================================

def run_analyse(args: argparse.Namespace) -> Dict[str, Any]:
    swing = load_swing(args.input)
    metrics = analyze_biomechanics(
        swing.data,
        swing.phases,
        swing.player,
        swing.pixel_to_feet_ratio,
        swing.frame_rate,
        include_timeline=not args.no_timeline,
    )
    result: Dict[str, Any] = {"biomechanics": metrics.to_dict()}
    result.update(_write_outputs(args, Path(args.input).stem, metrics=metrics, contact=swing.phases.contact))
    return result


def run_grade(args: argparse.Namespace) -> Dict[str, Any]:
    scorecard = build_scorecard(load_metrics(args.input), args.tier)
    result: Dict[str, Any] = {"scorecard": scorecard.to_dict()}
    result.update(_write_outputs(args, Path(args.input).stem, scorecard=scorecard))
    return result


def _write_outputs(
    args: argparse.Namespace,
    name: str,
    metrics: Optional[BiomechanicsMetrics] = None,
    scorecard: Optional[Scorecard] = None,
    contact: Optional[int] = None,
) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if not (args.report or args.chart):
        return out

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    chart_paths: Dict[str, str] = {}
    if args.chart:
        if metrics is not None and metrics.frame_metrics:
            path = ChartGenerator.timeline_chart(
                metrics.frame_metrics, str(output_dir / f"{name}_timeline.png"), contact_frame=contact,
            )
            if path:
                chart_paths["timeline"] = path
        if scorecard is not None:
            path = ChartGenerator.scorecard_chart(scorecard, str(output_dir / f"{name}_scorecard.png"))
            if path:
                chart_paths["scorecard"] = path
        out["charts"] = chart_paths

    if args.report:
        out["report"] = ReportGenerator(str(output_dir)).generate(
            metrics=metrics, scorecard=scorecard, swing_name=name, chart_paths=chart_paths,
        )
    return out


# =====================================================================
# CLI
# =====================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hitting-analyzer",
        description="Swing biomechanics and 4 B's grading",
    )
    parser.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING, ...")
    parser.add_argument("--log-file", default=None)
    subparsers = parser.add_subparsers(dest="command")

    def add_output_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--output-dir", default="./output")
        p.add_argument("--report", action="store_true", help="write a Markdown report")
        p.add_argument("--chart", action="store_true", help="write PNG charts")

    analyse_parser = subparsers.add_parser("analyse", help="analyse one tracked swing")
    analyse_parser.add_argument("input", help="swing JSON file")
    analyse_parser.add_argument("--no-timeline", action="store_true",
                                help="omit the per-frame timeline from the output")
    add_output_args(analyse_parser)

    grade_parser = subparsers.add_parser("grade", help="grade a metric map with the 4 B's")
    grade_parser.add_argument("input", help="metrics JSON file")
    grade_parser.add_argument("--tier", default=MembershipTier.FREE.value,
                              choices=[t.value for t in TIER_ORDER])
    add_output_args(grade_parser)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    commands = {"analyse": run_analyse, "grade": run_grade}
    if args.command not in commands:
        parser.print_help()
        return 1

    try:
        result = commands[args.command](args)
    except (OSError, ValueError, KeyError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    json.dump(result, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
