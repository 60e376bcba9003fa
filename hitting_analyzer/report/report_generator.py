"""Markdown swing report: biomechanics tables and the 4 B's scorecard."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from ..analysis.biomechanics import BiomechanicsMetrics
from ..evaluation.benchmarks import get_benchmarks
from ..evaluation.grader import CategoryState, Scorecard, get_category_info
from ..evaluation.metric_catalog import DEFAULT_CATALOG, MetricCatalog


class ReportGenerator:
    """Render swing analysis results as a Markdown report."""

    STATE_LABELS = {
        CategoryState.EDUCATIONAL_ONLY: "Educational only",
        CategoryState.LOCKED: "Locked (upgrade required)",
        CategoryState.NO_DATA: "No data",
        CategoryState.GRADED: "Graded",
    }

    def __init__(self, output_dir: str = "./output", catalog: MetricCatalog = DEFAULT_CATALOG):
        self.output_dir = Path(output_dir)
        self.catalog = catalog

    def generate(
        self,
        metrics: Optional[BiomechanicsMetrics] = None,
        scorecard: Optional[Scorecard] = None,
        swing_name: str = "swing",
        chart_paths: Optional[Dict[str, str]] = None,
    ) -> str:
        """Write the report to ``output_dir`` and return its path."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        report_path = self.output_dir / f"swing_report_{swing_name}.md"
        report_path.write_text(self.render(metrics, scorecard, swing_name, chart_paths), encoding="utf-8")
        return str(report_path)

    def render(
        self,
        metrics: Optional[BiomechanicsMetrics] = None,
        scorecard: Optional[Scorecard] = None,
        swing_name: str = "swing",
        chart_paths: Optional[Dict[str, str]] = None,
    ) -> str:
        chart_paths = chart_paths or {}
        lines: List[str] = []

        lines.append("# Swing Analysis Report")
        lines.append("")
        lines.append(f"**Swing**: {swing_name}  ")
        lines.append(f"**Generated**: {datetime.now().strftime('%Y-%m-%d %H:%M')}  ")
        lines.append("")

        if scorecard is not None:
            lines.extend(self._scorecard_section(scorecard, chart_paths))
        if metrics is not None:
            lines.extend(self._biomechanics_section(metrics, chart_paths))

        lines.append("---")
        lines.append("")
        lines.append("Segment masses and inertias are population averages. "
                     "Use the numbers to compare swings, not as absolute measurements.")
        lines.append("")
        return "\n".join(lines)

    # ── 4 B's ────────────────────────────────────────────────────────

    def _scorecard_section(self, scorecard: Scorecard, chart_paths: Dict[str, str]) -> List[str]:
        lines = ["---", "", "## 4 B's Scorecard", ""]
        lines.append(f"**Membership tier**: {scorecard.tier.value}  ")
        if scorecard.overall_letter is None:
            lines.append("**Overall grade**: no graded category")
        else:
            lines.append(f"**Overall grade**: {scorecard.overall_grade:.1f} ({scorecard.overall_letter})")
        lines.append("")

        lines.append("| Category | Focus | Status | Grade |")
        lines.append("|----------|-------|--------|-------|")
        for result in scorecard.categories:
            info = get_category_info(result.category)
            grade = f"{result.grade:.1f} ({result.letter})" if result.is_graded else "-"
            lines.append(f"| {info['name']} | {info['description']} | {self.STATE_LABELS[result.state]} | {grade} |")
        lines.append("")

        if "scorecard" in chart_paths:
            lines.append(f"![4 B's grades]({chart_paths['scorecard']})")
            lines.append("")

        locked = [m for r in scorecard.categories for m in r.locked_metrics]
        if locked:
            lines.append("### Locked metrics")
            lines.append("")
            for metric_id in locked:
                metric = self.catalog.get(metric_id)
                if metric is None:
                    continue
                sensor = f", needs {metric.sensor_required}" if metric.sensor_required else ""
                lines.append(f"- {metric.name} ({metric.required_tier.value}{sensor})")
            lines.append("")

        if scorecard.unknown_metrics:
            lines.append(f"> Ignored metrics not in the catalog: {', '.join(scorecard.unknown_metrics)}")
            lines.append("")
        return lines

    # ── Biomechanics ─────────────────────────────────────────────────

    def _biomechanics_section(self, m: BiomechanicsMetrics, chart_paths: Dict[str, str]) -> List[str]:
        lines = ["---", "", "## Biomechanics", ""]
        lines.append("| Metric | Value |")
        lines.append("|--------|-------|")

        rows = []
        if m.bat_speed is not None:
            rows += [
                ("Bat speed", m.bat_speed.bat_speed, "mph"),
                ("Peak bat speed", m.bat_speed.peak_bat_speed, "mph"),
            ]
        rows += [
            ("Pelvis angular velocity", m.angular_velocity.pelvis, "deg/s"),
            ("Torso angular velocity", m.angular_velocity.torso, "deg/s"),
            ("Lead shoulder angular velocity", m.angular_velocity.shoulder, "deg/s"),
            ("Peak pelvis angular velocity", m.angular_velocity.peak_pelvis, "deg/s"),
            ("Peak torso angular velocity", m.angular_velocity.peak_torso, "deg/s"),
            ("Linear momentum", m.linear_momentum.total, "slug·ft/s"),
            ("Peak linear momentum", m.linear_momentum.peak, "slug·ft/s"),
            ("Rotational momentum", m.rotational_momentum.total, "slug·ft²/s"),
            ("Kinetic energy", m.kinetic_energy.total, "ft·lb"),
            ("Peak power", m.power.peak_power, "hp"),
            ("Average power", m.power.average_power, "hp"),
            ("Power at contact", m.power.power_at_contact, "hp"),
        ]
        for label, value, unit in rows:
            lines.append(f"| {label} | {self._format_value(value, unit)} |")
        lines.append("")

        lines.append("### Efficiency")
        lines.append("")
        lines.append("| Ratio | Value |")
        lines.append("|-------|-------|")
        lines.append(f"| Energy transfer | {self._format_value(m.efficiency.energy_transfer, '%')} |")
        lines.append(f"| Sequencing | {self._format_value(m.efficiency.sequencing, '%')} |")
        lines.append(f"| Momentum retention | {self._format_value(m.efficiency.momentum_retention, '%')} |")
        lines.append("")

        if m.bat_speed is not None:
            level = self._benchmark_level("bat_speed", m.bat_speed.bat_speed)
            if level:
                lines.append(f"Bat speed is in the **{level}** range.")
                lines.append("")

        if "timeline" in chart_paths:
            lines.append(f"![Swing timeline]({chart_paths['timeline']})")
            lines.append("")
        return lines

    @staticmethod
    def _benchmark_level(metric_id: str, value: float) -> Optional[str]:
        # Highest level whose range contains the value
        matches = [b.level for b in get_benchmarks(metric_id) if b.contains(value)]
        return matches[-1] if matches else None

    @staticmethod
    def _format_value(value, unit: str) -> str:
        if value is None:
            return "no data"
        return f"{value:.1f} {unit}"
