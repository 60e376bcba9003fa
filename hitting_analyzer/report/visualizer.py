"""Matplotlib charts for swing reports.

``ChartGenerator`` draws:
    - the launch → follow-through timeline (bat speed, kinetic energy, power);
    - the 4 B's grade bar chart.
"""

from __future__ import annotations

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
from typing import Optional, Sequence

from ..analysis.power import FrameMetrics
from ..evaluation.grader import Scorecard, get_category_info


class ChartGenerator:
    """Generate Matplotlib analysis charts."""

    CATEGORY_COLORS = {
        "brain": "#9C27B0",
        "body": "#2196F3",
        "bat": "#FF9800",
        "ball": "#F44336",
    }

    @staticmethod
    def timeline_chart(
        timeline: Sequence[FrameMetrics],
        output_path: str,
        contact_frame: Optional[int] = None,
        title: str = "Swing timeline",
    ) -> str:
        """Bat speed, kinetic energy and power against frame number."""
        if len(timeline) < 2:
            return ""

        frames = [f.frame for f in timeline]
        series = (
            ("Bat speed (mph)", np.array([f.bat_speed for f in timeline]), "#FF9800"),
            ("Kinetic energy (ft·lb)", np.array([f.kinetic_energy for f in timeline]), "#2196F3"),
            ("Power (hp)", np.array([f.power for f in timeline]), "#F44336"),
        )

        fig, axes = plt.subplots(len(series), 1, figsize=(12, 8), sharex=True)
        for k, (ax, (label, values, color)) in enumerate(zip(axes, series)):
            ax.plot(frames, values, "-", color=color, linewidth=1.5)
            ax.fill_between(frames, values, alpha=0.15, color=color)
            ax.set_ylabel(label, fontsize=10)
            ax.grid(True, alpha=0.3)
            if contact_frame is not None:
                ax.axvline(contact_frame, color="green", linestyle="--", linewidth=2, alpha=0.7,
                           label="Contact" if k == 0 else None)

        if contact_frame is not None:
            axes[0].legend(fontsize=9)
        axes[-1].set_xlabel("Frame", fontsize=11)
        axes[0].set_title(title, fontsize=13, fontweight="bold")

        plt.tight_layout()
        plt.savefig(output_path, dpi=150, bbox_inches="tight")
        plt.close()
        return output_path

    @staticmethod
    def scorecard_chart(
        scorecard: Scorecard,
        output_path: str,
        title: str = "4 B's grades",
    ) -> str:
        """Bar chart of the graded categories; ungraded ones are labelled but empty."""
        results = list(scorecard.categories)
        if not results:
            return ""

        names = [get_category_info(r.category)["name"] for r in results]
        grades = [r.grade if r.is_graded else 0.0 for r in results]
        colors = [ChartGenerator.CATEGORY_COLORS.get(r.category.value, "#666") for r in results]

        fig, ax = plt.subplots(figsize=(8, 5))
        bars = ax.bar(range(len(results)), grades, color=colors, edgecolor="white", width=0.6)
        ax.set_xticks(range(len(results)))
        ax.set_xticklabels(names, fontsize=11, fontweight="bold")
        ax.set_ylim(0, 105)
        ax.set_ylabel("Grade", fontsize=12)
        ax.set_title(title, fontsize=14, fontweight="bold")

        for bar, result in zip(bars, results):
            label = f"{result.grade:.0f} {result.letter}" if result.is_graded else result.state.value.replace("_", " ")
            ax.text(
                bar.get_x() + bar.get_width() / 2, bar.get_height() + 1,
                label, ha="center", va="bottom", fontsize=10, fontweight="bold",
            )

        if scorecard.overall_letter is not None:
            ax.axhline(scorecard.overall_grade, color="gray", linestyle="--", linewidth=1,
                       label=f"Overall {scorecard.overall_grade:.1f} ({scorecard.overall_letter})")
            ax.legend(fontsize=9, loc="lower right")

        plt.tight_layout()
        plt.savefig(output_path, dpi=150, bbox_inches="tight")
        plt.close()
        return output_path
