"""4 B's grading: per-category grades, letter grades, and the scorecard.

BRAIN is educational only and is never graded, whatever data is present.
A category grade is the mean of the normalized scores of the accessible
metrics that carry a value; 0 means "no data", not a failing grade.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple, Union

import numpy as np

from ..config.tiers import MembershipTier
from .metric_catalog import DEFAULT_CATALOG, BCategory, MetricCatalog, MetricDefinition, TierLike
from .normalizers import PERCENT

logger = logging.getLogger(__name__)

CategoryLike = Union[BCategory, str]
MetricMap = Mapping[str, Optional[float]]


class CategoryState(str, Enum):
    EDUCATIONAL_ONLY = "educational_only"
    LOCKED = "locked"
    NO_DATA = "no_data"
    GRADED = "graded"


# (minimum score, letter), highest first
LETTER_GRADES: Tuple[Tuple[float, str], ...] = (
    (95, "A+"),
    (90, "A"),
    (87, "A-"),
    (83, "B+"),
    (80, "B"),
    (77, "B-"),
    (73, "C+"),
    (70, "C"),
    (67, "C-"),
    (60, "D"),
)

CATEGORY_INFO: Dict[BCategory, Tuple[str, str]] = {
    BCategory.BRAIN: ("BRAIN", "Mental & Decision Making"),
    BCategory.BODY: ("BODY", "Mechanics & Movement"),
    BCategory.BAT: ("BAT", "Tool & Delivery"),
    BCategory.BALL: ("BALL", "Output & Results"),
}


# ── Normalization ────────────────────────────────────────────────────

def _is_present(value: Optional[float]) -> bool:
    if value is None:
        return False
    try:
        return not math.isnan(float(value))
    except (TypeError, ValueError):
        return False


def normalize_metric_value(
    metric: Union[MetricDefinition, str],
    value: float,
    catalog: MetricCatalog = DEFAULT_CATALOG,
) -> float:
    """Score *value* on 0-100 using the metric's own normalizer.

    Accepts a definition or a metric id; unknown ids fall back to a 0-100
    clamp.  NaN scores 0.
    """
    if isinstance(metric, str):
        definition = catalog.get(metric)
        normalizer = definition.normalizer if definition is not None else PERCENT
    else:
        normalizer = metric.normalizer
    return normalizer(value)


# ── Category grading ─────────────────────────────────────────────────

def calculate_b_grade(
    category: CategoryLike,
    metrics: MetricMap,
    tier: TierLike,
    catalog: MetricCatalog = DEFAULT_CATALOG,
) -> float:
    """Mean normalized score of the accessible metrics present in *metrics*.

    Returns 0 when nothing accessible has a value.  Not rounded.
    """
    scores = [
        m.normalize(metrics[m.id])
        for m in catalog.available(tier, category)
        if _is_present(metrics.get(m.id))
    ]
    if not scores:
        return 0.0
    return float(np.mean(scores))


def is_educational_only(category: CategoryLike) -> bool:
    return BCategory.coerce(category) is BCategory.BRAIN


def category_has_data(
    category: CategoryLike,
    metrics: MetricMap,
    tier: TierLike,
    catalog: MetricCatalog = DEFAULT_CATALOG,
) -> bool:
    """True if any accessible metric of the category has a value.

    Always False for BRAIN.
    """
    if is_educational_only(category):
        return False
    return any(_is_present(metrics.get(m.id)) for m in catalog.available(tier, category))


def resolve_category_state(
    category: CategoryLike,
    tier: TierLike,
    metrics: MetricMap,
    catalog: MetricCatalog = DEFAULT_CATALOG,
) -> CategoryState:
    """educational_only → locked → no_data → graded, checked in that order."""
    if is_educational_only(category):
        return CategoryState.EDUCATIONAL_ONLY
    if not catalog.available(tier, category):
        return CategoryState.LOCKED
    if not category_has_data(category, metrics, tier, catalog):
        return CategoryState.NO_DATA
    return CategoryState.GRADED


def letter_grade(score: float) -> str:
    for minimum, letter in LETTER_GRADES:
        if score >= minimum:
            return letter
    return "F"


def get_category_info(category: CategoryLike) -> Dict[str, str]:
    name, description = CATEGORY_INFO[BCategory.coerce(category)]
    return {"name": name, "description": description}


# ── Scorecard ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CategoryResult:
    category: BCategory
    state: CategoryState
    grade: Optional[float]          # None unless graded
    letter: Optional[str]
    available_metrics: Tuple[str, ...] = ()
    locked_metrics: Tuple[str, ...] = ()

    @property
    def is_graded(self) -> bool:
        return self.state is CategoryState.GRADED


@dataclass(frozen=True)
class Scorecard:
    tier: MembershipTier
    categories: Tuple[CategoryResult, ...]
    overall_grade: float
    overall_letter: Optional[str]
    unknown_metrics: Tuple[str, ...] = field(default=())

    def category(self, category: CategoryLike) -> CategoryResult:
        wanted = BCategory.coerce(category)
        for result in self.categories:
            if result.category is wanted:
                return result
        raise KeyError(wanted.value)

    def to_dict(self) -> Dict[str, object]:
        return {
            "tier": self.tier.value,
            "overall_grade": self.overall_grade,
            "overall_letter": self.overall_letter,
            "categories": {
                r.category.value: {
                    "state": r.state.value,
                    "grade": r.grade,
                    "letter": r.letter,
                    "available_metrics": list(r.available_metrics),
                    "locked_metrics": list(r.locked_metrics),
                }
                for r in self.categories
            },
            "unknown_metrics": list(self.unknown_metrics),
        }


def _category_result(
    category: BCategory,
    metrics: MetricMap,
    tier: MembershipTier,
    catalog: MetricCatalog,
) -> CategoryResult:
    state = resolve_category_state(category, tier, metrics, catalog)
    grade = calculate_b_grade(category, metrics, tier, catalog) if state is CategoryState.GRADED else None
    return CategoryResult(
        category=category,
        state=state,
        grade=grade,
        letter=letter_grade(grade) if grade is not None else None,
        available_metrics=tuple(m.id for m in catalog.available(tier, category)),
        locked_metrics=tuple(m.id for m in catalog.locked(tier, category)),
    )


def _category_results(
    metrics: MetricMap,
    tier: MembershipTier,
    catalog: MetricCatalog,
) -> Tuple[CategoryResult, ...]:
    return tuple(_category_result(c, metrics, tier, catalog) for c in BCategory)


def _overall(results: Tuple[CategoryResult, ...]) -> Tuple[float, Optional[str]]:
    graded = [r.grade for r in results if r.is_graded]
    if not graded:
        return 0.0, None
    overall = float(np.mean(graded))
    return overall, letter_grade(overall)


def calculate_overall_grade(
    metrics: MetricMap,
    tier: TierLike,
    catalog: MetricCatalog = DEFAULT_CATALOG,
) -> float:
    """Mean grade of the categories that resolve to ``graded``; 0 if none."""
    results = _category_results(metrics, MembershipTier.coerce(tier), catalog)
    return _overall(results)[0]


def build_scorecard(
    metrics: MetricMap,
    tier: TierLike,
    catalog: MetricCatalog = DEFAULT_CATALOG,
) -> Scorecard:
    """Grade every B for one metric map at one tier."""
    tier = MembershipTier.coerce(tier)
    unknown = tuple(sorted(k for k in metrics if k not in catalog))
    if unknown:
        logger.warning("Ignoring metrics not in the catalog: %s", ", ".join(unknown))

    results = _category_results(metrics, tier, catalog)
    overall, letter = _overall(results)
    return Scorecard(
        tier=tier,
        categories=results,
        overall_grade=overall,
        overall_letter=letter,
        unknown_metrics=unknown,
    )
