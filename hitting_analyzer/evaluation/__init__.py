"""4 B's metric catalog, tier gating and grading."""

from .metric_catalog import (
    BCategory,
    DataSource,
    MetricDefinition,
    MetricCatalog,
    DEFAULT_CATALOG,
    has_metric_access,
    get_available_metrics,
    get_locked_metrics,
)
from .grader import (
    CategoryState,
    CategoryResult,
    Scorecard,
    normalize_metric_value,
    calculate_b_grade,
    category_has_data,
    is_educational_only,
    resolve_category_state,
    letter_grade,
    calculate_overall_grade,
    build_scorecard,
    get_category_info,
)
from .benchmarks import Benchmark, get_benchmarks
