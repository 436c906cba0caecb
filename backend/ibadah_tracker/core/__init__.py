"""Progress aggregation engine: pure functions over day snapshots."""
from .dimensions import (
    CheckKind,
    CheckDefinition,
    DimensionSet,
    BASE_DIMENSIONS,
    EXTENDED_DIMENSIONS,
    DEFAULT_DIMENSIONS,
    get_dimension_set,
)
from .scoring import mosque_count, evaluate_checks, completed_count, heat_classification, score_day, remaining_goals
from .streaks import MAX_LOOKBACK_DAYS, compute_streaks, current_streak, best_streak, is_active
from .heatmap import DEFAULT_WINDOW, HEATMAP_PLACEHOLDER, heat_levels, render_heatmap
from .statistics import aggregate_statistics, no_data_report
