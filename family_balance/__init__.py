"""
Family Balance Scoring Package

Turns "who does this: A or B" survey answers into weighted balance
percentages, picks representative question subsets for weekly check-ins,
and keeps a per-period history of balance snapshots.

Core entry points:
- compute_weight(): weight of one task for a family
- aggregate(): overall and per-category balance for a response map
- sample_questions(): reproducible weekly question subset
- record_snapshot() / get_trend() / get_trend_delta(): balance history
- BalanceConfig: configure the pipeline
"""

from .aggregator import aggregate, to_snapshot
from .config import BalanceConfig
from .model import (
    CATEGORY_ORDER,
    INITIAL,
    Assignee,
    BalanceSnapshot,
    Category,
    FamilyPriorities,
    Question,
)
from .sampler import sample_questions
from .tracker import (
    HistoricalBalanceTracker,
    balance_direction,
    get_trend,
    get_trend_delta,
    is_good_balance,
    most_imbalanced_category,
    new_tracker,
    record_snapshot,
)
from .weighting import compute_weight

__all__ = [
    "BalanceConfig",
    "CATEGORY_ORDER",
    "INITIAL",
    "Assignee",
    "BalanceSnapshot",
    "Category",
    "FamilyPriorities",
    "HistoricalBalanceTracker",
    "Question",
    "aggregate",
    "balance_direction",
    "compute_weight",
    "get_trend",
    "get_trend_delta",
    "is_good_balance",
    "most_imbalanced_category",
    "new_tracker",
    "record_snapshot",
    "sample_questions",
    "to_snapshot",
]
