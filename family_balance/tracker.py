# family_balance/tracker.py
"""
Historical balance tracker.

Holds one immutable BalanceSnapshot per period, ordered Initial, 1, 2, ...
Every operation returns a new tracker; nothing is mutated in place.
Re-recording a period replaces its snapshot.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Tuple

import pandas as pd

from .aggregator import aggregate, to_snapshot
from .config import LOGGER
from .model import (
    CATEGORY_ORDER,
    BalanceSnapshot,
    Category,
    FamilyPriorities,
    PartyShare,
    Period,
    Question,
    Responses,
    normalize_period,
    period_sort_key,
)

GOOD_BALANCE_THRESHOLD = 10.0
SLIGHT_IMBALANCE_THRESHOLD = 20.0


@dataclass(frozen=True)
class HistoricalBalanceTracker:
    questions: Tuple[Question, ...] = ()
    snapshots: Tuple[BalanceSnapshot, ...] = ()

    @property
    def periods(self) -> List[Period]:
        return [s.period for s in self.snapshots]

    @property
    def latest(self) -> Optional[BalanceSnapshot]:
        return self.snapshots[-1] if self.snapshots else None


@dataclass(frozen=True)
class TrendDelta:
    """Change in overall percentage points, last snapshot minus first."""
    delta_a: float = 0.0
    delta_b: float = 0.0


def new_tracker(questions: Iterable[Question]) -> HistoricalBalanceTracker:
    return HistoricalBalanceTracker(questions=tuple(questions))


def insert_snapshot(tracker: HistoricalBalanceTracker, snapshot: BalanceSnapshot) -> HistoricalBalanceTracker:
    """Place `snapshot` at its period position, replacing an existing entry for that period."""
    key = period_sort_key(snapshot.period)
    kept = [s for s in tracker.snapshots if period_sort_key(s.period) != key]
    if len(kept) != len(tracker.snapshots):
        LOGGER.debug("Replacing snapshot for period %s", snapshot.period)
    elif kept and period_sort_key(kept[-1].period) > key:
        LOGGER.debug("Period %s recorded after later periods; inserting in order", snapshot.period)

    kept.append(snapshot)
    kept.sort(key=lambda s: period_sort_key(s.period))
    return replace(tracker, snapshots=tuple(kept))


def record_snapshot(
    tracker: HistoricalBalanceTracker,
    period: Period,
    responses: Optional[Responses],
    priorities: Optional[FamilyPriorities] = None,
) -> HistoricalBalanceTracker:
    """Aggregate one period's responses and record the snapshot (pure; returns a new tracker)."""
    p = normalize_period(period)
    snapshot = to_snapshot(p, aggregate(tracker.questions, responses, priorities))
    return insert_snapshot(tracker, snapshot)


def track_history(
    questions: Iterable[Question],
    history: Iterable[Tuple[Period, Responses]],
    priorities: Optional[FamilyPriorities] = None,
) -> HistoricalBalanceTracker:
    """Fold a sequence of (period, responses) pairs into a tracker."""
    tracker = new_tracker(questions)
    for period, responses in history:
        tracker = record_snapshot(tracker, period, responses, priorities)
    return tracker


def get_trend(tracker: HistoricalBalanceTracker) -> List[BalanceSnapshot]:
    return list(tracker.snapshots)


def get_trend_delta(tracker: HistoricalBalanceTracker) -> TrendDelta:
    if len(tracker.snapshots) < 2:
        return TrendDelta()
    first, last = tracker.snapshots[0].overall, tracker.snapshots[-1].overall
    return TrendDelta(delta_a=last.a - first.a, delta_b=last.b - first.b)


# ------------------------------------------------------------------
# Insight helpers (read-only)
# ------------------------------------------------------------------

def most_imbalanced_category(tracker: HistoricalBalanceTracker) -> Optional[Category]:
    """
    Category with the largest imbalance in the latest snapshot.

    Ties go to the earlier category in CATEGORY_ORDER. None when there is no
    snapshot or every category is perfectly balanced.
    """
    latest = tracker.latest
    if latest is None:
        return None
    best: Optional[Category] = None
    best_val = 0.0
    for c in CATEGORY_ORDER:
        share = latest.categories.get(c)
        if share is not None and share.imbalance > best_val:
            best, best_val = c, share.imbalance
    return best


def distance_from_even(share: PartyShare) -> float:
    return abs(share.a - 50.0)


def is_good_balance(share: PartyShare, threshold: float = GOOD_BALANCE_THRESHOLD) -> bool:
    return distance_from_even(share) < threshold


def balance_status(
    share: PartyShare,
    good_threshold: float = GOOD_BALANCE_THRESHOLD,
    slight_threshold: float = SLIGHT_IMBALANCE_THRESHOLD,
) -> str:
    d = distance_from_even(share)
    if d < good_threshold:
        return "well_balanced"
    if d < slight_threshold:
        return "slight_imbalance"
    return "significant_imbalance"


def balance_direction(tracker: HistoricalBalanceTracker) -> Optional[str]:
    """
    Overall balance movement since the previous snapshot:
    "improving" (closer to 50/50), "worsening", or "steady".
    """
    if len(tracker.snapshots) < 2:
        return None
    prev = distance_from_even(tracker.snapshots[-2].overall)
    curr = distance_from_even(tracker.snapshots[-1].overall)
    if math.isclose(prev, curr, abs_tol=1e-9):
        return "steady"
    return "improving" if curr < prev else "worsening"


# ------------------------------------------------------------------
# Tabular views
# ------------------------------------------------------------------

def trend_frame(
    tracker: HistoricalBalanceTracker,
    good_threshold: float = GOOD_BALANCE_THRESHOLD,
    slight_threshold: float = SLIGHT_IMBALANCE_THRESHOLD,
) -> pd.DataFrame:
    """One row per period: overall split, status, plus each category's A% and imbalance."""
    rows = []
    for s in tracker.snapshots:
        row = dict(
            period=s.period,
            overall_a=s.overall.a,
            overall_b=s.overall.b,
            status=balance_status(s.overall, good_threshold, slight_threshold),
        )
        for c in CATEGORY_ORDER:
            share = s.categories[c]
            row[f"{c.value}_a"] = share.a
            row[f"{c.value}_imbalance"] = share.imbalance
        rows.append(row)

    columns = ["period", "overall_a", "overall_b", "status"]
    for c in CATEGORY_ORDER:
        columns += [f"{c.value}_a", f"{c.value}_imbalance"]
    return pd.DataFrame(rows, columns=columns)


def category_frame(tracker: HistoricalBalanceTracker) -> pd.DataFrame:
    """Long format: one row per (period, category)."""
    rows = []
    for s in tracker.snapshots:
        for c in CATEGORY_ORDER:
            share = s.categories[c]
            rows.append(
                dict(
                    period=s.period,
                    category=c.value,
                    share_a=share.a,
                    share_b=share.b,
                    imbalance=share.imbalance,
                )
            )
    return pd.DataFrame(rows, columns=["period", "category", "share_a", "share_b", "imbalance"])
