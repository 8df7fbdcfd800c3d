# family_balance/simulator.py
from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from .config import BalanceConfig
from .model import CATEGORY_ORDER, INITIAL, Category, Period, Question
from .sampler import sample_questions
from .utils import choice_with_probs, clip01, seeded_rng

# Domain assumption for demo data: invisible work skews further toward the
# busier parent than visible work.
CATEGORY_SKEW: Dict[Category, float] = {
    Category.VISIBLE_HOUSEHOLD: -0.05,
    Category.INVISIBLE_HOUSEHOLD: 0.08,
    Category.VISIBLE_PARENTAL: 0.00,
    Category.INVISIBLE_PARENTAL: 0.10,
}


def share_a_for_week(cfg: BalanceConfig, week: int) -> float:
    """
    Probability that A handles a task in a given week (0 = initial survey).
    Drifts from cfg.initial_share_a toward 0.5 by cfg.weekly_rebalance per week.
    """
    gap = cfg.initial_share_a - 0.5
    step = cfg.weekly_rebalance * week
    if abs(gap) <= step:
        return 0.5
    return cfg.initial_share_a - step if gap > 0 else cfg.initial_share_a + step


def simulate_responses(
    cfg: BalanceConfig,
    questions: Sequence[Question],
    week: int,
    answer_rate: float = 1.0,
) -> Dict[str, str]:
    """One survey's answers ("A"/"B"); unanswered questions are left out."""
    rng = seeded_rng(cfg.seed, 1000 + week)
    base = share_a_for_week(cfg, week)

    out: Dict[str, str] = {}
    for q in questions:
        if rng.random() >= answer_rate:
            continue
        p_a = clip01(base + CATEGORY_SKEW.get(q.category, 0.0))
        out[q.id] = choice_with_probs(rng, ["A", "B"], [p_a, 1.0 - p_a])
    return out


def simulate_history(cfg: BalanceConfig, questions: Sequence[Question]) -> List[Tuple[Period, Dict[str, str]]]:
    """
    Demo history: the full bank as the initial survey, then `cfg.n_weeks`
    weekly check-ins over the sampler's question sets.
    """
    history: List[Tuple[Period, Dict[str, str]]] = [
        (INITIAL, simulate_responses(cfg, questions, week=0)),
    ]
    for week in range(1, cfg.n_weeks + 1):
        weekly = sample_questions(
            questions,
            week,
            count_per_category=cfg.count_per_category,
            high_weight_count=cfg.high_weight_count,
            seed=cfg.seed,
        )
        history.append((week, simulate_responses(cfg, weekly, week=week, answer_rate=cfg.answer_rate)))
    return history


def category_counts(questions: Sequence[Question]) -> Dict[Category, int]:
    counts = {c: 0 for c in CATEGORY_ORDER}
    for q in questions:
        counts[q.category] += 1
    return counts
