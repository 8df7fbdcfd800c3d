# family_balance/sampler.py
"""
Adaptive question sampler for recurring check-ins.

Per category: the heaviest questions are always asked, and the rest of the
slots are filled from the remainder with a generator seeded from the period,
so a given week always gets the same set while different weeks rotate.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .config import LOGGER
from .model import (
    CATEGORY_ORDER,
    NEUTRAL_PRIORITIES,
    Category,
    FamilyPriorities,
    Period,
    Question,
    coerce_responses,
    period_index,
)
from .utils import seeded_rng
from .weighting import compute_weight

DEFAULT_SEED = 7


def questions_by_category(questions: Iterable[Question]) -> Dict[Category, List[Question]]:
    """Group questions by category, keeping bank order inside each group."""
    grouped: Dict[Category, List[Question]] = {c: [] for c in CATEGORY_ORDER}
    for q in questions:
        grouped[q.category].append(q)
    return grouped


def rank_by_weight(questions: Sequence[Question], priorities: Optional[FamilyPriorities] = None) -> List[Question]:
    """Heaviest first; equal weights keep their input order."""
    prio = priorities if priorities is not None else NEUTRAL_PRIORITIES
    weights = {id(q): compute_weight(q, prio) for q in questions}
    return sorted(questions, key=lambda q: -weights[id(q)])


def sample_questions(
    question_bank: Iterable[Question],
    period: Period,
    count_per_category: int = 5,
    high_weight_count: int = 3,
    priorities: Optional[FamilyPriorities] = None,
    seed: int = DEFAULT_SEED,
) -> List[Question]:
    """
    Select a bounded, representative question subset for one period.

    Output: per category in CATEGORY_ORDER, the `high_weight_count` heaviest
    questions followed by the variety picks. Deterministic for a given
    (question_bank, period, priorities, seed).
    """
    count = max(0, int(count_per_category))
    high = min(max(0, int(high_weight_count)), count)
    if high != high_weight_count:
        LOGGER.debug("high_weight_count %s clamped to %s", high_weight_count, high)

    p_idx = period_index(period)
    grouped = questions_by_category(question_bank)

    out: List[Question] = []
    for position, category in enumerate(CATEGORY_ORDER):
        ranked = rank_by_weight(grouped[category], priorities)
        picks = ranked[:high]
        remainder = ranked[high:]

        n_variety = min(count - high, len(remainder))
        if n_variety > 0:
            rng = seeded_rng(seed, p_idx, position)
            chosen = rng.choice(len(remainder), size=n_variety, replace=False)
            picks.extend(remainder[i] for i in sorted(int(i) for i in chosen))

        out.extend(picks)
    return out


def high_impact_questions(
    questions: Iterable[Question],
    priorities: Optional[FamilyPriorities] = None,
    limit: int = 10,
    category: Optional[Category] = None,
) -> List[Question]:
    """Top-`limit` questions by weight, optionally within one category."""
    pool = [q for q in questions if category is None or q.category == category]
    return rank_by_weight(pool, priorities)[: max(0, limit)]


def survey_progress(responses: Optional[Mapping[str, object]], total_questions: int) -> float:
    """Answered share of a survey, in percent (0 for an empty survey)."""
    if total_questions <= 0:
        return 0.0
    answered = len(coerce_responses(responses))
    return min(100.0, 100.0 * answered / total_questions)
