# family_balance/aggregator.py
from __future__ import annotations

from typing import Dict, Iterable, Optional

from .config import LOGGER
from .model import (
    CATEGORY_ORDER,
    Assignee,
    BalanceResult,
    BalanceSnapshot,
    Category,
    CategoryShare,
    FamilyPriorities,
    PartyShare,
    Period,
    Question,
    Responses,
    coerce_responses,
    normalize_period,
)
from .utils import share_percent
from .weighting import compute_weight


def index_questions(questions: Iterable[Question]) -> Dict[str, Question]:
    """id -> Question; the first occurrence of a duplicated id wins."""
    out: Dict[str, Question] = {}
    for q in questions or ():
        out.setdefault(q.id, q)
    return out


def aggregate(
    questions: Iterable[Question],
    responses: Optional[Responses],
    priorities: Optional[FamilyPriorities] = None,
) -> BalanceResult:
    """
    Turn a response map into weighted balance percentages.

    For each answered question with a matching Question the task weight is
    added to the assignee's overall and per-category totals. Responses for
    unknown question ids and unanswered entries are skipped. A zero total
    gives the neutral 50/50 split.
    """
    by_id = index_questions(questions)

    total_a = 0.0
    total_b = 0.0
    # category -> [a, b, total]
    acc: Dict[Category, list] = {c: [0.0, 0.0, 0.0] for c in CATEGORY_ORDER}

    for qid, who in coerce_responses(responses).items():
        q = by_id.get(qid)
        if q is None:
            LOGGER.debug("Response for unknown question %s excluded from aggregation", qid)
            continue

        w = compute_weight(q, priorities)
        cat = acc[q.category]
        if who == Assignee.A:
            total_a += w
            cat[0] += w
        else:
            total_b += w
            cat[1] += w
        cat[2] += w

    overall_a = share_percent(total_a, total_a + total_b)
    overall = PartyShare(a=overall_a, b=100.0 - overall_a)

    categories: Dict[Category, CategoryShare] = {}
    for c in CATEGORY_ORDER:
        a_w, _, tot = acc[c]
        pct_a = share_percent(a_w, tot)
        pct_b = 100.0 - pct_a
        categories[c] = CategoryShare(a=pct_a, b=pct_b, imbalance=abs(pct_a - pct_b))

    return BalanceResult(overall=overall, categories=categories)


def to_snapshot(period: Period, result: BalanceResult) -> BalanceSnapshot:
    """Label an aggregation result with its period."""
    return BalanceSnapshot(
        period=normalize_period(period),
        overall=result.overall,
        categories=dict(result.categories),
    )
