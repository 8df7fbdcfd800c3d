# family_balance/main.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from .config import BalanceConfig
from .io_excel import read_question_bank_xlsx, read_response_history_xlsx, write_trend_workbook
from .model import FamilyPriorities, Question
from .question_bank import default_question_bank
from .recommendations import RecommendedTask, recommend_tasks
from .sampler import sample_questions
from .schema import SheetMap
from .simulator import category_counts, simulate_history
from .tracker import (
    balance_direction,
    balance_status,
    category_frame,
    get_trend_delta,
    most_imbalanced_category,
    track_history,
    trend_frame,
)
from .weighting import compute_weight, impact_tier


def _questions_frame(questions: List[Question], priorities: Optional[FamilyPriorities]) -> pd.DataFrame:
    rows = []
    for q in questions:
        w = compute_weight(q, priorities)
        rows.append(dict(q.to_record(), weight=w, impact=impact_tier(w)))
    return pd.DataFrame(rows)


def _tasks_frame(tasks: List[RecommendedTask]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            dict(
                id=t.id,
                title=t.title,
                description=t.description,
                category=t.category.value,
                assigned_to=t.assigned_to.value,
                priority=t.priority,
                question_id=t.question_id,
                source=t.source,
            )
            for t in tasks
        ],
        columns=["id", "title", "description", "category", "assigned_to", "priority", "question_id", "source"],
    )


def run(cfg: Optional[BalanceConfig] = None, priorities: Optional[FamilyPriorities] = None) -> Dict[str, pd.DataFrame]:
    cfg = cfg or BalanceConfig()
    sm = SheetMap()

    # ------------------------------------------------------------
    # 1) Question bank: workbook if present, built-in otherwise
    # ------------------------------------------------------------
    if Path(cfg.question_bank_xlsx).exists():
        questions = read_question_bank_xlsx(cfg.question_bank_xlsx, sheet=sm.questions)
        print(f"Loaded question bank: {cfg.question_bank_xlsx}")
    else:
        questions = default_question_bank()
        print("Using built-in question bank")

    # ------------------------------------------------------------
    # 2) Responses: workbook if present, simulated otherwise
    # ------------------------------------------------------------
    if Path(cfg.responses_xlsx).exists():
        history = read_response_history_xlsx(cfg.responses_xlsx, sheet=sm.responses, aliases=cfg.assignee_aliases)
        print(f"Loaded responses: {cfg.responses_xlsx}")
    else:
        history = simulate_history(cfg, questions)
        print(f"Using simulated responses ({len(history)} periods)")

    tracker = track_history(questions, history, priorities)
    latest = tracker.latest

    # ------------------------------------------------------------
    # 3) Next check-in and follow-up tasks
    # ------------------------------------------------------------
    next_week = max([p for p in tracker.periods if isinstance(p, int)], default=0) + 1
    next_questions = sample_questions(
        questions,
        next_week,
        count_per_category=cfg.count_per_category,
        high_weight_count=cfg.high_weight_count,
        priorities=priorities,
        seed=cfg.seed,
    )

    tasks: List[RecommendedTask] = []
    if latest is not None:
        latest_responses = dict(history)[latest.period] if history else {}
        tasks = recommend_tasks(
            questions,
            latest_responses,
            latest,
            priorities,
            week=next_week,
            limit=cfg.recommendation_count,
        )

    dfs = {
        "trend": trend_frame(tracker, cfg.good_balance_threshold, cfg.slight_imbalance_threshold),
        "category_balance": category_frame(tracker),
        "next_questions": _questions_frame(next_questions, priorities),
        "recommendations": _tasks_frame(tasks),
    }

    Path(cfg.output_xlsx).parent.mkdir(parents=True, exist_ok=True)
    write_trend_workbook(
        output_xlsx=cfg.output_xlsx,
        dfs=dfs,
        sheet_map=sm.output_sheets(),
        template_xlsx=cfg.template_xlsx or None,
    )
    print(f"✅ Wrote trend workbook: {cfg.output_xlsx}")

    # Summary
    print(f"questions per category: { {c.value: n for c, n in category_counts(questions).items()} }")
    if latest is not None:
        delta = get_trend_delta(tracker)
        print(
            f"latest ({latest.period}): A {latest.overall.a:.1f}% / B {latest.overall.b:.1f}% "
            f"[{balance_status(latest.overall, cfg.good_balance_threshold, cfg.slight_imbalance_threshold)}]"
        )
        print(f"since first snapshot: A {delta.delta_a:+.1f} pts, direction: {balance_direction(tracker)}")
        cat = most_imbalanced_category(tracker)
        print(f"most imbalanced category: {cat.value if cat else '-'}")
    for k, df in dfs.items():
        print(f"{k}: {df.shape}")

    return dfs


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    run()
