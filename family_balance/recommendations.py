# family_balance/recommendations.py
"""
Follow-up task recommendations built from a balance snapshot.

Without a text generator the recommendations are deterministic: the
heaviest tasks the busier parent handles in the most imbalanced categories
are proposed for hand-over. With a generator (any callable taking
system and user prompts and returning text) its JSON reply is used, topped
up from the deterministic list when short or unusable.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional

from .config import LOGGER
from .model import (
    CATEGORY_LABELS,
    CATEGORY_ORDER,
    Assignee,
    BalanceSnapshot,
    Category,
    FamilyPriorities,
    Question,
    Responses,
    coerce_category,
    coerce_responses,
)
from .prompts import SYSTEM, make_task_prompt
from .sampler import rank_by_weight

TextGenerator = Callable[[str, str], Optional[str]]


@dataclass(frozen=True)
class RecommendedTask:
    id: str
    title: str
    description: str
    category: Category
    assigned_to: Assignee
    priority: str                         # High for the first task, Medium after
    question_id: Optional[str] = None     # set for deterministic picks
    source: str = "rules"                 # rules / generated


def busier_party(snapshot: BalanceSnapshot) -> Assignee:
    """Party carrying more overall load (A on an exact tie)."""
    return Assignee.A if snapshot.overall.a >= snapshot.overall.b else Assignee.B


def _other(who: Assignee) -> Assignee:
    return Assignee.B if who == Assignee.A else Assignee.A


def _categories_by_imbalance(snapshot: BalanceSnapshot) -> List[Category]:
    order = {c: i for i, c in enumerate(CATEGORY_ORDER)}
    return sorted(
        CATEGORY_ORDER,
        key=lambda c: (-snapshot.categories[c].imbalance, order[c]),
    )


def _heavy_tasks(
    questions: Iterable[Question],
    responses: Optional[Responses],
    snapshot: BalanceSnapshot,
    priorities: Optional[FamilyPriorities],
) -> List[Question]:
    """Questions answered with the busier party, most imbalanced category first, heaviest first."""
    busy = busier_party(snapshot)
    answered = coerce_responses(responses)
    mine = [q for q in questions if answered.get(q.id) == busy]

    out: List[Question] = []
    for c in _categories_by_imbalance(snapshot):
        out.extend(rank_by_weight([q for q in mine if q.category == c], priorities))
    return out


def rule_based_tasks(
    questions: Iterable[Question],
    responses: Optional[Responses],
    snapshot: BalanceSnapshot,
    priorities: Optional[FamilyPriorities] = None,
    week: int = 1,
    limit: int = 3,
) -> List[RecommendedTask]:
    busy = busier_party(snapshot)
    target = _other(busy)

    # one task per category first, then fill from the rest
    heavy = _heavy_tasks(questions, responses, snapshot, priorities)
    first_per_cat: List[Question] = []
    seen_cats = set()
    for q in heavy:
        if q.category not in seen_cats:
            first_per_cat.append(q)
            seen_cats.add(q.category)
    ordered = first_per_cat + [q for q in heavy if q not in first_per_cat]

    tasks: List[RecommendedTask] = []
    for q in ordered[: max(0, limit)]:
        n = len(tasks) + 1
        tasks.append(
            RecommendedTask(
                id=f"{week}-{n}",
                title=f"Week {week}: hand over \"{q.text.rstrip('?')}\"",
                description=(
                    f"{CATEGORY_LABELS[q.category]} are currently carried mostly by Parent {busy.value}. "
                    f"Parent {target.value} takes this one on for the week."
                ),
                category=q.category,
                assigned_to=target,
                priority="High" if n == 1 else "Medium",
                question_id=q.id,
            )
        )
    return tasks


def _extract_json(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        start = raw.find("[")
        end = raw.rfind("]")
        if start == -1 or end <= start:
            raise
        return json.loads(raw[start:end + 1])


def parse_generated_tasks(raw: str, snapshot: BalanceSnapshot, week: int, limit: int) -> List[RecommendedTask]:
    """Parse a generator reply (JSON list, possibly wrapped in prose) into tasks."""
    data = _extract_json(raw)
    if isinstance(data, dict):
        data = data.get("tasks", [])
    if not isinstance(data, list):
        raise ValueError("Generated tasks must be a JSON list")

    target = _other(busier_party(snapshot))
    fallback_cat = _categories_by_imbalance(snapshot)[0]

    tasks: List[RecommendedTask] = []
    for item in data:
        if len(tasks) >= limit:
            break
        if not isinstance(item, dict) or not str(item.get("title") or "").strip():
            continue
        n = len(tasks) + 1
        tasks.append(
            RecommendedTask(
                id=f"{week}-{n}",
                title=f"Week {week}: {str(item['title']).strip()}",
                description=str(item.get("description") or "").strip(),
                category=coerce_category(item.get("category")) or fallback_cat,
                assigned_to=target,
                priority="High" if n == 1 else "Medium",
                source="generated",
            )
        )
    return tasks


def _describe(snapshot: BalanceSnapshot, heavy: List[Question]) -> Dict[str, str]:
    overall = f"Parent A {snapshot.overall.a:.0f}% / Parent B {snapshot.overall.b:.0f}%"
    cats = "\n".join(
        f"- {CATEGORY_LABELS[c]}: A {snapshot.categories[c].a:.0f}%, B {snapshot.categories[c].b:.0f}%, "
        f"imbalance {snapshot.categories[c].imbalance:.0f}%"
        for c in CATEGORY_ORDER
    )
    tasks = "\n".join(f"- {q.text} ({CATEGORY_LABELS[q.category]})" for q in heavy[:10]) or "(none)"
    return {"overall": overall, "categories": cats, "heavy_tasks": tasks}


def recommend_tasks(
    questions: Iterable[Question],
    responses: Optional[Responses],
    snapshot: BalanceSnapshot,
    priorities: Optional[FamilyPriorities] = None,
    week: int = 1,
    limit: int = 3,
    generate_text: Optional[TextGenerator] = None,
) -> List[RecommendedTask]:
    """
    Recommend up to `limit` follow-up tasks for the coming week.

    Generator failures (exception, empty or unparsable reply) are logged and
    answered with the rule-based list.
    """
    questions = list(questions)
    rules = rule_based_tasks(questions, responses, snapshot, priorities, week=week, limit=limit)
    if generate_text is None:
        return rules

    heavy = _heavy_tasks(questions, responses, snapshot, priorities)
    prompt = make_task_prompt(week=week, limit=limit, **_describe(snapshot, heavy))
    try:
        raw = generate_text(SYSTEM, prompt)
    except Exception as exc:  # opaque collaborator; any failure means fall back
        LOGGER.warning("Task generator failed, using rule-based tasks: %s", exc)
        return rules
    if not raw:
        LOGGER.warning("Task generator returned no text, using rule-based tasks")
        return rules
    if not isinstance(raw, str):
        LOGGER.warning("Task generator returned %s, not text; using rule-based tasks", type(raw).__name__)
        return rules

    try:
        generated = parse_generated_tasks(raw, snapshot, week, limit)
    except ValueError as exc:
        LOGGER.warning("Could not parse generated tasks, using rule-based tasks: %s", exc)
        return rules

    # top up short replies
    for task in rules:
        if len(generated) >= limit:
            break
        n = len(generated) + 1
        generated.append(
            RecommendedTask(
                id=f"{week}-{n}",
                title=task.title,
                description=task.description,
                category=task.category,
                assigned_to=task.assigned_to,
                priority="High" if n == 1 else "Medium",
                question_id=task.question_id,
            )
        )
    return generated
