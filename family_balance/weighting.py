# family_balance/weighting.py
"""
Task weight model.

weight = base_weight
         * frequency * invisibility * emotional_labor
         * research_impact * child_development
         * priority

Multiplication happens in exactly that order so results are bit-reproducible.
Values missing from a table resolve to the table's named default.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .model import (
    ChildDevelopment,
    EmotionalLabor,
    FamilyPriorities,
    Frequency,
    Invisibility,
    Question,
    ResearchImpact,
    coerce_base_weight,
    coerce_enum,
)


# ------------------------------------------------------------------
# Multiplier tables (fixed)
# ------------------------------------------------------------------
FREQUENCY_MULTIPLIERS: Dict[Frequency, float] = {
    Frequency.DAILY: 1.5,
    Frequency.SEVERAL_WEEKLY: 1.3,
    Frequency.WEEKLY: 1.2,
    Frequency.MONTHLY: 1.0,
    Frequency.QUARTERLY: 0.8,
}
DEFAULT_FREQUENCY = Frequency.WEEKLY

INVISIBILITY_MULTIPLIERS: Dict[Invisibility, float] = {
    Invisibility.HIGHLY_VISIBLE: 1.0,        # clearly observable when complete
    Invisibility.PARTIALLY_VISIBLE: 1.2,     # noticed only when not done
    Invisibility.MOSTLY_INVISIBLE: 1.35,     # typically goes unnoticed
    Invisibility.COMPLETELY_INVISIBLE: 1.5,  # never acknowledged unless mentioned
}
DEFAULT_INVISIBILITY = Invisibility.PARTIALLY_VISIBLE

EMOTIONAL_LABOR_MULTIPLIERS: Dict[EmotionalLabor, float] = {
    EmotionalLabor.MINIMAL: 1.0,
    EmotionalLabor.LOW: 1.1,
    EmotionalLabor.MODERATE: 1.2,
    EmotionalLabor.HIGH: 1.3,
    EmotionalLabor.EXTREME: 1.4,
}
DEFAULT_EMOTIONAL_LABOR = EmotionalLabor.MINIMAL

RESEARCH_IMPACT_MULTIPLIERS: Dict[ResearchImpact, float] = {
    ResearchImpact.HIGH_IMPACT: 1.3,
    ResearchImpact.MEDIUM_IMPACT: 1.15,
    ResearchImpact.STANDARD_IMPACT: 1.0,
}
DEFAULT_RESEARCH_IMPACT = ResearchImpact.STANDARD_IMPACT

CHILD_DEVELOPMENT_MULTIPLIERS: Dict[ChildDevelopment, float] = {
    ChildDevelopment.HIGH_IMPACT: 1.25,
    ChildDevelopment.MODERATE_IMPACT: 1.15,
    ChildDevelopment.LIMITED_IMPACT: 1.0,
}
DEFAULT_CHILD_DEVELOPMENT = ChildDevelopment.LIMITED_IMPACT

# keyed by priority rank (1 = highest); None = category not prioritized
PRIORITY_MULTIPLIERS: Dict[Optional[int], float] = {
    1: 1.5,
    2: 1.3,
    3: 1.1,
    None: 1.0,
}

# (threshold, tier) checked top-down
IMPACT_TIERS: Tuple[Tuple[float, str], ...] = (
    (12.0, "very_high"),
    (9.0, "high"),
    (6.0, "medium"),
)


def _multiplier(table: Dict, enum_cls, value: object, default) -> float:
    return table[coerce_enum(enum_cls, value, default)]


def priority_multiplier(question: Question, priorities: Optional[FamilyPriorities]) -> float:
    if priorities is None:
        return PRIORITY_MULTIPLIERS[None]
    return PRIORITY_MULTIPLIERS[priorities.priority_rank(question.category)]


def weight_breakdown(question: Question, priorities: Optional[FamilyPriorities] = None) -> List[Tuple[str, float]]:
    """Ordered (factor, value) pairs whose product is the task weight."""
    return [
        ("base_weight", float(coerce_base_weight(question.base_weight))),
        ("frequency", _multiplier(FREQUENCY_MULTIPLIERS, Frequency, question.frequency, DEFAULT_FREQUENCY)),
        ("invisibility", _multiplier(INVISIBILITY_MULTIPLIERS, Invisibility, question.invisibility, DEFAULT_INVISIBILITY)),
        ("emotional_labor", _multiplier(EMOTIONAL_LABOR_MULTIPLIERS, EmotionalLabor, question.emotional_labor, DEFAULT_EMOTIONAL_LABOR)),
        ("research_impact", _multiplier(RESEARCH_IMPACT_MULTIPLIERS, ResearchImpact, question.research_impact, DEFAULT_RESEARCH_IMPACT)),
        ("child_development", _multiplier(CHILD_DEVELOPMENT_MULTIPLIERS, ChildDevelopment, question.child_development, DEFAULT_CHILD_DEVELOPMENT)),
        ("priority", priority_multiplier(question, priorities)),
    ]


def compute_weight(question: Optional[Question], priorities: Optional[FamilyPriorities] = None) -> float:
    """
    Weight of a single task for a given family.

    Pure and deterministic; never raises for unknown attribute values.
    """
    if question is None:
        return 0.0
    weight = 1.0
    for _, factor in weight_breakdown(question, priorities):
        weight *= factor
    return weight


def impact_tier(weight: float) -> str:
    """Coarse label for a weight: very_high / high / medium / standard."""
    for threshold, tier in IMPACT_TIERS:
        if weight >= threshold:
            return tier
    return "standard"
