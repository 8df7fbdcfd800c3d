"""
Shared test fixtures.

All tests are:
- Fast (no network, workbooks only under tmp_path)
- Deterministic (seeded sampling, fixed inputs)
"""

import pytest

from family_balance.model import (
    Category,
    ChildDevelopment,
    EmotionalLabor,
    FamilyPriorities,
    Frequency,
    Invisibility,
    Question,
    ResearchImpact,
)
from family_balance.question_bank import default_question_bank


@pytest.fixture
def simple_question():
    """The single-question example: weight 2 * 1.2 = 2.4."""
    return Question(
        id="q1",
        text="Who cleans the floors?",
        category=Category.VISIBLE_HOUSEHOLD,
        base_weight=2,
        frequency=Frequency.WEEKLY,
        invisibility=Invisibility.HIGHLY_VISIBLE,
        emotional_labor=EmotionalLabor.MINIMAL,
        research_impact=ResearchImpact.STANDARD_IMPACT,
        child_development=ChildDevelopment.LIMITED_IMPACT,
    )


@pytest.fixture
def mixed_questions():
    """One question per category with distinct weights."""
    return [
        Question.from_record(dict(id="vh", text="Dishes", category="VisibleHousehold", base_weight=2,
                                  frequency="Daily", invisibility="HighlyVisible")),
        Question.from_record(dict(id="ih", text="Calendar", category="InvisibleHousehold", base_weight=4,
                                  frequency="Daily", invisibility="CompletelyInvisible", emotional_labor="High")),
        Question.from_record(dict(id="vp", text="Homework", category="VisibleParental", base_weight=3,
                                  frequency="Weekly", child_development="HighImpact")),
        Question.from_record(dict(id="ip", text="Emotional support", category="InvisibleParental", base_weight=5,
                                  frequency="Weekly", emotional_labor="Extreme", research_impact="HighImpact")),
    ]


@pytest.fixture
def priorities():
    return FamilyPriorities(
        highest_priority=Category.INVISIBLE_PARENTAL,
        secondary_priority=Category.VISIBLE_PARENTAL,
        tertiary_priority=Category.INVISIBLE_HOUSEHOLD,
    )


@pytest.fixture(scope="session")
def bank():
    return default_question_bank()
