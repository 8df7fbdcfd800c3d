"""Tests for the shared data model helpers."""

import pytest

from family_balance.model import (
    INITIAL,
    Assignee,
    Category,
    FamilyPriorities,
    coerce_category,
    coerce_responses,
    merge_responses,
    normalize_period,
    period_index,
)


class TestPeriods:
    @pytest.mark.parametrize("raw, expected", [
        ("Initial", INITIAL), ("initial", INITIAL), (" INITIAL ", INITIAL),
        (1, 1), (12, 12), ("4", 4), (3.0, 3),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_period(raw) == expected

    @pytest.mark.parametrize("raw", [0, -1, "week 3", "", 2.5, None, True, "0"])
    def test_invalid(self, raw):
        with pytest.raises(ValueError):
            normalize_period(raw)

    def test_index(self):
        assert period_index(INITIAL) == 0
        assert period_index(5) == 5


class TestCategories:
    @pytest.mark.parametrize("raw", [
        Category.INVISIBLE_HOUSEHOLD, "InvisibleHousehold", "invisible_household",
        "INVISIBLE_HOUSEHOLD", "Invisible Household Tasks",
    ])
    def test_coerce_category(self, raw):
        assert coerce_category(raw) == Category.INVISIBLE_HOUSEHOLD

    def test_unknown(self):
        assert coerce_category("Garden") is None
        assert coerce_category(None) is None


class TestPriorities:
    def test_from_record_camel_case(self):
        prio = FamilyPriorities.from_record({
            "highestPriority": "Invisible Parental Tasks",
            "secondaryPriority": "Visible Parental Tasks",
            "tertiaryPriority": "Invisible Household Tasks",
        })
        assert prio.highest_priority == Category.INVISIBLE_PARENTAL
        assert prio.priority_rank("Visible Parental Tasks") == 2
        assert prio.priority_rank(Category.VISIBLE_HOUSEHOLD) is None

    def test_from_empty_record(self):
        assert FamilyPriorities.from_record(None) == FamilyPriorities()


class TestResponses:
    def test_coerce_responses(self):
        out = coerce_responses({"q1": "a", "q2": Assignee.B, "q3": None, "q4": "Grandma"})
        assert out == {"q1": Assignee.A, "q2": Assignee.B}

    def test_merge_last_write_wins(self):
        first = {"q1": "A", "q2": "A"}
        second = {"q2": "B", "q3": "B", "q1": None}
        assert merge_responses(first, second) == {"q1": "A", "q2": "B", "q3": "B"}

    def test_merge_nothing(self):
        assert merge_responses() == {}
        assert merge_responses(None, {}) == {}
