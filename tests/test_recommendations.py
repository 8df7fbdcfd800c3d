"""Tests for follow-up task recommendations."""

import json

import pytest

from family_balance.aggregator import aggregate, to_snapshot
from family_balance.model import Assignee, Category
from family_balance.recommendations import (
    busier_party,
    parse_generated_tasks,
    recommend_tasks,
    rule_based_tasks,
)

RESPONSES = {"vh": "A", "ih": "A", "vp": "B", "ip": "A"}


@pytest.fixture
def snapshot(mixed_questions):
    return to_snapshot(1, aggregate(mixed_questions, RESPONSES))


class TestRuleBased:
    def test_busier_party(self, snapshot):
        assert busier_party(snapshot) == Assignee.A

    def test_hands_tasks_to_other_party(self, mixed_questions, snapshot):
        tasks = rule_based_tasks(mixed_questions, RESPONSES, snapshot, week=2)
        assert len(tasks) == 3
        assert all(t.assigned_to == Assignee.B for t in tasks)
        assert {t.question_id for t in tasks} == {"vh", "ih", "ip"}
        assert [t.priority for t in tasks] == ["High", "Medium", "Medium"]
        assert tasks[0].id == "2-1"
        assert tasks[0].title.startswith("Week 2:")

    def test_limit(self, mixed_questions, snapshot):
        assert len(rule_based_tasks(mixed_questions, RESPONSES, snapshot, limit=1)) == 1
        assert rule_based_tasks(mixed_questions, RESPONSES, snapshot, limit=0) == []

    def test_no_answers(self, mixed_questions):
        snap = to_snapshot(1, aggregate(mixed_questions, {}))
        assert rule_based_tasks(mixed_questions, {}, snap) == []


class TestGenerated:
    def test_without_generator_uses_rules(self, mixed_questions, snapshot):
        tasks = recommend_tasks(mixed_questions, RESPONSES, snapshot)
        assert all(t.source == "rules" for t in tasks)

    def test_generator_reply_used(self, mixed_questions, snapshot):
        calls = []

        def generate(system, user):
            calls.append((system, user))
            return json.dumps([
                {"title": "Own the family calendar", "description": "B runs it this week.",
                 "category": "Invisible Household Tasks"},
                {"title": "Bedtime stories", "description": "Alternate nights.", "category": "VisibleParental"},
                {"title": "Meal plan", "description": "Plan Sunday.", "category": "???"},
            ])

        tasks = recommend_tasks(mixed_questions, RESPONSES, snapshot, week=3, generate_text=generate)
        assert len(calls) == 1
        assert "Week: 3" in calls[0][1]
        assert [t.source for t in tasks] == ["generated"] * 3
        assert tasks[0].title == "Week 3: Own the family calendar"
        assert tasks[0].category == Category.INVISIBLE_HOUSEHOLD
        assert tasks[1].category == Category.VISIBLE_PARENTAL
        assert all(t.assigned_to == Assignee.B for t in tasks)

    def test_json_inside_prose(self, snapshot):
        raw = 'Here you go:\n[{"title": "Laundry swap", "description": "B folds."}]\nGood luck!'
        tasks = parse_generated_tasks(raw, snapshot, week=1, limit=3)
        assert [t.title for t in tasks] == ["Week 1: Laundry swap"]

    def test_short_reply_topped_up(self, mixed_questions, snapshot):
        def generate(system, user):
            return '[{"title": "Laundry swap", "description": "B folds."}]'

        tasks = recommend_tasks(mixed_questions, RESPONSES, snapshot, generate_text=generate)
        assert len(tasks) == 3
        assert tasks[0].source == "generated"
        assert [t.source for t in tasks[1:]] == ["rules", "rules"]
        assert [t.id for t in tasks] == ["1-1", "1-2", "1-3"]

    @pytest.mark.parametrize(
        "reply",
        [None, "", "no json here", '{"tasks": "nope"}', {"tasks": []}, ["not", "text"], 42],
    )
    def test_bad_replies_fall_back(self, mixed_questions, snapshot, reply):
        tasks = recommend_tasks(mixed_questions, RESPONSES, snapshot, generate_text=lambda s, u: reply)
        assert tasks == rule_based_tasks(mixed_questions, RESPONSES, snapshot)

    def test_generator_exception_falls_back(self, mixed_questions, snapshot):
        def boom(system, user):
            raise RuntimeError("service down")

        tasks = recommend_tasks(mixed_questions, RESPONSES, snapshot, generate_text=boom)
        assert all(t.source == "rules" for t in tasks)
