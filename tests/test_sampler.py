"""Tests for the adaptive question sampler and question-bank queries."""

import pytest

from family_balance.model import CATEGORY_ORDER, INITIAL, Category, Question
from family_balance.sampler import (
    high_impact_questions,
    questions_by_category,
    rank_by_weight,
    sample_questions,
    survey_progress,
)
from family_balance.weighting import compute_weight


def _ids(questions):
    return [q.id for q in questions]


class TestSampleQuestions:
    """Test sample_questions."""

    def test_size_and_category_blocks(self, bank):
        picked = sample_questions(bank, 1)
        assert len(picked) == 20
        for i, category in enumerate(CATEGORY_ORDER):
            block = picked[i * 5:(i + 1) * 5]
            assert all(q.category == category for q in block)

    def test_no_duplicates(self, bank):
        picked = sample_questions(bank, 4)
        assert len(set(_ids(picked))) == len(picked)

    def test_top_weight_questions_always_present(self, bank, priorities):
        grouped = questions_by_category(bank)
        for period in [INITIAL, 1, 2, 3, 10, 52]:
            picked = sample_questions(bank, period, priorities=priorities)
            for i, category in enumerate(CATEGORY_ORDER):
                block = picked[i * 5:(i + 1) * 5]
                top3 = rank_by_weight(grouped[category], priorities)[:3]
                assert block[:3] == top3

    def test_heaviest_question_included_with_single_high_pick(self, bank):
        grouped = questions_by_category(bank)
        picked = sample_questions(bank, 7, count_per_category=2, high_weight_count=1)
        for category in CATEGORY_ORDER:
            heaviest = max(grouped[category], key=compute_weight)
            assert heaviest in picked

    def test_reproducible_for_same_period(self, bank):
        assert _ids(sample_questions(bank, 3)) == _ids(sample_questions(bank, 3))
        assert _ids(sample_questions(bank, "3")) == _ids(sample_questions(bank, 3))

    def test_periods_vary(self, bank):
        sets = {tuple(_ids(sample_questions(bank, week))) for week in range(1, 9)}
        assert len(sets) > 1

    def test_seed_changes_variety(self, bank):
        runs = {tuple(_ids(sample_questions(bank, 2, seed=s))) for s in range(5)}
        assert len(runs) > 1

    def test_high_weight_count_clamped(self, bank):
        picked = sample_questions(bank, 1, count_per_category=2, high_weight_count=5)
        grouped = questions_by_category(bank)
        assert len(picked) == 8
        for i, category in enumerate(CATEGORY_ORDER):
            assert picked[i * 2:(i + 1) * 2] == rank_by_weight(grouped[category])[:2]

    def test_negative_counts(self, bank):
        assert sample_questions(bank, 1, count_per_category=-1, high_weight_count=-3) == []

    def test_small_category(self):
        bank = [
            Question.from_record({"id": f"s{i}", "category": "VisibleParental", "base_weight": i})
            for i in range(1, 5)
        ]
        picked = sample_questions(bank, 1)
        assert sorted(_ids(picked)) == ["s1", "s2", "s3", "s4"]
        assert _ids(picked)[:3] == ["s4", "s3", "s2"]

    def test_empty_bank(self):
        assert sample_questions([], 1) == []

    def test_invalid_period(self, bank):
        with pytest.raises(ValueError):
            sample_questions(bank, -2)


class TestQueries:
    def test_questions_by_category_keeps_order(self, bank):
        grouped = questions_by_category(bank)
        assert set(grouped) == set(CATEGORY_ORDER)
        assert _ids(grouped[Category.VISIBLE_HOUSEHOLD])[:3] == ["q1", "q2", "q3"]
        assert all(len(v) == 20 for v in grouped.values())

    def test_rank_is_stable_for_ties(self):
        same = [Question.from_record({"id": f"t{i}", "category": "VisibleHousehold"}) for i in range(4)]
        assert _ids(rank_by_weight(same)) == ["t0", "t1", "t2", "t3"]

    def test_high_impact_questions(self, bank, priorities):
        top = high_impact_questions(bank, priorities, limit=5)
        weights = [compute_weight(q, priorities) for q in top]
        assert len(top) == 5
        assert weights == sorted(weights, reverse=True)
        assert max(compute_weight(q, priorities) for q in bank) == weights[0]

    def test_high_impact_by_category(self, bank):
        top = high_impact_questions(bank, limit=3, category=Category.INVISIBLE_HOUSEHOLD)
        assert all(q.category == Category.INVISIBLE_HOUSEHOLD for q in top)

    def test_survey_progress(self):
        assert survey_progress({"q1": "A", "q2": "B", "q3": None}, 4) == 50.0
        assert survey_progress({}, 0) == 0.0
        assert survey_progress({"q1": "A"}, 1) == 100.0
