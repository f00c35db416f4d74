from __future__ import annotations

from collections import Counter

import pytest

from quiz_core.scoring import calculate_question_score, difficulty_distance
from quiz_core.types import Question

from tests.conftest import FixedRandom


def _q(difficulty: int, qid: str = "q1", sub: str = "place value") -> Question:
    return Question(id=qid, skill="Decimal Operations", sub_skill=sub, difficulty=difficulty)


def test_in_range_fresh_question_scores_base_plus_bonuses(zero_rng):
    score = calculate_question_score(_q(2), (1, 2), set(), Counter(), zero_rng)
    assert score == pytest.approx(150.0)


@pytest.mark.parametrize(
    "difficulty,targets,expected",
    [
        (5, (1, 2), 75.0),   # 3 above the range
        (3, (1, 2), 105.0),  # 1 above
        (1, (3, 4, 5), 90.0),  # 2 below
    ],
)
def test_out_of_range_penalty_scales_with_distance(zero_rng, difficulty, targets, expected):
    score = calculate_question_score(_q(difficulty), targets, set(), Counter(), zero_rng)
    assert score == pytest.approx(expected)


def test_recent_questions_are_pushed_far_down(zero_rng):
    score = calculate_question_score(_q(2), (1, 2), {"q1"}, Counter(), zero_rng)
    assert score == pytest.approx(-50.0)


def test_repeated_sub_skill_is_penalised_per_selection(zero_rng):
    coverage = Counter({("Decimal Operations", "place value"): 2})
    score = calculate_question_score(_q(2), (1, 2), set(), coverage, zero_rng)
    assert score == pytest.approx(110.0)

    other = calculate_question_score(_q(2, sub="rounding"), (1, 2), set(), coverage, zero_rng)
    assert other == pytest.approx(150.0)


def test_jitter_stays_below_ten():
    hi = calculate_question_score(_q(2), (1, 2), set(), Counter(), FixedRandom(0.9999))
    assert 150.0 <= hi < 160.0


def test_scoring_does_not_touch_coverage(zero_rng):
    coverage = Counter()
    calculate_question_score(_q(2), (1, 2), set(), coverage, zero_rng)
    assert coverage == Counter()


def test_difficulty_distance():
    assert difficulty_distance(2, (2, 3)) == 0
    assert difficulty_distance(1, (2, 3)) == 1
    assert difficulty_distance(5, (2, 3)) == 2
