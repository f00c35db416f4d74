from __future__ import annotations

from quiz_core.engine import get_daily_focus_summary
from quiz_core.question_bank import SKILLS
from quiz_core.types import SkillMasteryRecord

from tests.conftest import mastery_for

DEC, FRA, WRD = SKILLS


def test_one_focus_area_per_skill_with_priority_by_bucket():
    areas = get_daily_focus_summary(mastery_for({DEC: 35, FRA: 72, WRD: 91}))

    assert [(a.skill, a.label, a.priority) for a in areas] == [
        ("Decimal", "Working on", "high"),
        ("Fractions", "Building", "medium"),
        ("Word", "Maintaining", "low"),
    ]


def test_new_learner_focus_uses_neutral_scores():
    areas = get_daily_focus_summary([])

    assert [a.skill for a in areas] == ["Word", "Decimal", "Fractions"]
    assert [a.priority for a in areas] == ["high", "medium", "low"]
    assert all(a.score == 50 for a in areas)


def test_focus_scores_round_half_up():
    records = [
        SkillMasteryRecord(skill=DEC, current_score=40.5),
        SkillMasteryRecord(skill=FRA, current_score=60.0, recent_accuracy=72.5),
        SkillMasteryRecord(skill=WRD, current_score=88.49),
    ]
    scores = {a.skill: a.score for a in get_daily_focus_summary(records)}
    assert scores == {"Decimal": 41, "Fractions": 73, "Word": 88}
