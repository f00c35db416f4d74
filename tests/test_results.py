from __future__ import annotations

import pytest

from quiz_core import config
from quiz_core.question_bank import SKILLS
from quiz_core.results import grade_for, skills_needing_review, summarize_answers
from quiz_core.types import SessionAnswer, SkillMasteryRecord

DEC, FRA, WRD = SKILLS


def _answers(rows: list[tuple[str, bool]]) -> list[SessionAnswer]:
    return [
        SessionAnswer(question_id=f"q{i}", skill=skill, sub_skill="s", is_correct=ok)
        for i, (skill, ok) in enumerate(rows)
    ]


def test_summary_breaks_down_by_skill_and_proposes_mastery():
    answers = _answers(
        [(DEC, True), (DEC, True), (DEC, False), (FRA, True), (WRD, False), (WRD, False)]
    )

    summary = summarize_answers(answers)

    assert (summary.correct, summary.total) == (3, 6)
    assert summary.percentage == pytest.approx(50.0)
    assert summary.grade == "F"
    assert summary.breakdown == {
        DEC: {"total": 3, "correct": 2},
        FRA: {"total": 1, "correct": 1},
        WRD: {"total": 2, "correct": 0},
    }
    updates = {u.skill: u for u in summary.mastery_updates}
    assert updates[DEC].current_score == pytest.approx(200 / 3)
    assert updates[DEC].needs_review is True
    assert updates[FRA].needs_review is False
    assert updates[WRD].current_score == 0.0


def test_empty_answers_summary():
    summary = summarize_answers([])
    assert summary.total == 0 and summary.percentage == 0.0
    assert summary.breakdown == {} and summary.mastery_updates == []


@pytest.mark.parametrize(
    "pct,letter",
    [(100, "A"), (90, "A"), (89.9, "B"), (80, "B"), (70, "C"), (60, "D"), (59.99, "F"), (0, "F")],
)
def test_grade_boundaries(pct, letter):
    assert grade_for(pct) == letter


def test_review_threshold_is_configurable(monkeypatch):
    monkeypatch.setattr(config, "REVIEW_THRESHOLD", 50.0)
    summary = summarize_answers(_answers([(DEC, True), (DEC, True), (DEC, False)]))
    assert summary.mastery_updates[0].needs_review is False


def test_skills_needing_review_filters_flagged_records():
    records = [
        SkillMasteryRecord(skill=DEC, current_score=40, needs_review=True),
        SkillMasteryRecord(skill=FRA, current_score=90),
    ]
    assert [r.skill for r in skills_needing_review(records)] == [DEC]
