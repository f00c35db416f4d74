# quiz_core/results.py
from __future__ import annotations
from typing import Dict, Iterable, List
from . import config
from .types import MasteryUpdate, QuizSummary, SessionAnswer, SkillMasteryRecord


def grade_for(percentage: float) -> str:
    p = float(percentage)
    for cutoff, letter in config.GRADE_CUTOFFS:
        if p >= cutoff: return letter
    return "F"


def skill_breakdown(answers: Iterable[SessionAnswer]) -> Dict[str, Dict[str, int]]:
    out: Dict[str, Dict[str, int]] = {}
    for a in answers:
        row = out.setdefault(a.skill, {"total": 0, "correct": 0})
        row["total"] += 1
        if a.is_correct:
            row["correct"] += 1
    return out


def mastery_updates(breakdown: Dict[str, Dict[str, int]]) -> List[MasteryUpdate]:
    """Proposed per-skill mastery values; the caller decides whether to store them."""
    out: List[MasteryUpdate] = []
    for skill, row in breakdown.items():
        pct = row["correct"] / row["total"] * 100.0 if row["total"] else 0.0
        out.append(MasteryUpdate(skill=skill, current_score=pct, needs_review=pct < config.REVIEW_THRESHOLD))
    return out


def summarize_answers(answers: Iterable[SessionAnswer]) -> QuizSummary:
    rows = list(answers)
    correct = sum(1 for a in rows if a.is_correct)
    total = len(rows)
    pct = (correct / total * 100.0) if total else 0.0
    breakdown = skill_breakdown(rows)
    return QuizSummary(
        correct=correct,
        total=total,
        percentage=pct,
        grade=grade_for(pct),
        breakdown=breakdown,
        mastery_updates=mastery_updates(breakdown),
    )


def skills_needing_review(records: Iterable[SkillMasteryRecord]) -> List[SkillMasteryRecord]:
    return [r for r in records if r.needs_review]
