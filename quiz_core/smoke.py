from __future__ import annotations

import logging
import random
from typing import Dict, List

from .config import DEBUG_SEED, DEBUG_TRACE, TRACE_FIELDS
from .engine import build_quiz, focus_areas
from .question_bank import SKILLS
from .results import summarize_answers
from .types import Question, Session, SessionAnswer, SkillMasteryRecord


def _maybe_enable_trace() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    if DEBUG_TRACE:
        logging.getLogger("quiz_core.policy").setLevel(logging.INFO)


def _synthetic_bank() -> List[Question]:
    items: List[Question] = []
    for skill in SKILLS:
        prefix = skill.split(" ")[0].lower()
        for level in range(1, 6):
            for idx in range(3):
                items.append(
                    Question(
                        id=f"smoke_{prefix}_{level}_{idx}",
                        skill=skill,
                        sub_skill=f"{prefix}_sub_{idx}",
                        difficulty=level,
                        text=f"{skill} L{level} #{idx}",
                        options=["A", "B", "C", "D"],
                        correct_index=0,
                    )
                )
    return items


# simulated learner: solid on decimals, shaky on word problems
_ABILITY: Dict[str, int] = {
    SKILLS[0]: 4,
    SKILLS[1]: 3,
    SKILLS[2]: 1,
}


def _auto_answer(q: Question, stamp: int) -> SessionAnswer:
    return SessionAnswer(
        question_id=q.id,
        skill=q.skill,
        sub_skill=q.sub_skill,
        is_correct=q.difficulty <= _ABILITY.get(q.skill, 2),
        timestamp=f"smoke-{stamp}",
        difficulty=q.difficulty,
    )


def _trace_fields() -> str:
    return ", ".join(TRACE_FIELDS)


def run_smoke_session(rounds: int = 3) -> List[Session]:
    _maybe_enable_trace()

    bank = _synthetic_bank()
    rng = random.Random(DEBUG_SEED if DEBUG_SEED is not None else 7)
    mastery: Dict[str, SkillMasteryRecord] = {}
    sessions: List[Session] = []

    logging.info("Starting synthetic run with DEBUG_SEED=%s", DEBUG_SEED)
    logging.info("Trace fields: %s", _trace_fields())

    for rnd in range(1, rounds + 1):
        plan = build_quiz("smoke", bank, list(mastery.values()), sessions, rng)
        for area in focus_areas(plan.buckets):
            logging.info("  focus %s: %s (%d, %s)", area.skill, area.label, area.score, area.priority)

        answers = [_auto_answer(q, rnd) for q in plan.questions]
        summary = summarize_answers(answers)
        logging.info(
            "Round %d: %d questions, %d recent overlaps, score %.0f%% (%s)",
            rnd,
            len(plan.questions),
            sum(1 for q in plan.questions if q.id in plan.recent_ids),
            summary.percentage,
            summary.grade,
        )
        for upd in summary.mastery_updates:
            mastery[upd.skill] = SkillMasteryRecord(
                skill=upd.skill,
                current_score=upd.current_score,
                needs_review=upd.needs_review,
                player_id="smoke",
            )
        sessions.insert(0, Session(player_id="smoke", answers=answers, completed_at=f"smoke-{rnd}"))

    return sessions


if __name__ == "__main__":  # pragma: no cover
    run_smoke_session()
