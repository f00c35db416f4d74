from __future__ import annotations
from typing import Iterable, List, Sequence
from .config import DIFFICULTY_MIN, DIFFICULTY_MAX
from .types import Question, SkillMasteryRecord, Session


class InvalidInputError(ValueError):
    """Raised when a snapshot handed to the engine is malformed."""


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_question(q: Question) -> None:
    if not isinstance(q.id, str) or not q.id:
        raise InvalidInputError(f"question id must be a non-empty string, got {q.id!r}")
    if not isinstance(q.skill, str) or not q.skill:
        raise InvalidInputError(f"question {q.id}: missing skill")
    if not isinstance(q.sub_skill, str):
        raise InvalidInputError(f"question {q.id}: missing sub_skill")
    if isinstance(q.difficulty, bool) or not isinstance(q.difficulty, int):
        raise InvalidInputError(f"question {q.id}: difficulty must be an int, got {q.difficulty!r}")
    if not DIFFICULTY_MIN <= q.difficulty <= DIFFICULTY_MAX:
        raise InvalidInputError(
            f"question {q.id}: difficulty {q.difficulty} outside {DIFFICULTY_MIN}..{DIFFICULTY_MAX}"
        )
    if not isinstance(q.is_active, bool):
        raise InvalidInputError(f"question {q.id}: is_active must be a bool")


def validate_bank(questions: Iterable[Question]) -> List[Question]:
    out = list(questions)
    for q in out:
        if not isinstance(q, Question):
            raise InvalidInputError(f"expected Question, got {type(q).__name__}")
        validate_question(q)
    return out


def validate_mastery(records: Iterable[SkillMasteryRecord]) -> List[SkillMasteryRecord]:
    out = list(records)
    for rec in out:
        if not isinstance(rec, SkillMasteryRecord):
            raise InvalidInputError(f"expected SkillMasteryRecord, got {type(rec).__name__}")
        if not isinstance(rec.skill, str) or not rec.skill:
            raise InvalidInputError("mastery record missing skill")
        for name in ("current_score", "recent_accuracy"):
            val = getattr(rec, name)
            if val is None:
                continue
            if not _is_number(val):
                raise InvalidInputError(f"mastery {rec.skill}: {name} must be numeric, got {val!r}")
            if not 0 <= val <= 100:
                raise InvalidInputError(f"mastery {rec.skill}: {name}={val} outside 0..100")
    return out


def validate_sessions(sessions: Sequence[Session] | None) -> List[Session]:
    out = list(sessions or [])
    for sess in out:
        if not isinstance(sess, Session):
            raise InvalidInputError(f"expected Session, got {type(sess).__name__}")
        if not isinstance(sess.answers, list):
            raise InvalidInputError("session answers must be a list")
    return out
