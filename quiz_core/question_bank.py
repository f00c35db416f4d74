from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, List, Mapping
from .types import Question, SkillMasteryRecord, Session, SessionAnswer
from .validators import InvalidInputError, validate_question
SKILLS = ["Decimal Operations","Fractions & Mixed Numbers","Word Problems & Patterns"]

_QUESTION_KEYS = {
    "id": "id", "skill": "skill", "sub_skill": "sub_skill", "subSkill": "sub_skill",
    "difficulty": "difficulty", "is_active": "is_active", "isActive": "is_active",
    "text": "text", "question": "text", "options": "options",
    "correct_index": "correct_index", "correctIndex": "correct_index",
    "explanation": "explanation",
}


def _pick(raw: Mapping[str, Any], *names: str, default: Any = None) -> Any:
    for n in names:
        if n in raw and raw[n] is not None:
            return raw[n]
    return default


def _num(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"expected a number, got {value!r}") from None


def question_from_record(raw: Mapping[str, Any]) -> Question:
    kwargs: Dict[str, Any] = {}
    for key, val in raw.items():
        target = _QUESTION_KEYS.get(key)
        if target is not None and target not in kwargs:
            kwargs[target] = val
    for required in ("id", "skill", "sub_skill", "difficulty"):
        if required not in kwargs:
            raise InvalidInputError(f"question record missing {required!r}: {dict(raw)!r}")
    if kwargs.get("is_active") is None:
        kwargs["is_active"] = True
    kwargs["id"] = str(kwargs["id"])
    q = Question(**kwargs)
    validate_question(q)
    return q


def mastery_from_record(raw: Mapping[str, Any]) -> SkillMasteryRecord:
    return SkillMasteryRecord(
        skill=str(_pick(raw, "skill", default="")),
        current_score=_num(_pick(raw, "current_score", "currentScore")),
        recent_accuracy=_num(_pick(raw, "recent_accuracy", "recentAccuracy")),
        needs_review=bool(_pick(raw, "needs_review", "needsReview", default=False)),
        player_id=_pick(raw, "player_id", "playerId", "player_name"),
    )


def session_from_record(raw: Mapping[str, Any]) -> Session:
    answers = []
    for a in raw.get("answers") or []:
        qid = _pick(a, "question_id", "questionId")
        answers.append(
            SessionAnswer(
                question_id=None if qid is None else str(qid),
                skill=str(_pick(a, "skill", default="")),
                sub_skill=str(_pick(a, "sub_skill", "subSkill", default="")),
                is_correct=bool(_pick(a, "is_correct", "isCorrect", default=False)),
                timestamp=_pick(a, "timestamp"),
                difficulty=_pick(a, "difficulty"),
                selected_index=_pick(a, "selected_index", "selectedIndex"),
            )
        )
    return Session(
        player_id=_pick(raw, "player_id", "playerId", "player_name"),
        answers=answers,
        completed_at=_pick(raw, "completed_at", "completedAt"),
    )


def parse_bank(raw: List[Mapping[str, Any]]) -> List[Question]:
    out: List[Question] = []
    for idx, r in enumerate(raw):
        try:
            out.append(question_from_record(r))
        except InvalidInputError as e:
            raise InvalidInputError(f"bank record #{idx}: {e}") from e
    return out


def load_bank(path: str | Path | None = None) -> List[Question]:
    if path is not None:
        data = Path(path).read_text(encoding="utf-8")
    else:
        data = Path(__file__).with_name("data").joinpath("bank.json").read_text(encoding="utf-8")
    return parse_bank(json.loads(data))
