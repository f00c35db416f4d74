# quiz_core/engine.py
from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Sequence, Set
import logging, math, random

from .types import FocusArea, Question, QuizPlan, Session, SkillBuckets, SkillMasteryRecord
from .question_bank import SKILLS
from .categorize import categorize_skills
from .policy import QuestionPolicy
from .validators import validate_bank, validate_mastery, validate_sessions
from .config import (
    QUIZ_SIZE,
    CATEGORY_ORDER,
    DIFFICULTY_TARGETS,
    RECENT_SESSION_WINDOW,
)


log = logging.getLogger(__name__)

_FOCUS_LABELS: Dict[str, tuple[str, str]] = {
    "weak": ("Working on", "high"),
    "medium": ("Building", "medium"),
    "strong": ("Maintaining", "low"),
}


def recent_question_ids(sessions: Sequence[Session]) -> Set[str]:
    """Ids answered in the most recent sessions; callers pass newest first."""

    out: Set[str] = set()
    for sess in list(sessions)[:RECENT_SESSION_WINDOW]:
        for ans in sess.answers:
            if ans.question_id:
                out.add(ans.question_id)
    return out


def _distinct(questions: Iterable[Question]) -> List[Question]:
    seen: Set[str] = set()
    out: List[Question] = []
    dupes = 0
    for q in questions:
        if q.id in seen:
            dupes += 1
            continue
        seen.add(q.id)
        out.append(q)
    if dupes:
        log.warning("question bank holds %d duplicate id(s); keeping first occurrence", dupes)
    return out


def _audit_events(
    ordered: Sequence[Question],
    source: Dict[str, str],
    scores: Dict[str, float],
    recent_ids: Set[str],
) -> List[Dict[str, object]]:
    events: List[Dict[str, object]] = []
    for pos, q in enumerate(ordered, start=1):
        score = scores.get(q.id)
        events.append(
            {
                "position": pos,
                "question_id": q.id,
                "bucket": source.get(q.id, "backfill"),
                "skill": q.skill,
                "sub_skill": q.sub_skill,
                "difficulty": q.difficulty,
                "score": None if score is None else round(score, 3),
                "recent": q.id in recent_ids,
            }
        )
    return events


def build_quiz(
    player_id: Optional[str],
    question_bank: Iterable[Question],
    mastery_records: Iterable[SkillMasteryRecord],
    recent_sessions: Optional[Sequence[Session]] = None,
    rng: Optional[random.Random] = None,
    skills: Sequence[str] = SKILLS,
) -> QuizPlan:
    """Assemble one adaptive quiz and keep the bookkeeping around it.

    Raises InvalidInputError for malformed questions, mastery records or
    sessions. A bank with fewer than QUIZ_SIZE active questions yields a
    shorter quiz (plan.short is set), never an error.
    """

    bank = _distinct(validate_bank(question_bank))
    mastery = validate_mastery(mastery_records)
    sessions = validate_sessions(recent_sessions)

    buckets = categorize_skills(mastery, skills)
    recent_ids = recent_question_ids(sessions)
    policy = QuestionPolicy(bank, recent_ids, rng)

    selected: List[Question] = []
    source: Dict[str, str] = {}
    for bucket, count in CATEGORY_ORDER:
        picked = policy.select(bucket, buckets.names(bucket), count, DIFFICULTY_TARGETS[bucket])
        for q in picked:
            source[q.id] = bucket
        selected.extend(picked)

    if len(selected) < QUIZ_SIZE:
        filled = policy.backfill(selected, QUIZ_SIZE)
        if filled:
            log.debug("back-filled %d question(s) for %s", len(filled), player_id)
        selected.extend(filled)

    selected = selected[:QUIZ_SIZE]
    ordered = policy.order_by_difficulty(selected)

    short = len(ordered) < QUIZ_SIZE
    if short:
        log.warning(
            "only %d active question(s) available for %s; quiz is short of %d",
            len(ordered),
            player_id,
            QUIZ_SIZE,
        )

    return QuizPlan(
        player_id=player_id,
        questions=ordered,
        buckets=buckets,
        recent_ids=recent_ids,
        audit_events=_audit_events(ordered, source, policy.state.scores, recent_ids),
        short=short,
    )


def select_adaptive_questions(
    player_id: Optional[str],
    question_bank: Iterable[Question],
    mastery_records: Iterable[SkillMasteryRecord],
    recent_sessions: Optional[Sequence[Session]] = None,
    rng: Optional[random.Random] = None,
) -> List[Question]:
    """Ordered quiz of up to QUIZ_SIZE questions, easiest tier first."""

    return build_quiz(player_id, question_bank, mastery_records, recent_sessions, rng).questions


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def focus_areas(buckets: SkillBuckets) -> List[FocusArea]:
    out: List[FocusArea] = []
    for bucket in ("weak", "medium", "strong"):
        label, priority = _FOCUS_LABELS[bucket]
        for entry in getattr(buckets, bucket):
            out.append(
                FocusArea(
                    skill=entry.skill.split(" ")[0],
                    label=label,
                    score=_round_half_up(entry.score),
                    priority=priority,  # type: ignore[arg-type]
                )
            )
    return out


def get_daily_focus_summary(
    mastery_records: Iterable[SkillMasteryRecord],
    skills: Sequence[str] = SKILLS,
) -> List[FocusArea]:
    return focus_areas(categorize_skills(validate_mastery(mastery_records), skills))
