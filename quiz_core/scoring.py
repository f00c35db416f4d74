from __future__ import annotations
from typing import Mapping, Optional, Protocol, Sequence, Set, Tuple
import random
from .config import (
    BASE_SCORE,
    DIFFICULTY_MATCH_BONUS,
    DIFFICULTY_DISTANCE_PENALTY,
    RECENT_PENALTY,
    NEW_SUB_SKILL_BONUS,
    REPEAT_SUB_SKILL_PENALTY,
    JITTER_MAX,
)
from .types import Question

CoverageKey = Tuple[str, str]


class RandomSource(Protocol):
    def random(self) -> float: ...


def coverage_key(q: Question) -> CoverageKey:
    return (q.skill, q.sub_skill)


def difficulty_distance(difficulty: int, targets: Sequence[int]) -> int:
    """Gap to the nearest bound of the target range; 0 when inside it."""
    lo, hi = min(targets), max(targets)
    if difficulty < lo:
        return lo - difficulty
    if difficulty > hi:
        return difficulty - hi
    return 0

def _difficulty_term(q: Question, targets: Sequence[int]) -> float:
    if q.difficulty in targets:
        return DIFFICULTY_MATCH_BONUS
    return -DIFFICULTY_DISTANCE_PENALTY * difficulty_distance(q.difficulty, targets)

def _coverage_term(q: Question, coverage: Mapping[CoverageKey, int]) -> float:
    seen = int(coverage.get(coverage_key(q), 0))
    if seen == 0:
        return NEW_SUB_SKILL_BONUS
    return -REPEAT_SUB_SKILL_PENALTY * seen

def calculate_question_score(
    question: Question,
    target_difficulties: Sequence[int],
    recent_ids: Set[str],
    coverage: Mapping[CoverageKey, int],
    rng: Optional[RandomSource] = None,
) -> float:
    """
    Priority of a candidate question, higher is better.
    Recently seen questions are pushed far down but stay selectable.
    Pure apart from the jitter draw on `rng`.
    """
    score = BASE_SCORE
    score += _difficulty_term(question, target_difficulties)
    if question.id in recent_ids:
        score -= RECENT_PENALTY
    score += _coverage_term(question, coverage)
    src = rng if rng is not None else random
    score += src.random() * JITTER_MAX
    return score
