# quiz_core/policy.py
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Set, Tuple
import logging
import random

from .config import DEBUG_SEED, DEBUG_TRACE, TRACE_FIELDS
from .scoring import calculate_question_score, coverage_key
from .types import Question


log = logging.getLogger(__name__)


def _emit_trace(**values: object) -> None:
    if not DEBUG_TRACE:
        return
    ordered = []
    for key in TRACE_FIELDS:
        if key in values:
            ordered.append(f"{key}={values[key]}")
    if ordered:
        log.info("trace %s", " ".join(str(val) for val in ordered))


@dataclass
class SelectionState:
    recent_ids: Set[str] = field(default_factory=set)
    coverage: Counter = field(default_factory=Counter)
    scores: Dict[str, float] = field(default_factory=dict)


def select_for_category(
    questions: Sequence[Question],
    skill_names: Sequence[str],
    count: int,
    target_difficulties: Sequence[int],
    recent_ids: Set[str],
    coverage: Counter,
    rng: random.Random,
    *,
    bucket: str = "",
    scores: Dict[str, float] | None = None,
) -> List[Question]:
    """Top `count` active questions for the given skills.

    Bumps `coverage` for every pick so the next category sees it. Returns
    fewer than `count` when the candidates run out.
    """

    if count <= 0 or not skill_names:
        return []

    wanted = set(skill_names)
    candidates = [q for q in questions if q.is_active and q.skill in wanted]
    if not candidates:
        return []

    scored: List[Tuple[float, Question]] = [
        (
            calculate_question_score(q, target_difficulties, recent_ids, coverage, rng),
            q,
        )
        for q in candidates
    ]
    scored.sort(key=lambda pair: pair[0], reverse=True)
    picked = scored[:count]

    for score, q in picked:
        coverage[coverage_key(q)] += 1
        if scores is not None:
            scores[q.id] = score
        _emit_trace(
            bucket=bucket,
            question_id=q.id,
            skill=q.skill,
            sub_skill=q.sub_skill,
            difficulty=q.difficulty,
            score=round(score, 2),
            recent=q.id in recent_ids,
        )
    return [q for _, q in picked]


class QuestionPolicy:
    """Per-call selection policy: one random source, one coverage map."""

    def __init__(self, items: Sequence[Question], recent_ids: Set[str] | None = None,
                 rng: random.Random | None = None):
        self.items = list(items)
        if rng is None:
            seed = DEBUG_SEED
            if seed is None:
                seed = random.randint(0, 2**31 - 1)
            log.debug("policy seed %s", seed)
            rng = random.Random(int(seed))
        self.rng = rng
        self.state = SelectionState(recent_ids=set(recent_ids or ()))

    def select(
        self,
        bucket: str,
        skill_names: Sequence[str],
        count: int,
        target_difficulties: Sequence[int],
    ) -> List[Question]:
        return select_for_category(
            self.items,
            skill_names,
            count,
            target_difficulties,
            self.state.recent_ids,
            self.state.coverage,
            self.rng,
            bucket=bucket,
            scores=self.state.scores,
        )

    def backfill(self, selected: Sequence[Question], size: int) -> List[Question]:
        """Random unscored fill from active questions not yet picked."""

        need = size - len(selected)
        if need <= 0:
            return []
        taken = {q.id for q in selected}
        remaining = [q for q in self.items if q.is_active and q.id not in taken]
        self.rng.shuffle(remaining)
        out: List[Question] = []
        for q in remaining:
            if len(out) >= need:
                break
            if q.id in taken:
                continue
            taken.add(q.id)
            out.append(q)
        return out

    def order_by_difficulty(self, selected: Sequence[Question]) -> List[Question]:
        """Ascending difficulty tiers, shuffled within each tier."""

        tiers: Dict[int, List[Question]] = {}
        for q in selected:
            tiers.setdefault(q.difficulty, []).append(q)
        ordered: List[Question] = []
        for diff in sorted(tiers):
            group = tiers[diff]
            self.rng.shuffle(group)
            ordered.extend(group)
        return ordered
