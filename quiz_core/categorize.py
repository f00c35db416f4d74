# quiz_core/categorize.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .config import DEFAULT_SKILL_SCORE, STRONG_THRESHOLD, WEAK_THRESHOLD
from .question_bank import SKILLS
from .types import SkillBuckets, SkillMasteryRecord, SkillScore

log = logging.getLogger(__name__)

_EXPECTED_SKILL_COUNT = 3


def skill_score(record: Optional[SkillMasteryRecord]) -> float:
    """Best of recent accuracy and current score; neutral default for new learners."""

    if record is None:
        return DEFAULT_SKILL_SCORE
    return max(float(record.recent_accuracy or 0), float(record.current_score or 0))


def _bucket_for(score: float) -> str:
    if score < WEAK_THRESHOLD:
        return "weak"
    if score < STRONG_THRESHOLD:
        return "medium"
    return "strong"


def _lowest(entries: List[SkillScore]) -> SkillScore:
    entries.sort(key=lambda s: s.score)
    return entries.pop(0)


def _highest(entries: List[SkillScore]) -> SkillScore:
    entries.sort(key=lambda s: -s.score)
    return entries.pop(0)


@dataclass(frozen=True)
class RebalanceRule:
    name: str
    applies: Callable[[SkillBuckets], bool]
    apply: Callable[[SkillBuckets], None]


def _all_strong(b: SkillBuckets) -> None:
    b.medium.append(_lowest(b.strong))


def _all_weak(b: SkillBuckets) -> None:
    b.medium.append(_highest(b.weak))


def _all_medium(b: SkillBuckets) -> None:
    b.weak.append(_lowest(b.medium))
    b.strong.append(_highest(b.medium))


def _fill_weak(b: SkillBuckets) -> None:
    if len(b.medium) > 1:
        b.weak.append(_lowest(b.medium))
    elif len(b.strong) > 1:
        b.weak.append(_lowest(b.strong))


def _fill_strong(b: SkillBuckets) -> None:
    if len(b.medium) > 1:
        b.strong.append(_highest(b.medium))
    elif len(b.weak) > 1:
        b.strong.append(_highest(b.weak))


def _fill_medium(b: SkillBuckets) -> None:
    if len(b.weak) > 1:
        b.medium.append(_highest(b.weak))
    elif len(b.strong) > 1:
        b.medium.append(_lowest(b.strong))


REBALANCE_RULES: Tuple[RebalanceRule, ...] = (
    RebalanceRule(
        "all_strong",
        lambda b: bool(b.strong) and not b.weak and not b.medium,
        _all_strong,
    ),
    RebalanceRule("all_weak", lambda b: len(b.weak) == 3, _all_weak),
    RebalanceRule("all_medium", lambda b: len(b.medium) == 3, _all_medium),
    RebalanceRule("fill_weak", lambda b: not b.weak, _fill_weak),
    RebalanceRule("fill_strong", lambda b: not b.strong, _fill_strong),
    RebalanceRule("fill_medium", lambda b: not b.medium, _fill_medium),
)


def rebalance(buckets: SkillBuckets, rules: Iterable[RebalanceRule] = REBALANCE_RULES) -> List[str]:
    """Apply rules in order; returns the names of the rules that fired."""

    fired: List[str] = []
    for rule in rules:
        if rule.applies(buckets):
            rule.apply(buckets)
            fired.append(rule.name)
    return fired


def categorize_skills(
    mastery: Iterable[SkillMasteryRecord],
    skills: Sequence[str] = SKILLS,
) -> SkillBuckets:
    """Split tracked skills into weak/medium/strong buckets.

    With exactly three tracked skills every bucket ends up non-empty. Other
    counts are accepted but a bucket may stay empty; the rules were only
    designed for three.
    """

    if len(skills) != _EXPECTED_SKILL_COUNT:
        log.warning(
            "categorize_skills expects %d tracked skills, got %d; buckets may be empty",
            _EXPECTED_SKILL_COUNT,
            len(skills),
        )

    by_skill: Dict[str, SkillMasteryRecord] = {}
    for rec in mastery:
        by_skill.setdefault(rec.skill, rec)

    buckets = SkillBuckets()
    for skill in skills:
        entry = SkillScore(skill=skill, score=skill_score(by_skill.get(skill)))
        getattr(buckets, _bucket_for(entry.score)).append(entry)

    fired = rebalance(buckets)
    if fired:
        log.debug("rebalanced skill buckets via %s", ", ".join(fired))
    return buckets
