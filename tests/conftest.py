from __future__ import annotations

import random

import pytest

from quiz_core.question_bank import SKILLS
from quiz_core.types import Question, SkillMasteryRecord


def build_synthetic_bank(
    *,
    skills: list[str] | None = None,
    per_level: int = 3,
    levels: tuple[int, ...] = (1, 2, 3, 4, 5),
    sub_skills: int = 3,
) -> list[Question]:
    """Create a deterministic synthetic bank for tests and smoke runs."""

    items: list[Question] = []
    target_skills = skills or list(SKILLS)
    for skill in target_skills:
        prefix = skill.split(" ")[0].lower()
        for level in levels:
            for idx in range(per_level):
                items.append(
                    Question(
                        id=f"{prefix}_{level}_{idx}",
                        skill=skill,
                        sub_skill=f"{prefix}_sub_{idx % sub_skills}",
                        difficulty=level,
                        text=f"{skill} L{level} #{idx}",
                        options=["A", "B", "C", "D"],
                        correct_index=0,
                    )
                )
    return items


def mastery_for(scores: dict[str, float]) -> list[SkillMasteryRecord]:
    return [
        SkillMasteryRecord(skill=skill, current_score=score, player_id="p1")
        for skill, score in scores.items()
    ]


class FixedRandom(random.Random):
    """random() always returns `value`, which pins the scoring jitter."""

    def __init__(self, value: float = 0.0, seed: int = 0):
        super().__init__(seed)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def synthetic_bank() -> list[Question]:
    return build_synthetic_bank()


@pytest.fixture
def zero_rng() -> FixedRandom:
    return FixedRandom(0.0)
