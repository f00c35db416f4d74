from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from . import config
from .question_bank import SKILLS, load_bank
from .types import Question

DIFFICULTY_BUCKETS: tuple[int, ...] = tuple(range(config.DIFFICULTY_MIN, config.DIFFICULTY_MAX + 1))


def _blank_skill() -> dict[str, object]:
    return {
        "difficulty": {lvl: 0 for lvl in DIFFICULTY_BUCKETS},
        "sub_skills": {},
        "inactive": 0,
    }


def audit_items(items: Iterable[Question]) -> dict[str, object]:
    coverage: dict[str, dict[str, object]] = {skill: _blank_skill() for skill in SKILLS}
    totals = {"active": 0, "inactive": 0, "untracked_skill": 0}

    for item in items:
        if item.skill not in SKILLS:
            totals["untracked_skill"] += 1
        skill_data = coverage.setdefault(item.skill, _blank_skill())

        if not item.is_active:
            skill_data["inactive"] += 1  # type: ignore[operator]
            totals["inactive"] += 1
            continue
        totals["active"] += 1

        bucket_map: dict[int, int] = skill_data["difficulty"]  # type: ignore[assignment]
        if item.difficulty not in bucket_map:
            bucket_map[item.difficulty] = 0
        bucket_map[item.difficulty] += 1

        subs: dict[str, int] = skill_data["sub_skills"]  # type: ignore[assignment]
        subs[item.sub_skill] = subs.get(item.sub_skill, 0) + 1

    warnings: list[str] = []
    for skill, data in coverage.items():
        diff_map: dict[int, int] = data["difficulty"]  # type: ignore[assignment]
        for lvl in DIFFICULTY_BUCKETS:
            if diff_map.get(lvl, 0) < config.BANK_MIN_PER_BUCKET:
                warnings.append(
                    f"{skill} difficulty {lvl} has {diff_map.get(lvl, 0)} (<{config.BANK_MIN_PER_BUCKET})"
                )
        if skill not in SKILLS:
            warnings.append(f"{skill} is not a tracked skill")

    if totals["active"] < config.QUIZ_SIZE:
        warnings.append(f"only {totals['active']} active questions (<{config.QUIZ_SIZE}); quizzes will be short")

    summary = {"coverage": coverage, "warnings": warnings, "totals": totals}
    return summary


def _format_row(label: str, buckets: Iterable[int], data: dict[int, int]) -> str:
    parts = [label]
    for lvl in buckets:
        parts.append(f"{lvl}:{data.get(lvl, 0):3d}")
    return "  ".join(parts)


def print_report(summary: dict[str, object]) -> None:
    coverage: dict[str, dict[str, object]] = summary["coverage"]  # type: ignore[assignment]
    print("=== Bank Coverage ===")
    for skill in sorted(coverage):
        data = coverage[skill]
        print(f"\nSkill: {skill}")
        print("  " + _format_row("diff", DIFFICULTY_BUCKETS, data["difficulty"]))  # type: ignore[arg-type]
        subs: dict[str, int] = data["sub_skills"]  # type: ignore[assignment]
        for name in sorted(subs):
            print(f"    {name}: {subs[name]}")
        inactive = data["inactive"]
        if inactive:
            print(f"    inactive: {inactive}")

    warnings: list[str] = summary["warnings"]  # type: ignore[assignment]
    if warnings:
        print("\nWarnings:")
        for msg in warnings:
            print(f" - {msg}")
    else:
        print("\nNo warnings.")

    totals = summary["totals"]
    print("\nTotals:", totals)


def write_summary(summary: dict[str, object], path: Path = Path("/tmp/bank_audit.json")) -> str:
    text = json.dumps(summary, indent=2, sort_keys=True)
    path.write_text(text + "\n", encoding="utf-8")
    print(text)
    return text


def main(_argv: list[str] | None = None) -> int:
    items = load_bank()
    summary = audit_items(items)
    print_report(summary)
    write_summary(summary)
    return 2 if summary["warnings"] else 0


if __name__ == "__main__":
    raise SystemExit(main())
