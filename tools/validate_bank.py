from __future__ import annotations
from collections import defaultdict
import os, sys
from quiz_core.question_bank import load_bank, SKILLS

# Configurable targets; defaults match the bundled bank
TARGETS = {
    "per_difficulty_min": int(os.getenv("TARGET_PER_DIFFICULTY_MIN", 2)),
    "sub_skills_min": int(os.getenv("TARGET_SUB_SKILLS_MIN", 3)),
}

def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    items = load_bank(args[0] if args else None)
    by_skill = defaultdict(list)
    for it in items:
        by_skill[it.skill].append(it)

    print(f"Targets per skill: ≥{TARGETS['per_difficulty_min']} active per difficulty, "
          f"≥{TARGETS['sub_skills_min']} sub-skills.\n")

    short = False
    for s in SKILLS:
        active = [it for it in by_skill[s] if it.is_active]
        subs = {it.sub_skill for it in active}
        print(f"{s}: active={len(active)} inactive={len(by_skill[s]) - len(active)} sub_skills={len(subs)}")
        need = {}
        for diff in range(1, 6):
            n = sum(1 for it in active if it.difficulty == diff)
            print(f"  diff {diff}: {n:2d}")
            if n < TARGETS["per_difficulty_min"]:
                need[diff] = TARGETS["per_difficulty_min"] - n
        need_subs = max(0, TARGETS["sub_skills_min"] - len(subs))

        if need or need_subs:
            short = True
            adds = ", ".join(f"diff {d}: +{n}" for d, n in need.items()) or "none"
            print(f"  → Add: {adds}; sub-skills +{need_subs}\n")
        else:
            print("  ✓ Meets targets\n")

    extra = sorted(set(by_skill) - set(SKILLS))
    if extra:
        print("Untracked skills in bank:", ", ".join(extra))
    return 2 if short else 0

if __name__ == "__main__":
    raise SystemExit(main())
