# tools/preview_quiz.py
from __future__ import annotations
import argparse, json, sys
from typing import Any, List
from quiz_core.config import load_config, make_rng
from quiz_core.engine import build_quiz, focus_areas
from quiz_core.question_bank import load_bank, mastery_from_record, session_from_record
from quiz_core.validators import InvalidInputError

def _read_json(path: str | None) -> List[Any]:
    if not path: return []
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return data if isinstance(data, list) else [data]

def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Preview the adaptive quiz for a mastery/session snapshot.")
    ap.add_argument("--player", default="preview")
    ap.add_argument("--bank", help="question bank JSON (defaults to the bundled bank)")
    ap.add_argument("--mastery", help="JSON list of mastery records")
    ap.add_argument("--sessions", help="JSON list of completed sessions, newest first")
    ap.add_argument("--seed", type=int)
    ap.add_argument("--json", action="store_true", help="print the audit trace as JSON")
    args = ap.parse_args(argv)

    cfg = load_config()
    if args.seed is not None: cfg["SEED"] = args.seed
    try:
        bank = load_bank(args.bank or cfg.get("QUIZ_BANK_PATH"))
        mastery = [mastery_from_record(r) for r in _read_json(args.mastery)]
        sessions = [session_from_record(r) for r in _read_json(args.sessions)]
        plan = build_quiz(args.player, bank, mastery, sessions, make_rng(cfg))
    except InvalidInputError as e:
        print(f"invalid input: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(plan.audit_events, indent=2))
        return 0

    print(f"Quiz for {args.player}: {len(plan.questions)} question(s){' (short)' if plan.short else ''}")
    for area in focus_areas(plan.buckets):
        print(f"  {area.label:<12} {area.skill:<10} {area.score:3d}  [{area.priority}]")
    print()
    for evt in plan.audit_events:
        score = "  fill" if evt["score"] is None else f"{evt['score']:6.1f}"
        flag = " *recent" if evt["recent"] else ""
        print(f"{evt['position']:2d}. d{evt['difficulty']} {evt['bucket']:<8} {score}  {evt['question_id']}  ({evt['sub_skill']}){flag}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
