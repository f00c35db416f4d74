from __future__ import annotations

import json

from quiz_core.question_bank import SKILLS
from tools import preview_quiz, validate_bank


def test_validate_bank_passes_on_bundled_bank(capsys):
    assert validate_bank.main([]) == 0
    assert "Meets targets" in capsys.readouterr().out


def test_preview_prints_audit_trace_as_json(tmp_path, capsys):
    mastery = tmp_path / "mastery.json"
    mastery.write_text(
        json.dumps([{"skill": SKILLS[0], "current_score": 30}, {"skill": SKILLS[2], "recent_accuracy": 95}]),
        encoding="utf-8",
    )
    sessions = tmp_path / "sessions.json"
    sessions.write_text(json.dumps([{"answers": [{"questionId": "dec-1-01"}]}]), encoding="utf-8")

    code = preview_quiz.main(["--seed", "3", "--json", "--mastery", str(mastery), "--sessions", str(sessions)])
    events = json.loads(capsys.readouterr().out)

    assert code == 0
    assert len(events) == 15
    assert "dec-1-01" not in {e["question_id"] for e in events}


def test_preview_reports_invalid_input(tmp_path, capsys):
    mastery = tmp_path / "mastery.json"
    mastery.write_text(json.dumps({"skill": SKILLS[0], "current_score": 300}), encoding="utf-8")

    assert preview_quiz.main(["--mastery", str(mastery)]) == 1
    assert "invalid input" in capsys.readouterr().err
