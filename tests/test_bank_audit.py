from __future__ import annotations

from pathlib import Path

import quiz_core.audit_bank as audit_bank
from quiz_core import config
from quiz_core.question_bank import SKILLS
from quiz_core.types import Question
from tests.conftest import build_synthetic_bank


def test_audit_flags_sparse_buckets(monkeypatch, tmp_path):
    monkeypatch.setattr(config, "BANK_MIN_PER_BUCKET", 2, raising=False)

    bank = build_synthetic_bank(skills=[SKILLS[0]], per_level=1)

    summary = audit_bank.audit_items(bank)
    assert summary["warnings"], "expected sparse coverage warnings"
    joined = "\n".join(summary["warnings"])
    assert "Decimal Operations difficulty 1 has 1" in joined
    assert "Fractions & Mixed Numbers difficulty 3 has 0" in joined
    assert "quizzes will be short" in joined

    outfile = tmp_path / "bank_audit.json"
    text = audit_bank.write_summary(summary, path=outfile)
    assert outfile.read_text(encoding="utf-8").strip() == text


def test_audit_counts_inactive_and_untracked(monkeypatch):
    monkeypatch.setattr(config, "BANK_MIN_PER_BUCKET", 0, raising=False)

    items = build_synthetic_bank()
    items[0].is_active = False
    items.append(Question(id="geo1", skill="Geometry", sub_skill="angles", difficulty=2))
    summary = audit_bank.audit_items(items)

    assert summary["totals"] == {"active": 45, "inactive": 1, "untracked_skill": 1}
    assert summary["coverage"][SKILLS[0]]["inactive"] == 1
    assert summary["coverage"][SKILLS[0]]["difficulty"][1] == 2
    assert summary["warnings"] == ["Geometry is not a tracked skill"]


def test_bundled_bank_passes_audit():
    summary = audit_bank.audit_items(audit_bank.load_bank())
    assert summary["warnings"] == []


def test_main_returns_warning_exit(monkeypatch, capsys):
    monkeypatch.setattr(config, "BANK_MIN_PER_BUCKET", 2, raising=False)

    bank = build_synthetic_bank(skills=[SKILLS[0]], per_level=1)
    monkeypatch.setattr(audit_bank, "load_bank", lambda: bank)

    exit_code = audit_bank.main([])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Decimal Operations" in captured.out
    assert Path("/tmp/bank_audit.json").exists()
