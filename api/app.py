from __future__ import annotations
from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field
from dataclasses import asdict
import os, typing as t

# ---- Engine imports ----
from quiz_core.engine import build_quiz, focus_areas, get_daily_focus_summary
from quiz_core.types import Question, Session, SessionAnswer, SkillMasteryRecord
from quiz_core.results import summarize_answers
from quiz_core.validators import InvalidInputError
from quiz_core.config import load_config, make_rng, AUDIT_EXPORT_ENABLED
from quiz_core.audit_export import to_json as audit_to_json, to_csv as audit_to_csv
from quiz_core import question_bank as qb
from quiz_core import audit_bank

app = FastAPI(title="Adaptive Quiz API")

@app.get("/")
def root():
    return {"status": "ok", "service": "adaptive-quiz-api"}

ALLOWED_ORIGINS = [
    o.strip() for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
    if o.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=False,  # keep False unless you use cookies
)

# ---- Schemas ----
class _Camel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

class QuestionIn(_Camel):
    id: str
    skill: str
    sub_skill: str = Field(alias="subSkill")
    difficulty: int
    is_active: bool = Field(True, alias="isActive")
    text: str = ""
    options: list[str] | None = None
    correct_index: int | None = Field(None, alias="correctIndex")
    explanation: str | None = None

class MasteryIn(_Camel):
    skill: str
    current_score: float | None = Field(None, alias="currentScore")
    recent_accuracy: float | None = Field(None, alias="recentAccuracy")
    needs_review: bool = Field(False, alias="needsReview")
    player_id: str | None = Field(None, alias="playerId")

class AnswerIn(_Camel):
    question_id: str | None = Field(None, alias="questionId")
    skill: str = ""
    sub_skill: str = Field("", alias="subSkill")
    is_correct: bool = Field(False, alias="isCorrect")
    timestamp: str | None = None
    difficulty: int | None = None
    selected_index: int | None = Field(None, alias="selectedIndex")

class SessionIn(_Camel):
    player_id: str | None = Field(None, alias="playerId")
    answers: list[AnswerIn] = []
    completed_at: str | None = Field(None, alias="completedAt")

class SelectReq(_Camel):
    player_id: str | None = Field(None, alias="playerId")
    questions: list[QuestionIn] | None = None
    mastery: list[MasteryIn] = []
    recent_sessions: list[SessionIn] = Field([], alias="recentSessions")
    seed: int | None = None

class FocusReq(_Camel):
    mastery: list[MasteryIn] = []

class SummaryReq(_Camel):
    answers: list[AnswerIn] = []

# ---- Helpers ----
def _bank(req: SelectReq) -> list[Question]:
    if req.questions is None:
        return qb.load_bank(load_config().get("QUIZ_BANK_PATH"))
    return [Question(**q.model_dump()) for q in req.questions]

def _sessions(items: list[SessionIn]) -> list[Session]:
    return [
        Session(
            player_id=s.player_id,
            answers=[SessionAnswer(**a.model_dump()) for a in s.answers],
            completed_at=s.completed_at,
        )
        for s in items
    ]

def _mastery(items: list[MasteryIn]) -> list[SkillMasteryRecord]:
    return [SkillMasteryRecord(**m.model_dump()) for m in items]

def _plan(req: SelectReq):
    cfg = load_config()
    if req.seed is not None:
        cfg["SEED"] = req.seed
    try:
        return build_quiz(
            req.player_id,
            _bank(req),
            _mastery(req.mastery),
            _sessions(req.recent_sessions),
            make_rng(cfg),
        )
    except InvalidInputError as e:
        raise HTTPException(422, str(e))

def _serialize_question(q: Question) -> dict[str, t.Any]:
    return asdict(q)

# ---- Health ----
@app.get("/health")
def health():
    try:
        size = len(qb.load_bank(load_config().get("QUIZ_BANK_PATH")))
    except (OSError, InvalidInputError) as e:
        return {"ok": False, "error": str(e)}
    return {"ok": True, "bank_size": size, "audit_export": AUDIT_EXPORT_ENABLED}

# ---- Quiz selection ----
@app.post("/quiz/select")
def select_quiz(req: SelectReq):
    plan = _plan(req)
    return {
        "player_id": plan.player_id,
        "questions": [_serialize_question(q) for q in plan.questions],
        "question_ids": plan.question_ids,
        "focus": [asdict(f) for f in focus_areas(plan.buckets)],
        "short": plan.short,
    }

@app.post("/quiz/select/audit.json")
def select_quiz_audit_json(req: SelectReq):
    if not AUDIT_EXPORT_ENABLED:
        raise HTTPException(404, "audit export disabled")
    plan = _plan(req)
    return {"player_id": plan.player_id, **audit_to_json(plan.audit_events)}

@app.post("/quiz/select/audit.csv")
def select_quiz_audit_csv(req: SelectReq):
    if not AUDIT_EXPORT_ENABLED:
        raise HTTPException(404, "audit export disabled")
    plan = _plan(req)
    body = audit_to_csv(plan.audit_events)
    filename = f"{plan.player_id or 'quiz'}_selection.csv"
    return Response(
        content=body,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename=\"{filename}\""},
    )

@app.post("/focus")
def focus(req: FocusReq):
    try:
        areas = get_daily_focus_summary(_mastery(req.mastery))
    except InvalidInputError as e:
        raise HTTPException(422, str(e))
    return {"focus": [asdict(a) for a in areas]}

@app.post("/sessions/summary")
def session_summary(req: SummaryReq):
    summary = summarize_answers([SessionAnswer(**a.model_dump()) for a in req.answers])
    return asdict(summary)

@app.get("/bank/audit")
def bank_audit():
    try:
        items = qb.load_bank(load_config().get("QUIZ_BANK_PATH"))
    except InvalidInputError as e:
        raise HTTPException(500, f"question bank is invalid: {e}")
    return audit_bank.audit_items(items)
