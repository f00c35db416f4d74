from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Optional, Literal
Priority = Literal["high","medium","low"]
BucketName = Literal["weak","medium","strong"]
@dataclass
class Question:
    id: str; skill: str; sub_skill: str; difficulty: int
    is_active: bool = True
    text: str = ""
    options: Optional[List[str]] = None
    correct_index: Optional[int] = None
    explanation: Optional[str] = None
@dataclass
class SkillMasteryRecord:
    skill: str
    current_score: Optional[float] = None
    recent_accuracy: Optional[float] = None
    needs_review: bool = False
    player_id: Optional[str] = None
@dataclass
class SessionAnswer:
    question_id: Optional[str]; skill: str = ""; sub_skill: str = ""
    is_correct: bool = False
    timestamp: Optional[str] = None
    difficulty: Optional[int] = None
    selected_index: Optional[int] = None
@dataclass
class Session:
    player_id: Optional[str] = None
    answers: List[SessionAnswer] = field(default_factory=list)
    completed_at: Optional[str] = None
@dataclass
class SkillScore:
    skill: str; score: float
@dataclass
class SkillBuckets:
    weak: List[SkillScore] = field(default_factory=list)
    medium: List[SkillScore] = field(default_factory=list)
    strong: List[SkillScore] = field(default_factory=list)

    def names(self, bucket: BucketName) -> List[str]:
        return [s.skill for s in getattr(self, bucket)]
@dataclass
class FocusArea:
    skill: str; label: str; score: int; priority: Priority
@dataclass
class MasteryUpdate:
    skill: str; current_score: float; needs_review: bool
@dataclass
class QuizSummary:
    correct: int
    total: int
    percentage: float
    grade: str
    breakdown: Dict[str, Dict[str, int]] = field(default_factory=dict)
    mastery_updates: List[MasteryUpdate] = field(default_factory=list)
@dataclass
class QuizPlan:
    player_id: Optional[str]
    questions: List[Question]
    buckets: SkillBuckets
    recent_ids: set = field(default_factory=set)
    audit_events: List[Dict[str, object]] = field(default_factory=list)
    short: bool = False

    @property
    def question_ids(self) -> List[str]:
        return [q.id for q in self.questions]
