from __future__ import annotations
import os, json, pathlib, random


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


WEAK_THRESHOLD: float = 60.0
STRONG_THRESHOLD: float = 80.0
DEFAULT_SKILL_SCORE: float = 50.0

QUIZ_SIZE: int = 15
WEAK_ALLOCATION: int = 6
MEDIUM_ALLOCATION: int = 6
STRONG_ALLOCATION: int = 3

DIFFICULTY_TARGETS: dict[str, tuple[int, ...]] = {
    "weak": (1, 2),
    "medium": (2, 3),
    "strong": (3, 4, 5),
}
# weak selections feed medium's coverage, medium feeds strong's
CATEGORY_ORDER: tuple[tuple[str, int], ...] = (
    ("weak", WEAK_ALLOCATION),
    ("medium", MEDIUM_ALLOCATION),
    ("strong", STRONG_ALLOCATION),
)

DIFFICULTY_MIN: int = 1
DIFFICULTY_MAX: int = 5

RECENT_SESSION_WINDOW: int = 2

BASE_SCORE: float = 100.0
DIFFICULTY_MATCH_BONUS: float = 30.0
DIFFICULTY_DISTANCE_PENALTY: float = 15.0
RECENT_PENALTY: float = 200.0
NEW_SUB_SKILL_BONUS: float = 20.0
REPEAT_SUB_SKILL_PENALTY: float = 10.0
JITTER_MAX: float = 10.0

REVIEW_THRESHOLD: float = 70.0
GRADE_CUTOFFS: tuple[tuple[float, str], ...] = (
    (90.0, "A"),
    (80.0, "B"),
    (70.0, "C"),
    (60.0, "D"),
)

BANK_MIN_PER_BUCKET: int = 2

AUDIT_EXPORT_ENABLED: bool = True

DEBUG_TRACE: bool = False
DEBUG_SEED: int | None = None
TRACE_FIELDS: tuple[str, ...] = (
    "bucket",
    "question_id",
    "skill",
    "sub_skill",
    "difficulty",
    "score",
    "recent",
)
# // env overrides for staging/ops; allocations stay fixed so they sum to QUIZ_SIZE.
REVIEW_THRESHOLD = _env_float("REVIEW_THRESHOLD", REVIEW_THRESHOLD)
BANK_MIN_PER_BUCKET = _env_int("BANK_MIN_PER_BUCKET", BANK_MIN_PER_BUCKET)
DEBUG_TRACE = _env_bool("DEBUG_TRACE", False)
DEBUG_SEED = _env_int("DEBUG_SEED", None)
AUDIT_EXPORT_ENABLED = _env_bool("AUDIT_EXPORT_ENABLED", AUDIT_EXPORT_ENABLED)

def load_config() -> dict:
    cfg = {}
    p = pathlib.Path("config.json")
    if p.exists():
        try: cfg = json.loads(p.read_text(encoding="utf-8"))
        except (OSError, ValueError): cfg = {}
    e = os.environ
    if e.get("SEED"): cfg["SEED"] = int(e.get("SEED"))
    if e.get("QUIZ_BANK_PATH"): cfg["QUIZ_BANK_PATH"] = e.get("QUIZ_BANK_PATH")
    return cfg
def make_rng(cfg: dict | None = None) -> random.Random:
    s = (cfg or {}).get("SEED")
    if s is None:
        s = DEBUG_SEED
    if s is None:
        s = random.randint(0, 2**31 - 1)
    return random.Random(int(s))
