"""Helpers to export per-question selection traces in JSON/CSV formats."""
from __future__ import annotations

from typing import Iterable, List, Dict, Any
import csv
import io

_FIELDS: tuple[str, ...] = (
    "position",
    "question_id",
    "bucket",
    "skill",
    "sub_skill",
    "difficulty",
    "score",
    "recent",
)


def _normalize_event(event: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key in _FIELDS:
        val = event.get(key)
        if key in {"position", "difficulty"}:
            try:
                out[key] = int(val)
            except (TypeError, ValueError):
                out[key] = 0
        elif key == "score":
            # back-filled questions carry no score
            try:
                out[key] = None if val is None else float(val)
            except (TypeError, ValueError):
                out[key] = None
        elif key == "recent":
            out[key] = bool(val)
        else:
            out[key] = "" if val is None else str(val)
    return out


def to_json(events: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """Return a JSON-safe payload for audit export."""

    normalized: List[Dict[str, Any]] = [_normalize_event(evt or {}) for evt in events]
    return {"events": normalized}


def to_csv(events: Iterable[Dict[str, Any]]) -> str:
    """Render audit events as CSV with a fixed header."""

    normalized = [_normalize_event(evt or {}) for evt in events]
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=_FIELDS)
    writer.writeheader()
    for row in normalized:
        if row["score"] is None:
            row = dict(row, score="")
        writer.writerow(row)
    return buf.getvalue()


__all__ = ["to_json", "to_csv"]
