from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from app.models.types import MemoryEntry

IDENTITY_ANSWER = (
    "I am ExploreNet, a smart search assistant that connects related searches "
    "to help you understand topics better."
)

# Exact matches after lowercasing and trimming
IDENTITY_PHRASES = {
    "who are you",
    "who made you",
    "who created you",
    "who built you",
    "what are you",
    "hi",
}
# Substring matches
IDENTITY_FRAGMENTS = ("your creator", "who developed you")

VAGUE_WORDS = {"explain", "more", "why", "how", "details", "elaborate"}

MIN_MEMORY_CONFIDENCE = 0.6
MAX_MEMORY_ENTRIES = 3
LONG_ANSWER_CHARS = 120


class QueryKind(str, Enum):
    IDENTITY = "identity"
    VAGUE = "vague"
    NORMAL = "normal"


def _norm(query: str) -> str:
    return query.strip().lower()


def is_identity_question(query: str) -> bool:
    q = _norm(query)
    if q in IDENTITY_PHRASES:
        return True
    return any(frag in q for frag in IDENTITY_FRAGMENTS)


def is_vague(query: str) -> bool:
    return _norm(query) in VAGUE_WORDS


def classify_query(query: str) -> QueryKind:
    """Identity wins over vague; everything else is normal."""
    if is_identity_question(query):
        return QueryKind.IDENTITY
    if is_vague(query):
        return QueryKind.VAGUE
    return QueryKind.NORMAL


def parse_memory(raw: Any) -> List[MemoryEntry]:
    """Coerce caller-supplied memory into entries, skipping malformed items."""
    if not isinstance(raw, list):
        return []
    out: List[MemoryEntry] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        topic = item.get("topic")
        if not isinstance(topic, str) or not topic.strip():
            continue
        conf = item.get("confidence")
        if isinstance(conf, bool) or not isinstance(conf, (int, float)):
            conf = 0.0
        out.append(MemoryEntry(topic=topic, confidence=float(conf)))
    return out


def filter_memory(memory: List[MemoryEntry]) -> List[MemoryEntry]:
    kept = [m for m in memory if m.confidence >= MIN_MEMORY_CONFIDENCE]
    return kept[-MAX_MEMORY_ENTRIES:]


def build_effective_query(query: str, memory: List[MemoryEntry]) -> str:
    # The first question of a session is never rewritten
    if not memory:
        return query
    if is_vague(query):
        return f"Explain {memory[-1].topic} in detail"
    return query


def score_confidence(answer: Optional[str]) -> float:
    if not answer:
        return 0.0
    lower = answer.lower()
    score = 0.0
    if len(answer) > LONG_ANSWER_CHARS:
        score += 0.4
    if "." in answer:
        score += 0.2
    if "no answer" not in lower:
        score += 0.2
    if "cannot" not in lower:
        score += 0.2
    return min(round(score, 2), 1.0)
