from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from app.memory import store
from app.services.providers import tavily
from app.services.providers.tavily import SearchProviderError
from app.services.query_gate import (
    IDENTITY_ANSWER,
    QueryKind,
    build_effective_query,
    classify_query,
    filter_memory,
    parse_memory,
    score_confidence,
)

logger = logging.getLogger(__name__)

INVALID_QUERY = "Invalid query."
INVALID_MODE = "Invalid mode."
NO_ANSWER = "No answer found."
LIMIT_MESSAGES = {
    "ai": "Daily AI search limit reached. Please try again tomorrow.",
    "web": "Daily web search limit reached. Please try again tomorrow.",
}
ERROR_MESSAGES = {
    "ai": "Network error while searching. Please try again.",
    "web": "Unable to fetch results. Please try again.",
}
MAX_RESULTS = {"ai": 5, "web": 8}
MOCK_CONFIDENCE = 0.3


def _api_key() -> str:
    return os.getenv("TAVILY_API_KEY", "").strip()


def _mock_answer(query: str) -> Dict[str, Any]:
    return {
        "answer": f"[Mock answer] No search API key configured. You asked: {query}",
        "confidence": MOCK_CONFIDENCE,
        "results": [],
    }


def _fail(mode: str, message: str) -> Dict[str, Any]:
    # Web responses never carry a confidence
    if mode == "ai":
        return {"answer": message, "confidence": 0}
    return {"answer": message}


async def run_search(query: Any, mode: Any, memory: Any, origin_id: str) -> Dict[str, Any]:
    """Answer one search request. Domain failures come back as answers, never raise."""
    if not isinstance(query, str) or not query.strip():
        return {"answer": INVALID_QUERY, "confidence": 0}

    kind = classify_query(query)
    logger.info("search: origin=%s mode=%r kind=%s q=%r", origin_id, mode, kind.value, query[:80])

    # Identity never hits upstream or the quota
    if kind is QueryKind.IDENTITY:
        return {"answer": IDENTITY_ANSWER, "confidence": 1.0}

    if mode not in ("ai", "web"):
        return {"answer": INVALID_MODE, "confidence": 0}

    if not store.usage.check_and_consume(origin_id, mode):
        logger.warning("search: %s limit reached for origin=%s", mode, origin_id)
        return _fail(mode, LIMIT_MESSAGES[mode])

    final_query = query
    if mode == "ai":
        context = filter_memory(parse_memory(memory))
        final_query = build_effective_query(query, context)
        if final_query != query:
            logger.info("search: rewrote vague query %r -> %r", query, final_query)

    api_key = _api_key()
    if not api_key:
        logger.info("search: TAVILY_API_KEY not set; returning mock answer")
        return _mock_answer(final_query)

    try:
        data = await tavily.search(final_query, api_key=api_key, max_results=MAX_RESULTS[mode])
    except SearchProviderError as e:
        logger.warning("search: upstream failed for origin=%s mode=%s: %s", origin_id, mode, e, exc_info=True)
        return _fail(mode, ERROR_MESSAGES[mode])

    raw_answer: Optional[str] = data.get("answer")
    out: Dict[str, Any] = {"answer": raw_answer or NO_ANSWER, "results": data.get("results") or []}
    if mode == "ai":
        # An empty upstream answer scores 0, not the placeholder text
        out["confidence"] = score_confidence(raw_answer)
    return out
