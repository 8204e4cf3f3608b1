from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

import httpx

from app.services.metrics import now, elapsed_ms, record_http

logger = logging.getLogger(__name__)

TAVILY_URL = "https://api.tavily.com/search"


class SearchProviderError(RuntimeError):
    """Upstream search failed (transport, status or payload)."""


def _api_url() -> str:
    return os.getenv("TAVILY_API_URL", TAVILY_URL).strip() or TAVILY_URL


def _timeout() -> float:
    try:
        return float(os.getenv("SEARCH_TIMEOUT_SECONDS", "20"))
    except Exception:
        return 20.0


def build_payload(api_key: str, query: str, max_results: int) -> Dict[str, Any]:
    return {
        "api_key": api_key,
        "query": query,
        "search_depth": "advanced",
        "include_answer": True,
        "max_results": max_results,
    }


async def search(query: str, api_key: str, max_results: int = 5) -> Dict[str, Any]:
    """Run one Tavily search and return {"answer": str|None, "results": list}.

    Docs:
      - https://docs.tavily.com/documentation/api-reference/endpoint/search
    Raises SearchProviderError for anything other than a 2xx JSON object.
    """
    payload = build_payload(api_key, query, max_results)
    async with httpx.AsyncClient(timeout=_timeout(), follow_redirects=True) as client:
        t0 = now()
        try:
            resp = await client.post(_api_url(), json=payload)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            record_http("tavily", 0, elapsed_ms(t0))
            raise SearchProviderError(f"Tavily request failed: {exc}") from exc
        record_http("tavily", resp.status_code, elapsed_ms(t0))
        if resp.status_code >= 400:
            raise SearchProviderError(f"Tavily returned HTTP {resp.status_code}")
        try:
            data = resp.json()
        except ValueError as exc:
            raise SearchProviderError("Tavily returned a non-JSON body") from exc
    if not isinstance(data, dict):
        raise SearchProviderError("Tavily returned an unexpected payload")
    answer: Optional[str] = data.get("answer") if isinstance(data.get("answer"), str) else None
    results: List[Any] = data.get("results") if isinstance(data.get("results"), list) else []
    logger.info("tavily: q=%r max_results=%d results=%d has_answer=%s", query[:80], max_results, len(results), bool(answer))
    return {"answer": answer, "results": results}
