import json

from fastapi import APIRouter, HTTPException, Request

from app.models.types import SearchRequest, SearchResponse, NewChatResponse
from app.services.search import run_search

router = APIRouter()


def origin_id(request: Request) -> str:
    """Quota key: first X-Forwarded-For hop, else the socket peer."""
    fwd = request.headers.get("x-forwarded-for", "")
    first = fwd.split(",")[0].strip() if fwd else ""
    if first:
        return first
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


async def read_search_request(request: Request) -> SearchRequest:
    """Parse the body by hand: an empty or non-object body is a request with no query."""
    raw = await request.body()
    if not raw.strip():
        return SearchRequest()
    try:
        body = json.loads(raw)
    except ValueError:
        raise HTTPException(status_code=422, detail="Malformed JSON body")
    if not isinstance(body, dict):
        return SearchRequest()
    return SearchRequest(query=body.get("query"), mode=body.get("mode"), memory=body.get("memory"))


@router.post("/search", response_model=SearchResponse, response_model_exclude_none=True)
async def search(request: Request):
    req = await read_search_request(request)
    return await run_search(req.query, req.mode, req.memory, origin_id(request))


@router.post("/new-chat", response_model=NewChatResponse)
async def new_chat():
    # Conversation memory lives in the client; nothing to clear here
    return {"ok": True}
