from typing import List, Optional, Any
from pydantic import BaseModel


class MemoryEntry(BaseModel):
    topic: str
    confidence: float = 0.0


class SearchRequest(BaseModel):
    # Any-typed: invalid values are answered by the search service
    query: Optional[Any] = None
    mode: Optional[Any] = None
    memory: Optional[Any] = None


class SearchResponse(BaseModel):
    answer: str
    confidence: Optional[float] = None
    results: Optional[List[Any]] = None


class NewChatResponse(BaseModel):
    ok: bool = True
