from fastapi import APIRouter
import os

from app.services import metrics

router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/health/upstream")
def health_upstream():
    key_present = bool(os.getenv("TAVILY_API_KEY", "").strip())
    return {
        "search": "live" if key_present else "mock",
        "key_present": key_present,
        "providers": metrics.snapshot(),
    }
