# Ensure `import app` works whether tests are run from repo root or backend/
import os
import sys

import pytest

BACKEND_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from app.memory import store  # noqa: E402
from app.services import metrics  # noqa: E402


class FakeClock:
    def __init__(self, start: float = 1_000_000.0):
        self.t = start

    def __call__(self) -> float:
        return self.t

    def advance(self, seconds: float) -> None:
        self.t += seconds


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    # Every test starts with empty counters, no API key and default caps
    for var in ("TAVILY_API_KEY", "MAX_AI_PER_DAY", "MAX_WEB_PER_DAY", "TAVILY_API_URL"):
        monkeypatch.delenv(var, raising=False)
    store.usage.reset()
    metrics.reset()
    yield
    store.usage.reset()


@pytest.fixture
def fake_clock():
    return FakeClock()
