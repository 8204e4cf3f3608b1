from __future__ import annotations

import logging
import os
import threading
import time
from typing import Callable, Dict

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 24 * 60 * 60
MODES = ("ai", "web")


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except Exception:
        return default


def max_ai_per_day() -> int:
    return _int_env("MAX_AI_PER_DAY", 20)


def max_web_per_day() -> int:
    return _int_env("MAX_WEB_PER_DAY", 100)


def limit_for(mode: str) -> int:
    return max_ai_per_day() if mode == "ai" else max_web_per_day()


class UsageLedger:
    """Per-origin daily counters for AI and web searches.

    All origins share one window: once 24h have passed since the last reset,
    every counter goes back to zero on the next check.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._lock = threading.Lock()
        self._counters: Dict[str, Dict[str, int]] = {}
        self._last_reset = clock()

    def _maybe_reset(self) -> None:
        now = self._clock()
        if now - self._last_reset >= WINDOW_SECONDS:
            logger.info("usage window expired; clearing %d origin counters", len(self._counters))
            self._counters.clear()
            self._last_reset = now

    def check_and_consume(self, origin_id: str, mode: str) -> bool:
        """Admit and count one request, or return False if the mode's cap is hit."""
        if mode not in MODES:
            raise ValueError(f"unknown mode: {mode!r}")
        with self._lock:
            self._maybe_reset()
            counter = self._counters.setdefault(origin_id, {"ai": 0, "web": 0})
            curr = counter[mode]
            if curr >= limit_for(mode):
                return False
            counter[mode] = curr + 1
            return True

    def get(self, origin_id: str) -> Dict[str, int]:
        with self._lock:
            counter = self._counters.get(origin_id) or {"ai": 0, "web": 0}
            return dict(counter)

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
            self._last_reset = self._clock()

    def snapshot(self) -> Dict[str, Dict[str, int]]:
        with self._lock:
            return {k: dict(v) for k, v in self._counters.items()}
