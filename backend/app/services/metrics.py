from __future__ import annotations

import threading
import time
from typing import Any, Dict, Optional, List

# Process-wide upstream call stats: provider -> {req, status: {code: n}, latency_ms: [ms]}
_lock = threading.Lock()
_providers: Dict[str, Dict[str, Any]] = {}
_MAX_SAMPLES = 500


def now() -> float:
    return time.perf_counter()


def elapsed_ms(t0: float) -> int:
    return int((time.perf_counter() - t0) * 1000)


def _nearest_rank(ordered: List[int], p: float) -> int:
    idx = int(round(p / 100.0 * (len(ordered) - 1)))
    return ordered[idx]


def _latency_summary(samples: List[int]) -> Dict[str, Optional[int]]:
    if not samples:
        return dict.fromkeys(("p50", "p95", "p99", "max"))
    ordered = sorted(samples)
    summary: Dict[str, Optional[int]] = {f"p{p}": _nearest_rank(ordered, p) for p in (50, 95, 99)}
    summary["max"] = ordered[-1]
    return summary


def record_http(provider: str, status: int, latency_ms: int) -> None:
    """Record one upstream call. Use status 0 for transport failures."""
    with _lock:
        prov = _providers.setdefault(provider, {"req": 0, "status": {}, "latency_ms": []})
        prov["req"] += 1
        code_key = str(int(status))
        prov["status"][code_key] = int(prov["status"].get(code_key, 0)) + 1
        prov["latency_ms"].append(int(latency_ms))
        # keep a bounded window of samples
        if len(prov["latency_ms"]) > _MAX_SAMPLES:
            del prov["latency_ms"][: len(prov["latency_ms"]) - _MAX_SAMPLES]


def snapshot() -> Dict[str, Any]:
    with _lock:
        out: Dict[str, Any] = {}
        for name, v in _providers.items():
            out[name] = {
                "req": int(v.get("req", 0)),
                "status": dict(v.get("status", {})),
                "latency": _latency_summary(list(v.get("latency_ms", []))),
            }
        return out


def reset() -> None:
    with _lock:
        _providers.clear()
