from __future__ import annotations

from threading import Lock
from typing import Any

REQUEST_COUNTER = "theoneapi.request"
FAILURE_COUNTER = "theoneapi.failure"
LATENCY_TIMER = "theoneapi.latency_ms"

_ALLOWED_LABELS = {"resource", "status", "reason"}
_lock = Lock()
# Keyed by the rendered series name, e.g. "theoneapi.request{resource=book,status=ok}".
_counters: dict[str, int] = {}
_latencies: dict[str, list[float]] = {}


def series_name(name: str, labels: dict[str, Any] | None = None) -> str:
    pairs = sorted(
        f"{key}={value}" for key, value in (labels or {}).items() if key in _ALLOWED_LABELS and value is not None
    )
    return f"{name}{{{','.join(pairs)}}}" if pairs else name


def increment(name: str, value: int = 1, labels: dict[str, Any] | None = None) -> None:
    series = series_name(name, labels)
    with _lock:
        _counters[series] = _counters.get(series, 0) + value


def observe_ms(name: str, ms: float, labels: dict[str, Any] | None = None) -> None:
    series = series_name(name, labels)
    with _lock:
        _latencies.setdefault(series, []).append(ms)


def record_request(resource: str, latency_ms: float, failure: str | None = None) -> None:
    """Count one request against ``resource``; ``failure`` is the reason when it did not succeed."""
    increment(REQUEST_COUNTER, labels={"resource": resource, "status": "ok" if failure is None else "error"})
    observe_ms(LATENCY_TIMER, latency_ms, labels={"resource": resource})
    if failure is not None:
        increment(FAILURE_COUNTER, labels={"resource": resource, "reason": failure})


def _summarize(samples: list[float]) -> dict[str, float]:
    total = sum(samples)
    return {
        "count": len(samples),
        "sum": total,
        "min": min(samples),
        "max": max(samples),
        "avg": total / len(samples),
    }


def snapshot() -> dict[str, Any]:
    with _lock:
        return {
            "counters": dict(_counters),
            "timers_ms": {series: _summarize(samples) for series, samples in _latencies.items() if samples},
        }


def reset() -> None:
    with _lock:
        _counters.clear()
        _latencies.clear()
