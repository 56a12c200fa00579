import logging
import time
from collections import Counter
from contextlib import contextmanager
from typing import Any, Dict

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

log = logging.getLogger("aura-studio")

# In-process counters served by /metrics
_requests: Counter = Counter()
_errors: Counter = Counter()
_upstream: Dict[str, Dict[str, Any]] = {}


def record_request(endpoint: str) -> None:
    _requests[endpoint] += 1


def record_error(status_code: int) -> None:
    _errors[str(status_code)] += 1


def get_metrics_snapshot() -> Dict[str, Any]:
    return {
        "requests": dict(_requests),
        "errors": dict(_errors),
        "upstream": {name: dict(stats) for name, stats in _upstream.items()},
    }


def reset_metrics() -> None:
    _requests.clear()
    _errors.clear()
    _upstream.clear()


@contextmanager
def measure(provider: str):
    """
    Time one provider call.

    Keeps per provider the number of calls, how many raised, and the latency
    of the last one. The exception itself is re-raised untouched.
    """
    stats = _upstream.setdefault(provider, {"calls": 0, "failures": 0, "last_ms": None})
    stats["calls"] += 1
    start = time.time()
    try:
        yield
    except Exception:
        stats["failures"] += 1
        raise
    finally:
        elapsed_ms = (time.time() - start) * 1000
        stats["last_ms"] = round(elapsed_ms, 1)
        log.info(f"⏱️ {provider} took {elapsed_ms:.1f}ms")
