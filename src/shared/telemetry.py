import logging
import sys
import time
import uuid
from collections.abc import Callable
from contextvars import ContextVar
from functools import wraps
from typing import Any, ParamSpec, TypeVar, cast

# --- Prometheus Imports ---
from prometheus_client import REGISTRY, Counter, Histogram

# --- Context for Correlation IDs ---
correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="system")

# --- Prometheus Metric Definitions ---
DURATION_METRIC = "restaurants_method_duration_seconds"
SNAPSHOT_METRIC = "restaurants_snapshots"
DELETE_METRIC = "restaurants_deletes"

METHOD_DURATION: Histogram
SNAPSHOTS_TOTAL: Counter
DELETES_TOTAL: Counter


def _registered(name: str) -> Any:
    # Streamlit re-imports modules on rerun; reuse the collector already
    # in the default registry instead of failing on a duplicate name.
    return REGISTRY._names_to_collectors[name]


try:
    METHOD_DURATION = Histogram(
        DURATION_METRIC, "Time spent in method", ["component", "method"]
    )
except ValueError:
    METHOD_DURATION = cast(Histogram, _registered(DURATION_METRIC))

try:
    SNAPSHOTS_TOTAL = Counter(
        SNAPSHOT_METRIC, "Collection snapshots handled", ["outcome"]
    )
except ValueError:
    SNAPSHOTS_TOTAL = cast(Counter, _registered(SNAPSHOT_METRIC))

try:
    DELETES_TOTAL = Counter(DELETE_METRIC, "Restaurant deletions", ["outcome"])
except ValueError:
    DELETES_TOTAL = cast(Counter, _registered(DELETE_METRIC))

# --- Type Definitions for Decorator ---
P = ParamSpec("P")
R = TypeVar("R")


def measure_time(metric_name: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator for timing methods + logging.
    Expects to decorate instance methods; a `telemetry` attribute on the
    instance receives the timing log line.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            start = time.perf_counter()
            self_obj: Any = args[0] if args else None

            component = self_obj.__class__.__name__ if self_obj else "Unknown"
            method = func.__name__
            telemetry = getattr(self_obj, "telemetry", None)

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration = time.perf_counter() - start
                METHOD_DURATION.labels(component=component, method=method).observe(
                    duration
                )
                if telemetry:
                    telemetry.log_error(
                        f"💥 Failed: {metric_name}",
                        e,
                        duration_ms=round(duration * 1000, 2),
                    )
                raise

            duration = time.perf_counter() - start
            METHOD_DURATION.labels(component=component, method=method).observe(
                duration
            )
            if telemetry:
                telemetry.log_info(
                    f"⏱️ {metric_name}", duration_ms=round(duration * 1000, 2)
                )
            return result

        return wrapper

    return decorator


class Telemetry:
    """
    Facade for Logs, Metrics, and Tracing.
    """

    def __init__(self, component_name: str) -> None:
        self.component = component_name
        self.logger: logging.Logger
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Initializes the logger. Safe to call multiple times."""
        self.logger = logging.getLogger(self.component)

        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            formatter = logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def __getstate__(self) -> dict[str, Any]:
        """Pickling: Save everything EXCEPT the logger."""
        state = self.__dict__.copy()
        if "logger" in state:
            del state["logger"]
        return state

    def __setstate__(self, state: dict[str, Any]) -> None:
        """Unpickling: Restore state and re-create logger."""
        self.__dict__.update(state)
        self._setup_logger()

    @staticmethod
    def start_trace() -> str:
        c_id = str(uuid.uuid4())[:8]
        correlation_id_ctx.set(c_id)
        return c_id

    @staticmethod
    def get_trace_id() -> str:
        return correlation_id_ctx.get()

    def log_info(self, event: str, **kwargs: Any) -> None:
        self.logger.info(f"[{self.get_trace_id()}] {event} | {kwargs}")

    def log_warning(self, event: str, error: Exception | None = None, **kwargs: Any) -> None:
        detail = f" | Error: {error}" if error else ""
        self.logger.warning(f"[{self.get_trace_id()}] ⚠️ {event}{detail} | {kwargs}")

    def log_error(self, event: str, error: Exception, **kwargs: Any) -> None:
        trace_id = self.get_trace_id()
        msg = f"[{trace_id}] ❌ {event} | Error: {str(error)} | {kwargs}"
        self.logger.error(msg, exc_info=error)

    # --- Domain Counters ---
    @staticmethod
    def count_snapshot(outcome: str) -> None:
        SNAPSHOTS_TOTAL.labels(outcome=outcome).inc()

    @staticmethod
    def count_delete(outcome: str) -> None:
        DELETES_TOTAL.labels(outcome=outcome).inc()
