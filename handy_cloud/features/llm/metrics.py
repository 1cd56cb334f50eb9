"""Metrics for provider requests."""

from collections import Counter
from threading import Lock


class LlmMetrics:
    """Collects metrics for chat, model-listing and transcription calls.

    Provides thread-safe counters for:
    - requests_total{operation}
    - failures_total{operation, error_kind}
    """

    _instance: "LlmMetrics | None" = None
    _lock = Lock()

    def __init__(self) -> None:
        """Initialize the metrics collector."""
        self._requests: Counter[str] = Counter()
        self._failures: Counter[tuple[str, str]] = Counter()
        self._lock = Lock()

    @classmethod
    def get_instance(cls) -> "LlmMetrics":
        """Get the singleton metrics instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance (for testing)."""
        with cls._lock:
            cls._instance = None

    def record_request(self, operation: str) -> None:
        """Record an attempted request.

        Args:
            operation: Operation name (e.g. 'chat_completion').
        """
        with self._lock:
            self._requests[operation] += 1

    def record_failure(self, operation: str, error_kind: str) -> None:
        """Record a failed request.

        Args:
            operation: Operation name.
            error_kind: Error class name.
        """
        with self._lock:
            self._failures[(operation, error_kind)] += 1

    def get_requests_total(self) -> dict[str, int]:
        """Get request counts per operation."""
        with self._lock:
            return dict(self._requests)

    def get_failures_total(self) -> dict[tuple[str, str], int]:
        """Get failure counts keyed by (operation, error_kind)."""
        with self._lock:
            return dict(self._failures)

    def reset(self) -> None:
        """Reset all metrics (for testing)."""
        with self._lock:
            self._requests.clear()
            self._failures.clear()
