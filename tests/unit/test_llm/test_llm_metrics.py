"""Unit tests for LLM request metrics."""

from handy_cloud.features.llm.metrics import LlmMetrics


class TestLlmMetrics:
    """Tests for LlmMetrics class."""

    def test_singleton_instance(self) -> None:
        """LlmMetrics is a singleton."""
        assert LlmMetrics.get_instance() is LlmMetrics.get_instance()

    def test_reset_instance_creates_new(self) -> None:
        """reset_instance drops the shared instance."""
        first = LlmMetrics.get_instance()
        LlmMetrics.reset_instance()

        assert LlmMetrics.get_instance() is not first

    def test_counts_requests_and_failures(self) -> None:
        """Counters accumulate per key."""
        metrics = LlmMetrics.get_instance()
        metrics.record_request("chat_completion")
        metrics.record_request("chat_completion")
        metrics.record_request("fetch_models")
        metrics.record_failure("fetch_models", "LlmApiError")

        assert metrics.get_requests_total() == {"chat_completion": 2, "fetch_models": 1}
        assert metrics.get_failures_total() == {("fetch_models", "LlmApiError"): 1}

    def test_reset_clears_counters(self) -> None:
        """reset clears all counters."""
        metrics = LlmMetrics.get_instance()
        metrics.record_request("chat_completion")
        metrics.record_failure("chat_completion", "LlmTransportError")

        metrics.reset()

        assert metrics.get_requests_total() == {}
        assert metrics.get_failures_total() == {}
