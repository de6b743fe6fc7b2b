"""Tests for Prometheus metrics definitions."""

from expo_push.metrics import (
    compressed_requests_total,
    push_receipts_total,
    push_request_duration_seconds,
    push_requests_total,
    push_tickets_total,
)


class TestMetricDefinitions:
    """Verify all custom metrics are defined with correct types and labels."""

    def test_requests_total_labels(self):
        assert push_requests_total._type == "counter"
        assert push_requests_total._labelnames == ("endpoint", "outcome")

    def test_request_duration_is_histogram(self):
        assert push_request_duration_seconds._type == "histogram"
        assert push_request_duration_seconds._labelnames == ("endpoint",)

    def test_compressed_requests_is_counter(self):
        assert compressed_requests_total._type == "counter"

    def test_tickets_and_receipts_by_status(self):
        assert push_tickets_total._labelnames == ("status",)
        assert push_receipts_total._labelnames == ("status",)
