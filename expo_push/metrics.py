"""Prometheus metric definitions for the push client.

Single source of truth for all custom metrics. Import from here in service code.
"""

from prometheus_client import Counter, Histogram

# --- HTTP metrics ---

push_requests_total = Counter(
    "expo_push_requests_total",
    "Total requests made to the push service",
    ["endpoint", "outcome"],
)

push_request_duration_seconds = Histogram(
    "expo_push_request_duration_seconds",
    "Push service request duration in seconds",
    ["endpoint"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

compressed_requests_total = Counter(
    "expo_push_compressed_requests_total",
    "Total request bodies sent gzip-compressed",
)

# --- Delivery metrics ---

push_tickets_total = Counter(
    "expo_push_tickets_total",
    "Total push tickets received by status",
    ["status"],
)

push_receipts_total = Counter(
    "expo_push_receipts_total",
    "Total push receipts received by status",
    ["status"],
)
