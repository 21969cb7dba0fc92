"""Prometheus metrics for tier distribution, complaint edits and AI backend health"""

from prometheus_client import Counter, Histogram

# Classification metrics
tier_counter = Counter(
    "history_socioeconomic_tier_total",
    "Socio-economic classifications made",
    ["tier"],  # Upper | Upper-Middle | Lower-Middle | Upper-Lower | Lower
)

complaint_reorder_counter = Counter(
    "history_complaint_reorder_total",
    "Complaint lists resorted after a duration edit",
)

# Generative AI metrics
ai_request_counter = Counter(
    "history_ai_requests_total",
    "Generative AI requests by operation and outcome",
    ["operation", "outcome"],  # success | failure
)

ai_latency_histogram = Histogram(
    "history_ai_latency_seconds",
    "Generative AI backend response time",
    ["operation"],
    buckets=[0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_classification(tier: str) -> None:
    """Record tier distribution for monitoring the intake population"""
    tier_counter.labels(tier=tier).inc()
