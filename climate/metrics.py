from __future__ import annotations

from prometheus_client import Counter, Histogram

climate_upstream_requests_total = Counter(
    "climate_upstream_requests_total",
    "Total regional-grid upstream requests",
    labelnames=["provider", "parameter"],
)

climate_upstream_errors_total = Counter(
    "climate_upstream_errors_total",
    "Total regional-grid upstream request errors",
    labelnames=["provider", "parameter", "error_type"],
)

climate_upstream_latency_seconds = Histogram(
    "climate_upstream_latency_seconds",
    "Latency of regional-grid upstream requests",
    labelnames=["provider", "parameter"],
    buckets=(0.1, 0.3, 0.5, 1, 2, 5, 10, 20, 30, 60),
)

climate_parameters_empty_total = Counter(
    "climate_parameters_empty_total",
    "Parameters omitted from a response because no dated samples came back",
    labelnames=["parameter", "reason"],
)

climate_validation_rejections_total = Counter(
    "climate_validation_rejections_total",
    "Climate queries rejected before any upstream call",
    labelnames=["reason"],
)
