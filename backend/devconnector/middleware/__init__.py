"""
Middleware Package

Contains FastAPI middleware for:
- Prometheus metrics collection
- Store and upstream lookup counters
"""

from devconnector.middleware.metrics import (
    PrometheusMiddleware,
    setup_metrics,
    record_store_operation,
    record_github_lookup,
    REQUEST_LATENCY,
    REQUEST_COUNT,
    ACTIVE_REQUESTS,
    STORE_OPERATIONS,
    GITHUB_LOOKUPS,
)

__all__ = [
    "PrometheusMiddleware",
    "setup_metrics",
    "record_store_operation",
    "record_github_lookup",
    "REQUEST_LATENCY",
    "REQUEST_COUNT",
    "ACTIVE_REQUESTS",
    "STORE_OPERATIONS",
    "GITHUB_LOOKUPS",
]
