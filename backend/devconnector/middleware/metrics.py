"""
Prometheus Metrics Middleware

Provides request/response metrics for monitoring:
- HTTP request latency
- Request count by endpoint and status
- Active request gauge
- Profile store operation outcomes

Usage:
    from devconnector.middleware.metrics import setup_metrics

    # In main.py
    app = FastAPI()
    setup_metrics(app)

Metrics Endpoint:
    GET /metrics - Prometheus-format metrics
"""

import time
import logging
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    CONTENT_TYPE_LATEST,
    generate_latest,
    REGISTRY,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Match

logger = logging.getLogger(__name__)

# ==================== Prometheus Metrics ====================

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint", "status"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"]
)

ACTIVE_REQUESTS = Gauge(
    "http_requests_active",
    "Number of active HTTP requests",
    ["method", "endpoint"]
)

# outcome: ok, not_found, conflict, storage_error
STORE_OPERATIONS = Counter(
    "profile_store_operations_total",
    "Profile store operations by outcome",
    ["operation", "outcome"]
)

GITHUB_LOOKUPS = Counter(
    "github_lookups_total",
    "GitHub repository lookups by outcome",
    ["outcome"]
)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    FastAPI middleware for Prometheus metrics collection.

    Records:
    - Request latency
    - Request count by status code
    - Active request count
    """

    def __init__(self, app: FastAPI, app_name: str = "devconnector"):
        super().__init__(app)
        self.app_name = app_name

    async def dispatch(
        self,
        request: Request,
        call_next: Callable
    ) -> Response:
        endpoint = self._get_endpoint(request)
        method = request.method

        if endpoint == "/metrics":
            return await call_next(request)

        ACTIVE_REQUESTS.labels(method=method, endpoint=endpoint).inc()
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
            status = str(response.status_code)
        except Exception as e:
            status = "500"
            logger.error(f"Request error: {e}")
            raise
        finally:
            duration = time.perf_counter() - start_time

            REQUEST_LATENCY.labels(
                method=method,
                endpoint=endpoint,
                status=status
            ).observe(duration)

            REQUEST_COUNT.labels(
                method=method,
                endpoint=endpoint,
                status=status
            ).inc()

            ACTIVE_REQUESTS.labels(
                method=method,
                endpoint=endpoint
            ).dec()

        return response

    def _get_endpoint(self, request: Request) -> str:
        """
        Get normalized endpoint path from request.

        Uses the route pattern (e.g., /api/profiles/user/{user_id}) instead
        of the actual path to keep label cardinality bounded.
        """
        return endpoint_label(request)


def endpoint_label(request: Request) -> str:
    """
    Route pattern matching request, or the raw path when none matches.

    Entries without a path (mounted or included routers) are skipped.
    """
    for route in request.app.routes:
        path = getattr(route, "path", None)
        if path is None:
            continue
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return path

    return request.url.path


def metrics_endpoint(request: Request) -> Response:
    return PlainTextResponse(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST
    )


def setup_metrics(app: FastAPI) -> None:
    """
    Configure Prometheus metrics for FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(PrometheusMiddleware, app_name="devconnector")
    app.add_route("/metrics", metrics_endpoint, methods=["GET"])

    logger.info("Prometheus metrics configured")


# ==================== Helper Functions ====================

def record_store_operation(operation: str, outcome: str = "ok") -> None:
    """Record the outcome of a profile store operation."""
    STORE_OPERATIONS.labels(operation=operation, outcome=outcome).inc()


def record_github_lookup(outcome: str) -> None:
    GITHUB_LOOKUPS.labels(outcome=outcome).inc()
