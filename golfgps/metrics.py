"""Prometheus metrics for the course service.

Request metrics are labelled with the matched route template
(``/api/courses/{name}/holes``) rather than the raw path, so course names and
hole numbers do not multiply the series count.
"""

from __future__ import annotations

import time
from typing import Any, Awaitable, Callable, MutableMapping

from fastapi import Request, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

ASGIApp = Callable[..., Awaitable[Any]]

REGISTRY = CollectorRegistry()

HTTP_REQUESTS = Counter(
    "golfgps_http_requests_total",
    "HTTP requests by route template",
    ["route", "method", "status"],
    registry=REGISTRY,
)
HTTP_LATENCY = Histogram(
    "golfgps_http_request_seconds",
    "HTTP request latency by route template",
    ["route", "method"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
    registry=REGISTRY,
)
LIE_CLASSIFICATIONS = Counter(
    "golfgps_lie_classifications_total",
    "Ball lies classified, by resulting lie",
    ["lie"],
    registry=REGISTRY,
)
COURSE_EDITS = Counter(
    "golfgps_course_edits_total",
    "Writes to the course edit store",
    ["course"],
    registry=REGISTRY,
)
CATALOG_INTEGRITY_FAILURES = Gauge(
    "golfgps_catalog_integrity_failures",
    "Courses whose hole 1 did not resolve at startup",
    registry=REGISTRY,
)


async def metrics_app(_req: Request | None = None) -> Response:
    return Response(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)


def _route_template(scope: MutableMapping[str, Any]) -> str:
    route = scope.get("route")
    return getattr(route, "path", None) or "unmatched"


class MetricsMiddleware:
    """ASGI middleware timing every HTTP request against its route template."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(
        self, scope: MutableMapping[str, Any], receive: ASGIApp, send: ASGIApp
    ) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        status = {"code": 500}

        async def _capture(message: MutableMapping[str, Any]) -> None:
            if message.get("type") == "http.response.start":
                status["code"] = message.get("status", 200)
            await send(message)

        started = time.perf_counter()
        try:
            await self.app(scope, receive, _capture)
        finally:
            route = _route_template(scope)
            method = scope.get("method", "GET")
            HTTP_LATENCY.labels(route=route, method=method).observe(
                time.perf_counter() - started
            )
            HTTP_REQUESTS.labels(
                route=route, method=method, status=str(status["code"])
            ).inc()


__all__ = [
    "CATALOG_INTEGRITY_FAILURES",
    "COURSE_EDITS",
    "HTTP_LATENCY",
    "HTTP_REQUESTS",
    "LIE_CLASSIFICATIONS",
    "MetricsMiddleware",
    "REGISTRY",
    "metrics_app",
]
