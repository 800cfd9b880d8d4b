"""
Prometheus metrics middleware for HTTP request tracking.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.constants import CART_ITEM_ID_PREFIX
from ..core.ulid_helper import is_valid_ulid
from ..monitoring.prometheus_metrics import prometheus_metrics

METRICS_PATH_SUFFIX = "/metrics/prometheus"


def normalize_path(raw_path: str) -> str:
    """Collapse numeric and ULID path segments to ``:id`` to bound label cardinality."""
    return "/".join(":id" if _is_identifier(segment) else segment for segment in raw_path.split("/"))


def _is_identifier(segment: str) -> bool:
    if segment.isdigit():
        return True
    if segment.startswith(CART_ITEM_ID_PREFIX):
        segment = segment[len(CART_ITEM_ID_PREFIX) :]
    return is_valid_ulid(segment)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware to collect Prometheus metrics for HTTP requests."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path.endswith(METRICS_PATH_SUFFIX):
            return await call_next(request)

        method = request.method
        path = normalize_path(request.url.path)

        prometheus_metrics.track_http_request_start(method, path)
        start_time = time.time()

        try:
            response = await call_next(request)
            duration = time.time() - start_time

            prometheus_metrics.record_http_request(
                method=method, endpoint=path, duration=duration, status_code=response.status_code
            )

            return response

        finally:
            prometheus_metrics.track_http_request_end(method, path)
