"""
Prometheus metrics for the Raven API.

Service timings come from the @measure_operation decorator on BaseService;
HTTP timings come from PrometheusMiddleware. Everything is registered on a
private registry so test runs and reloads never collide with the default one.
"""

from typing import Optional, cast

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

REGISTRY = CollectorRegistry()

http_request_duration_seconds = Histogram(
    "raven_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint", "status_code"],
    registry=REGISTRY,
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_requests_total = Counter(
    "raven_http_requests_total",
    "Total number of HTTP requests",
    ["method", "endpoint", "status_code"],
    registry=REGISTRY,
)

http_requests_in_progress = Gauge(
    "raven_http_requests_in_progress",
    "Number of HTTP requests currently being processed",
    ["method", "endpoint"],
    registry=REGISTRY,
)

service_operation_duration_seconds = Histogram(
    "raven_service_operation_duration_seconds",
    "Service operation duration in seconds",
    ["service", "operation"],
    registry=REGISTRY,
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

service_operations_total = Counter(
    "raven_service_operations_total",
    "Total number of service operations",
    ["service", "operation", "status"],
    registry=REGISTRY,
)

errors_total = Counter(
    "raven_errors_total",
    "Total number of errors",
    ["service", "operation", "error_type"],
    registry=REGISTRY,
)

# Booking funnel counters
availability_slots_generated_total = Counter(
    "raven_availability_slots_generated_total",
    "Slots produced by the availability grid",
    ["available"],  # true | false
    registry=REGISTRY,
)

cart_operations_total = Counter(
    "raven_cart_operations_total",
    "Cart mutations by kind",
    ["operation"],  # add | remove | clear
    registry=REGISTRY,
)

range_selection_events_total = Counter(
    "raven_range_selection_events_total",
    "Range selection transitions by event",
    ["event"],
    registry=REGISTRY,
)


class PrometheusMetrics:
    """Recording helpers over the module-level collectors."""

    @staticmethod
    def record_http_request(method: str, endpoint: str, duration: float, status_code: int) -> None:
        """Record HTTP request metrics."""
        labels = {"method": method, "endpoint": endpoint, "status_code": str(status_code)}

        http_request_duration_seconds.labels(**labels).observe(duration)
        http_requests_total.labels(**labels).inc()

    @staticmethod
    def track_http_request_start(method: str, endpoint: str) -> None:
        http_requests_in_progress.labels(method=method, endpoint=endpoint).inc()

    @staticmethod
    def track_http_request_end(method: str, endpoint: str) -> None:
        http_requests_in_progress.labels(method=method, endpoint=endpoint).dec()

    @staticmethod
    def record_service_operation(
        service: str,
        operation: str,
        duration: float,
        status: str = "success",
        error_type: Optional[str] = None,
    ) -> None:
        """
        Record service operation metrics from @measure_operation decorator.

        Args:
            service: Service name (e.g., 'CalendarService')
            operation: Operation/method name (e.g., 'get_availability')
            duration: Operation duration in seconds
            status: Operation status ('success' or 'error')
            error_type: Type of error if status is 'error'
        """
        service_operation_duration_seconds.labels(service=service, operation=operation).observe(
            duration
        )
        service_operations_total.labels(service=service, operation=operation, status=status).inc()

        if status == "error" and error_type:
            errors_total.labels(service=service, operation=operation, error_type=error_type).inc()

    @staticmethod
    def record_availability_grid(available: int, unavailable: int) -> None:
        if available:
            availability_slots_generated_total.labels(available="true").inc(available)
        if unavailable:
            availability_slots_generated_total.labels(available="false").inc(unavailable)

    @staticmethod
    def inc_cart_operation(operation: str) -> None:
        cart_operations_total.labels(operation=operation).inc()

    @staticmethod
    def inc_selection_event(event: str) -> None:
        range_selection_events_total.labels(event=event).inc()

    @staticmethod
    def get_metrics() -> bytes:
        """Current exposition text for the private registry."""
        return cast(bytes, generate_latest(REGISTRY))

    @staticmethod
    def get_content_type() -> str:
        return cast(str, CONTENT_TYPE_LATEST)


# Singleton instance
prometheus_metrics = PrometheusMetrics()
