from __future__ import annotations

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    GCCollector,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)

REQUESTS_TOTAL = "http_requests_total"


class RequestMetrics:
    """Request counter plus the default process collectors on one registry.

    Counter increments are internally locked by prometheus_client, so a single
    instance is shared by every request the application serves.
    """

    content_type = CONTENT_TYPE_LATEST

    def __init__(self):
        registry = CollectorRegistry()
        ProcessCollector(registry=registry)
        PlatformCollector(registry=registry)
        GCCollector(registry=registry)
        self.registry = registry
        self.requests_total = Counter(
            REQUESTS_TOTAL,
            "Total number of HTTP requests",
            ["method", "path", "status"],
            registry=registry,
        )

    def observe_request(self, method: str, path: str, status: str = "200") -> None:
        self.requests_total.labels(method=method, path=path, status=status).inc()

    def request_count(self, method: str, path: str, status: str = "200") -> float:
        value = self.registry.get_sample_value(
            REQUESTS_TOTAL, {"method": method, "path": path, "status": status}
        )
        return value or 0.0

    def render(self) -> bytes:
        return generate_latest(self.registry)
