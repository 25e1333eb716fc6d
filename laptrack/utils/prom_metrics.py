"""
Prometheus Metrics

FLOW OVERVIEW
- observe_request(endpoint, method, status, latency_seconds)
  • Called from the after_request hook; endpoint is the URL rule, not the raw path.
- metrics_latest()
  • Text exposition for /metrics. Aggregates worker files when
    PROMETHEUS_MULTIPROC_DIR is set (gunicorn with several workers).
"""

import os
from prometheus_client import (
    CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Histogram, generate_latest, multiprocess
)

METRIC_PREFIX = 'laptrack'

# API calls are short; keep resolution below one second
LATENCY_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0)

HTTP_REQUESTS = Counter(
    f'{METRIC_PREFIX}_http_requests_total',
    'HTTP requests handled, by URL rule, method and response status',
    ['endpoint', 'method', 'status'],
)

HTTP_LATENCY = Histogram(
    f'{METRIC_PREFIX}_http_request_latency_seconds',
    'Time spent handling HTTP requests, by URL rule',
    ['endpoint'],
    buckets=LATENCY_BUCKETS,
)


def observe_request(endpoint: str, method: str, status: int, latency_seconds: float) -> None:
    HTTP_REQUESTS.labels(endpoint=endpoint, method=method, status=str(status)).inc()
    HTTP_LATENCY.labels(endpoint=endpoint).observe(latency_seconds)


def metrics_latest() -> bytes:
    """Render all metrics in the Prometheus text format."""
    if not os.getenv('PROMETHEUS_MULTIPROC_DIR'):
        return generate_latest()

    registry = CollectorRegistry()
    multiprocess.MultiProcessCollector(registry)
    return generate_latest(registry)


__all__ = ['observe_request', 'metrics_latest', 'CONTENT_TYPE_LATEST']
