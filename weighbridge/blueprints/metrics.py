"""
Prometheus metrics blueprint.

Exposes /metrics with HTTP request metrics and order upsert counts.
This endpoint should be restricted to internal network or monitoring systems only.
"""
from flask import Blueprint, Response, request, g
from prometheus_client import Counter, Histogram, Gauge, generate_latest, CollectorRegistry, CONTENT_TYPE_LATEST
from prometheus_client import multiprocess, REGISTRY
import time
import os

metrics_bp = Blueprint('metrics', __name__)

# Check if running in multi-process mode (Gunicorn)
MULTIPROCESS_MODE = os.environ.get('PROMETHEUS_MULTIPROC_DIR') is not None

if MULTIPROCESS_MODE:
    registry = CollectorRegistry()
    multiprocess.MultiProcessCollector(registry)
else:
    registry = REGISTRY

# Metrics register themselves in the default registry; in multiprocess mode
# the collector above reads them from PROMETHEUS_MULTIPROC_DIR instead.
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'http_status'],
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request latency in seconds',
    ['method', 'endpoint'],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

http_requests_in_flight = Gauge(
    'http_requests_in_flight',
    'Number of HTTP requests currently being processed',
    multiprocess_mode='livesum',
)

orders_upserted_total = Counter(
    'weighbridge_orders_upserted_total',
    'Orders written through POST /api/orders',
    ['outcome'],  # created | updated
)


def setup_metrics_instrumentation(app):
    """Time every request except scrapes of /metrics itself."""

    def _tracked():
        return request.endpoint != 'metrics.metrics'

    @app.before_request
    def start_request_timer():
        if _tracked():
            g.metrics_started_at = time.perf_counter()
            http_requests_in_flight.inc()

    @app.after_request
    def record_request_metrics(response):
        started_at = g.get('metrics_started_at')
        if started_at is None:
            return response

        endpoint = request.endpoint or 'unknown'
        try:
            http_request_duration_seconds.labels(method=request.method, endpoint=endpoint).observe(
                time.perf_counter() - started_at
            )
            http_requests_total.labels(
                method=request.method, endpoint=endpoint, http_status=response.status_code
            ).inc()
        except ValueError as e:
            app.logger.warning(f"Failed to record metrics: {e}")
        return response

    @app.teardown_request
    def finish_request_timer(exception=None):
        # Runs even when the response was never built
        if g.pop('metrics_started_at', None) is not None:
            http_requests_in_flight.dec()


@metrics_bp.route('/metrics')
def metrics():
    """
    Prometheus metrics endpoint.

    Not authenticated: restrict by network/firewall rules in production.
    """
    return Response(generate_latest(registry), mimetype=CONTENT_TYPE_LATEST)
