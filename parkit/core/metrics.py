"""
Prometheus metrics instrumentation.
Counts remote store traffic, cache usage and booking lifecycle operations.
"""
from prometheus_client import Counter, Histogram

# Remote store metrics
remote_requests_total = Counter(
    'parkit_remote_requests_total',
    'Total requests to the remote store',
    ['method', 'collection', 'status']
)

remote_request_duration_seconds = Histogram(
    'parkit_remote_request_duration_seconds',
    'Remote store request latency',
    ['method', 'collection']
)

# Collection cache metrics
cache_lookups_total = Counter(
    'parkit_cache_lookups_total',
    'Collection cache lookups',
    ['collection', 'result']
)

# Booking lifecycle metrics
booking_operations_total = Counter(
    'parkit_booking_operations_total',
    'Booking lifecycle operations',
    ['operation', 'status']
)


def track_remote_request(method: str, collection: str, status: str, duration: float):
    """Record one remote store round-trip"""
    remote_requests_total.labels(method=method, collection=collection, status=status).inc()
    remote_request_duration_seconds.labels(method=method, collection=collection).observe(duration)


def track_cache_lookup(collection: str, hit: bool):
    """Record a cache hit or miss"""
    cache_lookups_total.labels(collection=collection, result="hit" if hit else "miss").inc()


def track_booking_operation(operation: str, success: bool):
    """Record a booking lifecycle operation outcome"""
    booking_operations_total.labels(
        operation=operation,
        status="success" if success else "error"
    ).inc()
