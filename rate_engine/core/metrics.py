"""Prometheus metrics for monitoring"""
from prometheus_client import Counter, Histogram, CollectorRegistry
import time
from functools import wraps
from typing import Callable

registry = CollectorRegistry()

request_count = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status'],
    registry=registry
)

request_duration = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=registry
)

quotes_computed = Counter(
    'quotes_computed_total',
    'Total quotes priced',
    ['config_version', 'persisted'],
    registry=registry
)

persistence_operations = Counter(
    'persistence_operations_total',
    'Total snapshot and ledger writes',
    ['operation', 'status'],
    registry=registry
)

persistence_duration = Histogram(
    'persistence_duration_seconds',
    'Snapshot and ledger write duration in seconds',
    ['operation'],
    registry=registry
)


def track_persistence(operation: str):
    """Decorator to track snapshot/ledger write metrics"""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                result = func(*args, **kwargs)
                persistence_operations.labels(
                    operation=operation,
                    status='success'
                ).inc()
                return result
            except Exception:
                persistence_operations.labels(
                    operation=operation,
                    status='error'
                ).inc()
                raise
            finally:
                persistence_duration.labels(
                    operation=operation
                ).observe(time.time() - start_time)
        return wrapper
    return decorator


def get_metrics_text() -> str:
    """Generate Prometheus metrics in text format"""
    from prometheus_client import generate_latest
    return generate_latest(registry).decode('utf-8')
