"""
Prometheus metrics collection for the validation API

Counts accepted and rejected requests, failing fields and the time spent
binding and validating each request.
"""
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

from src.core.models import ValidationOutcome

# Global registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# REQUEST VALIDATION METRICS
# =======================

# Requests validated, by terminal state
validation_requests_total = Counter(
    name="validation_requests_total",
    documentation="Total number of requests validated",
    labelnames=["endpoint", "outcome"],  # outcome: accepted, rejected
    registry=REGISTRY,
)

# Failing fields
validation_field_failures_total = Counter(
    name="validation_field_failures_total",
    documentation="Total number of field validation failures",
    labelnames=["endpoint", "field"],
    registry=REGISTRY,
)

# Binding + validation duration
validation_duration_seconds = Histogram(
    name="validation_duration_seconds",
    documentation="Time spent binding and validating a request",
    labelnames=["endpoint"],
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5],
    registry=REGISTRY,
)


# =======================
# EXPORT
# =======================

def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


def get_content_type() -> str:
    """Get content type for Prometheus metrics"""
    return CONTENT_TYPE_LATEST


# =======================
# CONTEXT MANAGERS
# =======================

class track_duration:
    """
    Context manager for tracking validation duration

    Usage:
        with track_duration(endpoint="/api/test-user"):
            # bind and validate
            pass
    """

    def __init__(self, histogram: Histogram = validation_duration_seconds, **labels):
        self.histogram = histogram
        self.labels = labels
        self.timer = None

    def __enter__(self):
        """Start timer"""
        self.timer = self.histogram.labels(**self.labels).time()
        self.timer.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Stop timer"""
        self.timer.__exit__(exc_type, exc_val, exc_tb)
        return False


def record_outcome(endpoint: str, outcome: ValidationOutcome) -> None:
    """
    Record a completed validation outcome

    Args:
        endpoint: Request path
        outcome: Completed outcome
    """
    validation_requests_total.labels(endpoint=endpoint, outcome=outcome.state.value).inc()
    for field_name in outcome.failed_fields:
        validation_field_failures_total.labels(endpoint=endpoint, field=field_name).inc()
