"""Prometheus metrics for monitoring data loads and query traffic"""

from prometheus_client import Counter, Histogram, Gauge

# Record store metrics
store_load_counter = Counter(
    "sales_store_load_total",
    "Record store load attempts",
    ["outcome"],  # success | failure
)

store_load_duration_histogram = Histogram(
    "sales_store_load_seconds",
    "Time spent fetching and parsing the sales dataset",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

store_records_gauge = Gauge(
    "sales_store_records",
    "Number of sales records held in memory",
)

# Query metrics
query_counter = Counter(
    "sales_query_total",
    "Sales queries served",
    ["sort_by"],
)

query_matches_histogram = Histogram(
    "sales_query_matches",
    "Records matching a query before pagination",
    buckets=[0, 1, 10, 100, 1_000, 10_000, 100_000, 1_000_000],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_store_load(success: bool, duration_seconds: float, record_count: int = 0) -> None:
    """Record the outcome of one store load attempt"""
    store_load_counter.labels(outcome="success" if success else "failure").inc()
    store_load_duration_histogram.observe(duration_seconds)
    if success:
        store_records_gauge.set(record_count)


def record_query(sort_by: str, total_items: int) -> None:
    """Record query volume and match distribution"""
    query_counter.labels(sort_by=sort_by).inc()
    query_matches_histogram.observe(total_items)
