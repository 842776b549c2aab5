"""Prometheus metric inventory for cert-registry.

Every metric the service exports is declared here; the modules that own
the behavior import the metric and increment/observe it at the point of
action.  Counters only go up, so tests assert on before/after deltas.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# HTTP metrics (populated by the MetricsMiddleware)
# ---------------------------------------------------------------------------

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint, and status code",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of HTTP requests currently being processed",
)

# ---------------------------------------------------------------------------
# Ledger metrics
# ---------------------------------------------------------------------------

ISSUERS_GRANTED = Counter(
    "issuers_granted_total",
    "Issuer credentials granted by the admin credential",
)

CERTIFICATES_ISSUED = Counter(
    "certificates_issued_total",
    "Certificates minted",
    ["mode"],  # "single" or "batch"
)

CERTIFICATES_DESTROYED = Counter(
    "certificates_destroyed_total",
    "Certificates destroyed by their recipient",
)

AUTHORIZATION_DENIALS = Counter(
    "authorization_denials_total",
    "Operations rejected with NotAuthorized",
    ["operation"],  # "create_issuer", "issue_certificate", ...
)

BATCH_SIZE = Histogram(
    "certificate_batch_size",
    "Number of certificates per accepted batch issuance",
    buckets=[1, 5, 10, 25, 50, 100, 250, 500, 1000],
)

EVENT_FEED_PUBLISHED = Counter(
    "event_feed_published_total",
    "Ledger events pushed to the observer feed",
    ["event_type"],
)
