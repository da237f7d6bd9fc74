# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Gauge, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "picker_requests_total",
    "Total HTTP requests to the presenter picker",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "picker_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "picker_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Selection Metrics (updated by service layer only) ──
SELECTIONS_STARTED = Counter(
    "picker_selections_started_total",
    "Total selection sessions started",
)
SELECTIONS_REJECTED = Counter(
    "picker_selections_rejected_total",
    "Selection starts rejected for insufficient candidates",
)
SELECTIONS_REVEALED = Counter(
    "picker_selections_revealed_total",
    "Total selection sessions that reached the reveal",
)
SELECTIONS_CANCELLED = Counter(
    "picker_selections_cancelled_total",
    "Total selection sessions cancelled or superseded",
)
SESSION_ACTIVE = Gauge(
    "picker_session_active",
    "1 while a selection session is in the selecting phase",
)
HIGHLIGHT_TICKS = Counter(
    "picker_highlight_ticks_total",
    "Highlight refreshes applied to live sessions",
)
STALE_CALLBACKS = Counter(
    "picker_stale_callbacks_total",
    "Timer callbacks discarded because their session was superseded",
    ["schedule"],
)

# ── Roster / Notification Metrics ──
ROSTER_SIZE = Gauge(
    "picker_roster_size",
    "Number of names in the current roster",
)
STORAGE_ERRORS = Counter(
    "picker_storage_errors_total",
    "Roster storage failures recovered by falling back to memory",
    ["operation"],
)
NOTIFICATIONS_SHOWN = Counter(
    "picker_notifications_shown_total",
    "Total transient notifications shown",
)
