"""Prometheus metrics definitions for the Let's Eat server.

Exposes metrics for:
1. HTTP API metrics (requests, latency, errors)
2. Google Places API client metrics (calls, latency, errors)
3. Search pipeline metrics (candidates in/out, filter drops, verdicts)
4. Detail view metrics (fetch results)
"""
from prometheus_client import Counter, Histogram, Gauge, Info

# =============================================================================
# HTTP API METRICS
# =============================================================================

HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "endpoint", "status_code"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

HTTP_REQUESTS_IN_PROGRESS = Gauge(
    "http_requests_in_progress",
    "Number of HTTP requests currently being processed",
    ["method", "endpoint"],
)

HTTP_RESPONSE_SIZE_BYTES = Histogram(
    "http_response_size_bytes",
    "HTTP response body size in bytes",
    ["method", "endpoint"],
    buckets=(100, 500, 1000, 5000, 10000, 50000, 100000, 500000),
)

# =============================================================================
# GOOGLE PLACES API CLIENT METRICS
# =============================================================================

GOOGLE_PLACES_API_CALLS_TOTAL = Counter(
    "google_places_api_calls_total",
    "Total number of Google Places API calls",
    ["endpoint", "status"],  # status: success, error
)

GOOGLE_PLACES_API_CALL_DURATION_SECONDS = Histogram(
    "google_places_api_call_duration_seconds",
    "Google Places API call latency in seconds",
    ["endpoint"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

GOOGLE_PLACES_API_ERRORS_TOTAL = Counter(
    "google_places_api_errors_total",
    "Total number of Google Places API errors",
    # error_type: http_error, timeout, connection_error, quota_exceeded, denied, invalid_request, unavailable
    ["endpoint", "error_type"],
)

# =============================================================================
# SEARCH PIPELINE METRICS
# =============================================================================

SEARCH_CANDIDATES_TOTAL = Counter(
    "search_candidates_total",
    "Total number of raw candidates entering the search pipeline",
)

SEARCH_RESULTS_TOTAL = Counter(
    "search_results_total",
    "Total number of candidates returned by the search pipeline",
)

SEARCH_CANDIDATES_DROPPED_TOTAL = Counter(
    "search_candidates_dropped_total",
    "Candidates removed by a filter predicate",
    ["reason"],  # reason: not_open, too_far, price
)

SEARCH_RESULTS_PER_REQUEST = Histogram(
    "search_results_per_request",
    "Number of ranked results per search request",
    buckets=(0, 1, 2, 5, 10, 20, 40, 60),
)

OPEN_STATUS_VERDICTS_TOTAL = Counter(
    "open_status_verdicts_total",
    "Open-now verdicts computed from weekday text",
    ["verdict"],  # verdict: open, closed, unknown
)

# =============================================================================
# DETAIL VIEW METRICS
# =============================================================================

DETAIL_FETCH_RESULTS = Counter(
    "detail_fetch_results_total",
    "Results of venue detail fetch operations",
    ["result"],  # result: success, unavailable
)

# =============================================================================
# APPLICATION INFO
# =============================================================================

APP_INFO = Info(
    "letseat",
    "Let's Eat server application information",
)

APP_INFO.info({
    "version": "1.0.0",
    "description": "Nearby dining venue search and ranking service",
})
