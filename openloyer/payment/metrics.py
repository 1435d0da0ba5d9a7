"""Prometheus metrics instrumentation for the payment matching engine.

Tracks matching outcomes, confidence distribution, run duration and the
size of the manual review queue (ambiguous transactions).
"""

import os
from typing import TYPE_CHECKING

from prometheus_client import Counter, Gauge, Histogram, start_http_server

from ..utils.logging import get_logger

if TYPE_CHECKING:
    from .domain.value_objects import MatchingResult

logger = get_logger(__name__)

# ============================================================================
# Metric Definitions
# ============================================================================

# Counter: transactions processed per outcome
matching_outcomes_total = Counter(
    "openloyer_payment_matching_outcomes_total",
    "Total number of transactions processed by the matching engine",
    ["outcome"],  # labels: matched/ambiguous/unmatched
)

# Counter: matching runs
matching_runs_total = Counter(
    "openloyer_payment_matching_runs_total",
    "Total number of matching runs",
    ["matcher_strategy"],
)

# Histogram: composite scores of reported candidates
matching_confidence_scores = Histogram(
    "openloyer_payment_matching_confidence_scores",
    "Distribution of composite scores of proposed and ambiguous candidates",
    ["outcome"],
    buckets=(0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.85, 0.9, 0.95, 1.0),
)

# Histogram: matching run duration
matching_processing_duration_seconds = Histogram(
    "openloyer_payment_matching_processing_duration_seconds",
    "Time taken to match a batch of transactions",
    ["matcher_strategy"],
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
)

# Gauge: transactions waiting for manual resolution after the last run
review_queue_size = Gauge(
    "openloyer_payment_review_queue_size",
    "Number of ambiguous transactions from the last matching run",
)


# ============================================================================
# Metrics Server
# ============================================================================


def start_metrics_server(port: int = 8000) -> None:
    """Start Prometheus metrics HTTP server when PROMETHEUS_ENABLED=true.

    Args:
        port: Port to expose metrics on (default: 8000)
    """
    if os.getenv("PROMETHEUS_ENABLED", "false").lower() == "true":
        try:
            start_http_server(port)
            logger.info("metrics_server_started", port=port)
        except OSError as e:
            logger.warning("metrics_server_unavailable", port=port, error=str(e))


# ============================================================================
# Convenience Functions
# ============================================================================


def record_matching_run(strategy: str, result: "MatchingResult", duration_seconds: float) -> None:
    """Record the outcome of one matching run.

    Args:
        strategy: Matcher strategy name (e.g. composite)
        result: Result of the run
        duration_seconds: Wall-clock duration of the run
    """
    matching_runs_total.labels(matcher_strategy=strategy).inc()
    matching_processing_duration_seconds.labels(matcher_strategy=strategy).observe(
        duration_seconds
    )

    summary = result.summary
    matching_outcomes_total.labels(outcome="matched").inc(summary.matched)
    matching_outcomes_total.labels(outcome="ambiguous").inc(summary.ambiguous)
    matching_outcomes_total.labels(outcome="unmatched").inc(summary.unmatched)

    for match in result.matches:
        record_matching_confidence("matched", match.score)
    for entry in result.ambiguous:
        for candidate in entry.candidates:
            record_matching_confidence("ambiguous", candidate.score)

    update_review_queue_size(summary.ambiguous)


def record_matching_confidence(outcome: str, score: float) -> None:
    """Record one composite score.

    Args:
        outcome: matched or ambiguous
        score: Composite score (0.0-1.0)
    """
    matching_confidence_scores.labels(outcome=outcome).observe(score)


def update_review_queue_size(count: int) -> None:
    """Update review queue size gauge."""
    review_queue_size.set(count)

