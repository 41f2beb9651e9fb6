"""
Prometheus Metrics — annotator observability.

Exposes counters and a histogram for:
- Candidate matches found per label
- Tokens labelled per label
- Matches rejected by the overwrite policy
- Sentences annotated and annotation latency

Usage
-----
    from regexner.annotation.metrics import timed_annotation, record_match

    with timed_annotation():
        annotator.annotate(corpus)
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram


# ---------------------------------------------------------------------------
# Metric definitions
# ---------------------------------------------------------------------------

# Candidate matches produced by the matcher, before resolution.
MATCHES_FOUND: Counter = Counter(
    "regexner_matches_total",
    "Candidate rule matches found, by label",
    ["label"],
)

# Tokens whose label was set by an accepted match.
LABELS_APPLIED: Counter = Counter(
    "regexner_labels_applied_total",
    "Tokens labelled by accepted matches, by label",
    ["label"],
)

# Matches rejected because they only partially cover an existing entity.
OVERWRITE_BLOCKED: Counter = Counter(
    "regexner_overwrite_blocked_total",
    "Matches rejected by the overwrite policy, by label",
    ["label"],
)

SENTENCES_ANNOTATED: Counter = Counter(
    "regexner_sentences_total",
    "Sentences annotated",
)

ANNOTATE_LATENCY: Histogram = Histogram(
    "regexner_annotate_seconds",
    "Time spent annotating one corpus, in seconds",
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
)


# ---------------------------------------------------------------------------
# Convenience helpers
# ---------------------------------------------------------------------------

def record_match(label: str) -> None:
    """Increment the candidate match counter for *label*."""
    MATCHES_FOUND.labels(label=label).inc()


def record_labels_applied(label: str, count: int = 1) -> None:
    """Add *count* labelled tokens for *label*."""
    LABELS_APPLIED.labels(label=label).inc(count)


def record_overwrite_blocked(label: str) -> None:
    """Increment the overwrite-blocked counter for *label*."""
    OVERWRITE_BLOCKED.labels(label=label).inc()


def record_sentence() -> None:
    SENTENCES_ANNOTATED.inc()


@contextmanager
def timed_annotation() -> Generator[None, None, None]:
    """
    Context manager that records annotation latency.

    Usage::

        with timed_annotation():
            annotator.annotate(corpus)
    """
    with ANNOTATE_LATENCY.time():
        yield
