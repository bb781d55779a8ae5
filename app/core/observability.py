import time
from contextlib import contextmanager

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

verifier_requests_total = Counter(
    "verifier_requests_total",
    "API requests handled by endpoint",
    ["endpoint"],
)
verifier_external_calls_total = Counter(
    "verifier_external_calls_total",
    "External dependency calls by provider and status",
    ["provider", "status"],
)
verifier_fallback_total = Counter("verifier_fallback_total", "AI-only fallback results due to backend failure")
verifier_citation_probes_total = Counter(
    "verifier_citation_probes_total",
    "Citation URL probes by outcome",
    ["outcome"],
)
verifier_stage_duration_seconds = Histogram(
    "verifier_stage_duration_seconds",
    "Verifier stage duration seconds",
    ["stage"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30, 60, 120),
)


@contextmanager
def stage_timer(stage: str):
    start = time.perf_counter()
    try:
        yield
    finally:
        verifier_stage_duration_seconds.labels(stage=stage).observe(time.perf_counter() - start)


def metrics_payload() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST
