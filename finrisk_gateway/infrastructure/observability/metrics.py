"""Prometheus metrics for monitoring risk screens, verdict mix, and provider health"""

from prometheus_client import Counter, Histogram

from finrisk_gateway.domain.models import RiskReport

# Screen metrics
evaluation_counter = Counter(
    "finrisk_evaluation_total",
    "Total risk screens run",
    ["outcome"],  # evaluated | year_missing
)

verdict_counter = Counter(
    "finrisk_rule_verdict_total",
    "Rule verdicts produced by group",
    ["group", "verdict"],
)

evaluation_duration_histogram = Histogram(
    "finrisk_evaluation_duration_seconds",
    "Time spent evaluating the rule catalog",
    buckets=[0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1],
)

# Provider metrics
provider_fetch_failures_counter = Counter(
    "provider_fetch_failures_total",
    "Failed financial data provider calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_evaluation(report: RiskReport) -> None:
    """Record screen outcome and per-group verdict distribution"""
    outcome = "evaluated" if report.evaluated else "year_missing"
    evaluation_counter.labels(outcome=outcome).inc()

    for result in report.results:
        verdict_counter.labels(group=result.rule.group.value, verdict=result.verdict.value).inc()
