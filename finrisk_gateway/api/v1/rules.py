"""GET /v1/rules and POST /v1/risk/evaluate - catalog and stateless risk screen"""

import time
import logging
from fastapi import APIRouter, HTTPException, Request

from finrisk_gateway.api.v1.schemas import (
    CatalogResponse,
    EvaluateRequest,
    RiskReportResponse,
    RuleGroupSchema,
    RuleSchema,
)
from finrisk_gateway.api.dependencies import get_request_id
from finrisk_gateway.config import settings
from finrisk_gateway.domain.catalog import GROUP_ORDER, RULE_CATALOG
from finrisk_gateway.domain.models import GROUP_TITLES, FinancialSeries, RiskReport
from finrisk_gateway.domain.screening import build_report, latest_year
from finrisk_gateway.infrastructure.observability.logging import log_evaluation
from finrisk_gateway.infrastructure.observability.metrics import evaluation_duration_histogram, record_evaluation

router = APIRouter()


@router.get("/rules", response_model=CatalogResponse)
def list_rules():
    """
    Rule catalog metadata grouped by statement section.

    Presentation clients render rule text from here instead of keeping
    their own copy.
    """
    groups = []
    for group in GROUP_ORDER:
        rules = [RuleSchema.from_domain(rule) for rule in RULE_CATALOG if rule.group == group]
        groups.append(
            RuleGroupSchema(group=group, title=GROUP_TITLES[group], rule_count=len(rules), rules=rules)
        )

    return CatalogResponse(rule_count=len(RULE_CATALOG), groups=groups)


def run_screen(series: FinancialSeries, evaluation_year: int) -> RiskReport:
    """Evaluate the catalog with configured policies and record metrics"""
    with evaluation_duration_histogram.time():
        report = build_report(
            series,
            evaluation_year,
            zero_divisor_policy=settings.zero_divisor_policy,
            integrity_tolerance=settings.integrity_tolerance,
        )
    record_evaluation(report)
    return report


@router.post("/risk/evaluate", response_model=RiskReportResponse)
def evaluate_risk(request_body: EvaluateRequest, request: Request):
    """
    Screen a posted series against all 45 rules.

    Flow:
    1. Resolve evaluation year (newest year when omitted)
    2. Evaluate catalog; rules that cannot be evaluated are UNKNOWN
    3. Record metrics and logs
    4. Return verdicts grouped by section
    """
    start_time = time.time()
    request_id = get_request_id(request)

    series = request_body.series()
    evaluation_year = request_body.evaluation_year
    if evaluation_year is None:
        evaluation_year = latest_year(series)
    if evaluation_year is None:
        raise HTTPException(status_code=422, detail="evaluation_year is required when financials is empty")

    report = run_screen(series, evaluation_year)

    if not report.evaluated:
        logging.warning(
            f"Evaluation year {evaluation_year} not in series",
            extra={"request_id": request_id},
        )

    duration_ms = (time.time() - start_time) * 1000
    log_evaluation(request_id, None, report, duration_ms)

    available_years = sorted({s.year for s in series}, reverse=True)
    return RiskReportResponse.from_domain(report, available_years)
