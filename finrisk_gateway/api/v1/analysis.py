"""POST /v1/ratios and POST /v1/trends - single-year ratios and multi-year trend tables"""

from fastapi import APIRouter

from finrisk_gateway.api.v1.schemas import (
    FinancialSnapshotSchema,
    RatiosResponse,
    TrendRequest,
    TrendTableResponse,
)
from finrisk_gateway.domain.ratios import calculate_ratios
from finrisk_gateway.domain.trends import analyze_trends

router = APIRouter()


@router.post("/ratios", response_model=RatiosResponse)
def compute_ratios(snapshot: FinancialSnapshotSchema):
    """Liquidity, profitability, leverage and activity ratios for one year"""
    return RatiosResponse.model_validate(calculate_ratios(snapshot.to_domain()))


@router.post("/trends", response_model=TrendTableResponse)
def compute_trends(request_body: TrendRequest):
    """
    Horizontal or vertical analysis of one statement.

    Horizontal cells carry the change vs the prior fiscal year; vertical
    cells carry the share of the base figure (revenue for the income
    statement, total assets otherwise).
    """
    table = analyze_trends(
        request_body.series(),
        request_body.statement,
        request_body.mode,
        request_body.base_field,
    )
    return TrendTableResponse.model_validate(table)
