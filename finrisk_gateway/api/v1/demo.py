"""GET /v1/demo/financials - sample company and series for walkthroughs"""

from typing import Optional
from fastapi import APIRouter, Query

from finrisk_gateway.api.v1.schemas import CompanySchema, DemoResponse, FinancialSnapshotSchema
from finrisk_gateway.config import settings
from finrisk_gateway.infrastructure.providers.demo import demo_company, generate_demo_series

router = APIRouter()


@router.get("/demo/financials", response_model=DemoResponse)
def get_demo_financials(
    years: Optional[int] = Query(None, ge=1, le=20, description="Number of fiscal years"),
    seed: Optional[int] = Query(None, description="Fix for a reproducible series"),
):
    """Generated demo series, newest year first"""
    series = generate_demo_series(
        years=years or settings.demo_series_years,
        latest_year=settings.demo_latest_year,
        seed=seed,
    )
    return DemoResponse(
        company=CompanySchema.from_domain(demo_company()),
        financials=[FinancialSnapshotSchema.from_domain(s) for s in series],
    )
