"""/v1/companies - stored company series, provider sync, and per-company screens"""

import time
import logging
from dataclasses import replace
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from finrisk_gateway.api.v1.schemas import (
    CompanyResponse,
    CompanySchema,
    CompanyUpsertRequest,
    FinancialSnapshotSchema,
    RatiosResponse,
    RiskReportResponse,
    SyncResponse,
)
from finrisk_gateway.api.v1.rules import run_screen
from finrisk_gateway.api.dependencies import get_provider_client, get_request_id
from finrisk_gateway.infrastructure.database.session import get_db
from finrisk_gateway.infrastructure.database.models import Company
from finrisk_gateway.infrastructure.database.repositories import CompanyRepository, StatementRepository
from finrisk_gateway.infrastructure.clients.provider import FinancialDataClient
from finrisk_gateway.domain.exceptions import CompanyNotFoundError, ProviderAPIError, YearNotFoundError
from finrisk_gateway.domain.models import CompanyInfo, FinancialSnapshot
from finrisk_gateway.domain.ratios import calculate_ratios
from finrisk_gateway.domain.screening import latest_year
from finrisk_gateway.infrastructure.observability.metrics import provider_fetch_failures_counter
from finrisk_gateway.infrastructure.observability.logging import log_evaluation

router = APIRouter()


def load_company(db: Session, tax_id: str) -> Company:
    company = CompanyRepository(db).get_by_tax_id(tax_id)
    if company is None:
        raise CompanyNotFoundError(f"Company {tax_id} not found")
    return company


def find_year(series: List[FinancialSnapshot], year: int) -> FinancialSnapshot:
    for snapshot in series:
        if snapshot.year == year:
            return snapshot
    raise YearNotFoundError(f"No financial data for year {year}")


def company_response(company: Company, series: List[FinancialSnapshot]) -> CompanyResponse:
    return CompanyResponse(
        company=CompanySchema(
            tax_id=company.tax_id,
            name=company.name,
            address=company.address,
            representative=company.representative,
            date_founded=company.date_founded,
        ),
        available_years=[s.year for s in series],
        financials=[FinancialSnapshotSchema.from_domain(s) for s in series],
    )


@router.put("/companies/{tax_id}", response_model=CompanyResponse)
def upsert_company(tax_id: str, request_body: CompanyUpsertRequest, db: Session = Depends(get_db)):
    """
    Store a company profile and its yearly statements.

    Posted years overwrite stored ones; other stored years are kept.
    """
    try:
        info = CompanyInfo(tax_id=tax_id, **request_body.company.model_dump())
        company = CompanyRepository(db).upsert(info)
        statements = StatementRepository(db)
        statements.save_series(company.id, request_body.series())
        db.commit()

        return company_response(company, statements.get_series(company.id))

    except Exception as e:
        db.rollback()
        logging.error(f"Failed to store company {tax_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/companies/{tax_id}/sync", response_model=SyncResponse)
async def sync_company(
    tax_id: str,
    request: Request,
    db: Session = Depends(get_db),
    provider_client: FinancialDataClient = Depends(get_provider_client),
):
    """
    Pull company profile and statements from the upstream provider.

    Flow:
    1. Fetch profile + yearly statements from provider API
    2. Upsert company and overwrite fetched years
    3. Return the imported years
    """
    request_id = get_request_id(request)

    try:
        info, series = await provider_client.get_company_financials(tax_id)

        company = CompanyRepository(db).upsert(replace(info, tax_id=tax_id))
        StatementRepository(db).save_series(company.id, series)
        db.commit()

        logging.info(
            "Provider sync completed",
            extra={"request_id": request_id, "tax_id": tax_id, "years": len(series)},
        )
        return SyncResponse(tax_id=tax_id, years_imported=sorted((s.year for s in series), reverse=True))

    except ProviderAPIError as e:
        provider_fetch_failures_counter.inc()
        db.rollback()
        logging.error(f"Provider API error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Financial data provider unavailable")

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/companies/{tax_id}", response_model=CompanyResponse)
def get_company(tax_id: str, db: Session = Depends(get_db)):
    """Company profile and stored series, newest year first"""
    try:
        company = load_company(db, tax_id)
    except CompanyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return company_response(company, StatementRepository(db).get_series(company.id))


@router.get("/companies/{tax_id}/risk", response_model=RiskReportResponse)
def get_company_risk(
    tax_id: str,
    request: Request,
    year: Optional[int] = Query(None, description="Evaluation year; defaults to newest stored year"),
    db: Session = Depends(get_db),
):
    """
    Screen the stored series against all 45 rules.

    An evaluation year with no stored statement yields all-UNKNOWN
    verdicts rather than an error.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        company = load_company(db, tax_id)
    except CompanyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    series = StatementRepository(db).get_series(company.id)
    evaluation_year = year if year is not None else latest_year(series)
    if evaluation_year is None:
        raise HTTPException(status_code=404, detail=f"No financial data stored for {tax_id}")

    report = run_screen(series, evaluation_year)

    if not report.evaluated:
        logging.warning(
            f"Evaluation year {evaluation_year} not stored for {tax_id}",
            extra={"request_id": request_id},
        )

    duration_ms = (time.time() - start_time) * 1000
    log_evaluation(request_id, tax_id, report, duration_ms)

    return RiskReportResponse.from_domain(report, [s.year for s in series], tax_id=tax_id)


@router.get("/companies/{tax_id}/ratios", response_model=RatiosResponse)
def get_company_ratios(
    tax_id: str,
    year: Optional[int] = Query(None, description="Fiscal year; defaults to newest stored year"),
    db: Session = Depends(get_db),
):
    """Financial ratios for one stored year"""
    try:
        company = load_company(db, tax_id)
        series = StatementRepository(db).get_series(company.id)
        target_year = year if year is not None else latest_year(series)
        if target_year is None:
            raise YearNotFoundError(f"No financial data stored for {tax_id}")
        snapshot = find_year(series, target_year)
    except (CompanyNotFoundError, YearNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))

    return RatiosResponse.model_validate(calculate_ratios(snapshot))
