"""Data access layer for companies and financial statements"""

import uuid
from dataclasses import asdict
from typing import List, Optional
from sqlalchemy.orm import Session
from finrisk_gateway.infrastructure.database.models import Company, FinancialStatement
from finrisk_gateway.domain.models import FIGURE_FIELDS, CompanyInfo, FinancialSnapshot


class CompanyRepository:
    """Repository for company profiles"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_tax_id(self, tax_id: str) -> Optional[Company]:
        return self.db.query(Company).filter(Company.tax_id == tax_id).first()

    def upsert(self, info: CompanyInfo) -> Company:
        """Create the company or update its profile fields"""
        company = self.get_by_tax_id(info.tax_id)
        if company is None:
            company = Company(tax_id=info.tax_id)
            self.db.add(company)

        company.name = info.name
        company.address = info.address
        company.representative = info.representative
        company.date_founded = info.date_founded

        self.db.flush()  # Get ID without committing
        return company


class StatementRepository:
    """Repository for yearly financial statements"""

    def __init__(self, db: Session):
        self.db = db

    def save_series(self, company_id: uuid.UUID, series: List[FinancialSnapshot]) -> int:
        """
        Insert or overwrite one row per year.

        Years already stored but absent from series are kept, so a
        provider can send only the newly filed year.
        """
        existing = {
            statement.year: statement
            for statement in self.db.query(FinancialStatement)
            .filter(FinancialStatement.company_id == company_id)
            .all()
        }

        for snapshot in series:
            values = asdict(snapshot)
            statement = existing.get(snapshot.year)
            if statement is None:
                statement = FinancialStatement(company_id=company_id, year=snapshot.year)
                self.db.add(statement)
                existing[snapshot.year] = statement
            for name in FIGURE_FIELDS:
                setattr(statement, name, values[name])

        self.db.flush()
        return len(series)

    def get_series(self, company_id: uuid.UUID) -> List[FinancialSnapshot]:
        """Stored series for a company, newest year first"""
        statements = (
            self.db.query(FinancialStatement)
            .filter(FinancialStatement.company_id == company_id)
            .order_by(FinancialStatement.year.desc())
            .all()
        )
        return [to_snapshot(statement) for statement in statements]


def to_snapshot(statement: FinancialStatement) -> FinancialSnapshot:
    """Map an ORM row to the immutable domain snapshot"""
    return FinancialSnapshot(
        year=statement.year,
        **{name: float(getattr(statement, name) or 0.0) for name in FIGURE_FIELDS},
    )
