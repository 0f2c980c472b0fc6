"""SQLAlchemy ORM models for companies and their yearly financial statements"""

import uuid
from sqlalchemy import Column, String, Float, DateTime, Integer, ForeignKey, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class Company(Base):
    """Company whose statements are screened"""

    __tablename__ = "company"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tax_id = Column(String(20), nullable=False, unique=True, index=True)
    name = Column(Text, nullable=False)
    address = Column(Text, nullable=False, default="")
    representative = Column(Text, nullable=False, default="")
    date_founded = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    statements = relationship(
        "FinancialStatement",
        back_populates="company",
        cascade="all, delete-orphan",
        order_by="FinancialStatement.year.desc()",
    )


class FinancialStatement(Base):
    """One fiscal year of figures for a company (amounts in VND)"""

    __tablename__ = "financial_statement"
    __table_args__ = (UniqueConstraint("company_id", "year", name="uq_financial_statement_company_year"),)

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    company_id = Column(Uuid(as_uuid=True), ForeignKey("company.id", ondelete="CASCADE"), nullable=False, index=True)
    year = Column(Integer, nullable=False)

    # Income statement
    revenue = Column(Float, nullable=False, default=0.0)
    cost_of_goods_sold = Column(Float, nullable=False, default=0.0)
    gross_profit = Column(Float, nullable=False, default=0.0)
    operating_expenses = Column(Float, nullable=False, default=0.0)
    operating_profit = Column(Float, nullable=False, default=0.0)
    financial_income = Column(Float, nullable=False, default=0.0)
    financial_expenses = Column(Float, nullable=False, default=0.0)
    other_income = Column(Float, nullable=False, default=0.0)
    other_expenses = Column(Float, nullable=False, default=0.0)
    net_profit = Column(Float, nullable=False, default=0.0)

    # Balance sheet
    total_assets = Column(Float, nullable=False, default=0.0)
    current_assets = Column(Float, nullable=False, default=0.0)
    cash_and_equivalents = Column(Float, nullable=False, default=0.0)
    receivables = Column(Float, nullable=False, default=0.0)
    inventory = Column(Float, nullable=False, default=0.0)
    non_current_assets = Column(Float, nullable=False, default=0.0)
    fixed_assets = Column(Float, nullable=False, default=0.0)
    total_liabilities = Column(Float, nullable=False, default=0.0)
    current_liabilities = Column(Float, nullable=False, default=0.0)
    non_current_liabilities = Column(Float, nullable=False, default=0.0)
    equity = Column(Float, nullable=False, default=0.0)
    retained_earnings = Column(Float, nullable=False, default=0.0)

    # Cash flow
    net_cash_operating = Column(Float, nullable=False, default=0.0)
    net_cash_investing = Column(Float, nullable=False, default=0.0)
    net_cash_financing = Column(Float, nullable=False, default=0.0)
    net_cash_flow = Column(Float, nullable=False, default=0.0)

    # Trial balance
    trial_balance_total_debit = Column(Float, nullable=False, default=0.0)
    trial_balance_total_credit = Column(Float, nullable=False, default=0.0)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    company = relationship("Company", back_populates="statements")
