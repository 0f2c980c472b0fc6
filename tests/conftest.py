"""Pytest fixtures for testing"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./finrisk_app.db")

import pytest
from typing import Callable, Generator, List
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from finrisk_gateway.api.main import create_app
from finrisk_gateway.infrastructure.database.models import Base
from finrisk_gateway.infrastructure.database.session import get_db
from finrisk_gateway.domain.models import FinancialSnapshot


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


HEALTHY_2024 = dict(
    revenue=100_000,
    cost_of_goods_sold=72_000,
    gross_profit=28_000,
    operating_expenses=12_000,
    operating_profit=16_000,
    net_profit=10_000,
    total_assets=90_000,
    current_assets=58_500,
    cash_and_equivalents=8_775,
    receivables=20_475,
    inventory=26_325,
    non_current_assets=31_500,
    fixed_assets=26_775,
    total_liabilities=36_000,
    current_liabilities=27_000,
    non_current_liabilities=9_000,
    equity=54_000,
    retained_earnings=13_500,
    net_cash_operating=13_000,
    net_cash_investing=-4_725,
    net_cash_financing=-3_600,
    net_cash_flow=4_675,
)


@pytest.fixture
def make_snapshot() -> Callable[..., FinancialSnapshot]:
    """
    Build a snapshot from a healthy baseline (no rule triggers), overriding
    only the figures a test cares about.
    """

    def _make(year: int, **overrides) -> FinancialSnapshot:
        figures = {**HEALTHY_2024, **overrides}
        return FinancialSnapshot(year=year, **figures)

    return _make


@pytest.fixture
def healthy_series(make_snapshot) -> List[FinancialSnapshot]:
    """Three consecutive healthy years, newest first, with modest growth"""
    return [
        make_snapshot(2024),
        make_snapshot(
            2023,
            revenue=92_000,
            cost_of_goods_sold=66_240,
            gross_profit=25_760,
            operating_expenses=11_000,
            net_profit=9_200,
            receivables=19_000,
            inventory=25_000,
            cash_and_equivalents=8_000,
        ),
        make_snapshot(
            2022,
            revenue=85_000,
            cost_of_goods_sold=61_200,
            gross_profit=23_800,
            operating_expenses=10_200,
            net_profit=8_500,
            receivables=18_000,
            inventory=24_000,
            cash_and_equivalents=7_500,
        ),
    ]
