"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from finrisk_gateway.infrastructure.clients.provider import FinancialDataClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_provider_client() -> FinancialDataClient:
    """Provide financial data provider client instance"""
    return FinancialDataClient()
