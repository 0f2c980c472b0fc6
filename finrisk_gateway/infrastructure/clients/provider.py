"""Financial data provider HTTP client for fetching company statements"""

import math
import httpx
from pydantic.alias_generators import to_snake
from typing import Any, Dict, List, Optional, Tuple
from finrisk_gateway.domain.models import FIGURE_FIELDS, CompanyInfo, FinancialSnapshot
from finrisk_gateway.domain.exceptions import InvalidFinancialDataError, ProviderAPIError
from finrisk_gateway.config import settings


class FinancialDataClient:
    """Client for the upstream financial data provider"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.provider_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def get_company_financials(self, tax_id: str) -> Tuple[CompanyInfo, List[FinancialSnapshot]]:
        """
        Fetch company profile and yearly statements.

        Raises:
            ProviderAPIError: On timeout, HTTP errors, or invalid response
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(f"{self.base_url}/companies/{tax_id}/financials")
                response.raise_for_status()
                data = response.json()

                return parse_company(data["company"]), parse_series(data.get("financials", []))

            except httpx.TimeoutException as e:
                raise ProviderAPIError(f"Provider API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise ProviderAPIError(f"Provider API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise ProviderAPIError(f"Provider API unreachable: {e}") from e
            except (KeyError, ValueError, TypeError, InvalidFinancialDataError) as e:
                raise ProviderAPIError(f"Invalid financial data from provider: {e}") from e


def parse_company(raw: Dict[str, Any]) -> CompanyInfo:
    return CompanyInfo(
        tax_id=raw["taxId"],
        name=raw["name"],
        address=raw.get("address", ""),
        representative=raw.get("representative", ""),
        date_founded=raw.get("dateFounded"),
    )


def parse_series(raw_items: List[Dict[str, Any]]) -> List[FinancialSnapshot]:
    """
    Parse camelCase statement records.

    Figures missing from a record default to 0 and must be finite;
    year is required and must be unique.
    """
    series = []
    seen = set()
    for raw in raw_items:
        year = int(raw["year"])
        if year in seen:
            raise InvalidFinancialDataError(f"Duplicate year {year}")
        seen.add(year)

        figures = {}
        for key, value in raw.items():
            name = to_snake(key)
            if name in FIGURE_FIELDS and value is not None:
                figure = float(value)
                if not math.isfinite(figure):
                    raise InvalidFinancialDataError(f"{key} for year {year} is not a finite number")
                figures[name] = figure
        series.append(FinancialSnapshot(year=year, **figures))
    return series
