"""Integration tests for API endpoints"""

import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient
from finrisk_gateway.domain.exceptions import ProviderAPIError
from finrisk_gateway.domain.models import CompanyInfo
from finrisk_gateway.infrastructure.providers.demo import demo_company, generate_demo_series

BASE_STATEMENT = {
    "revenue": 100_000,
    "costOfGoodsSold": 72_000,
    "grossProfit": 28_000,
    "operatingExpenses": 12_000,
    "operatingProfit": 16_000,
    "netProfit": 10_000,
    "totalAssets": 90_000,
    "currentAssets": 58_500,
    "cashAndEquivalents": 8_775,
    "receivables": 20_475,
    "inventory": 26_325,
    "totalLiabilities": 36_000,
    "currentLiabilities": 27_000,
    "equity": 54_000,
    "retainedEarnings": 13_500,
    "netCashOperating": 13_000,
    "netCashFinancing": -3_600,
    "netCashFlow": 4_675,
}


def statement(year, **overrides):
    return {"year": year, **BASE_STATEMENT, **overrides}


def verdicts(report):
    return {rule["id"]: rule["verdict"] for group in report["groups"] for rule in group["results"]}


@pytest.fixture
def stored_company(client: TestClient):
    """Company with 2024 and 2023 statements"""
    response = client.put(
        "/v1/companies/0101234567",
        json={
            "company": {"name": "Công ty Kiểm thử", "address": "Hà Nội"},
            "financials": [statement(2024), statement(2023, revenue=95_000)],
        },
    )
    assert response.status_code == 200
    return "0101234567"


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/risk/evaluate", json={"financials": [statement(2024)]})

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "finrisk_evaluation_total" in response.text
    assert "finrisk_rule_verdict_total" in response.text


def test_request_id_propagated(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_list_rules(client: TestClient):
    """Test GET /v1/rules returns the full grouped catalog"""
    response = client.get("/v1/rules")

    assert response.status_code == 200
    data = response.json()
    assert data["rule_count"] == 45
    assert [g["rule_count"] for g in data["groups"]] == [15, 14, 6, 10]
    first = data["groups"][0]["rules"][0]
    assert first["id"] == 1
    assert first["quantified"] is True
    assert first["trigger_verdict"] == "RISK"


def test_evaluate_risk_camel_case_input(client: TestClient):
    """Test POST /v1/risk/evaluate defaults to the newest year"""
    response = client.post(
        "/v1/risk/evaluate",
        json={"financials": [statement(2023), statement(2024, totalLiabilities=300, equity=90)]},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["evaluation_year"] == 2024
    assert data["compared_year"] == 2023
    assert data["evaluated"] is True
    assert data["available_years"] == [2024, 2023]
    assert sum(data["verdict_counts"].values()) == 45
    assert verdicts(data)[12] == "RISK"


def test_evaluate_risk_snake_case_input(client: TestClient):
    response = client.post(
        "/v1/risk/evaluate",
        json={"evaluation_year": 2024, "financials": [{"year": 2024, "total_assets": 100, "total_liabilities": 81}]},
    )

    assert response.status_code == 200
    assert verdicts(response.json())[41] == "RISK"


def test_evaluate_risk_missing_year_all_unknown(client: TestClient):
    response = client.post(
        "/v1/risk/evaluate",
        json={"evaluation_year": 2030, "financials": [statement(2024)]},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["evaluated"] is False
    assert data["verdict_counts"]["UNKNOWN"] == 45


def test_evaluate_risk_duplicate_years_rejected(client: TestClient):
    response = client.post("/v1/risk/evaluate", json={"financials": [statement(2024), statement(2024)]})
    assert response.status_code == 422


def test_evaluate_risk_empty_series_needs_year(client: TestClient):
    assert client.post("/v1/risk/evaluate", json={"financials": []}).status_code == 422

    response = client.post("/v1/risk/evaluate", json={"financials": [], "evaluation_year": 2024})
    assert response.status_code == 200
    assert response.json()["verdict_counts"]["UNKNOWN"] == 45


def test_evaluate_risk_integrity_warning(client: TestClient):
    response = client.post("/v1/risk/evaluate", json={"financials": [statement(2024, equity=10_000)]})

    warnings = response.json()["integrity_warnings"]
    assert len(warnings) == 1
    assert warnings[0]["check"] == "BALANCE_SHEET"
    assert warnings[0]["gap"] == 44_000


def test_compute_ratios_null_on_zero(client: TestClient):
    """Test POST /v1/ratios returns null for undefined ratios"""
    response = client.post("/v1/ratios", json=statement(2024, currentLiabilities=0))

    assert response.status_code == 200
    data = response.json()
    assert data["year"] == 2024
    assert data["liquidity"]["current_ratio"] is None
    assert data["leverage"]["debt_to_assets"] == pytest.approx(0.4)


def test_compute_trends_horizontal(client: TestClient):
    response = client.post(
        "/v1/trends",
        json={
            "statement": "INCOME_STATEMENT",
            "financials": [statement(2023, revenue=80_000), statement(2024)],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["years"] == [2024, 2023]
    revenue = next(row for row in data["rows"] if row["field"] == "revenue")
    assert revenue["cells"][0]["change"] == pytest.approx(0.25)
    assert revenue["cells"][1]["change"] is None


def test_compute_trends_vertical_camel_base_field(client: TestClient):
    response = client.post(
        "/v1/trends",
        json={
            "statement": "BALANCE_SHEET",
            "mode": "vertical",
            "base_field": "totalAssets",
            "financials": [statement(2024)],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["base_field"] == "total_assets"
    equity = next(row for row in data["rows"] if row["field"] == "equity")
    assert equity["cells"][0]["share"] == pytest.approx(0.6)


def test_compute_trends_unknown_base_field(client: TestClient):
    response = client.post(
        "/v1/trends",
        json={"statement": "BALANCE_SHEET", "mode": "vertical", "base_field": "goodwill", "financials": []},
    )
    assert response.status_code == 422


def test_upsert_and_get_company(client: TestClient, stored_company: str):
    """Test PUT /v1/companies/{tax_id} then GET returns camelCase series newest first"""
    response = client.get(f"/v1/companies/{stored_company}")

    assert response.status_code == 200
    data = response.json()
    assert data["company"]["tax_id"] == stored_company
    assert data["available_years"] == [2024, 2023]
    assert data["financials"][1]["revenue"] == 95_000
    assert "costOfGoodsSold" in data["financials"][0]


def test_upsert_keeps_other_years(client: TestClient, stored_company: str):
    response = client.put(
        f"/v1/companies/{stored_company}",
        json={"company": {"name": "Tên mới"}, "financials": [statement(2023, revenue=50_000), statement(2022)]},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["company"]["name"] == "Tên mới"
    assert data["available_years"] == [2024, 2023, 2022]
    assert data["financials"][1]["revenue"] == 50_000


def test_get_company_not_found(client: TestClient):
    response = client.get("/v1/companies/0000000000")
    assert response.status_code == 404


def test_get_company_risk(client: TestClient, stored_company: str):
    response = client.get(f"/v1/companies/{stored_company}/risk")

    assert response.status_code == 200
    data = response.json()
    assert data["tax_id"] == stored_company
    assert data["evaluation_year"] == 2024
    assert data["verdict_counts"]["RISK"] == 0


def test_get_company_risk_explicit_year(client: TestClient, stored_company: str):
    data = client.get(f"/v1/companies/{stored_company}/risk", params={"year": 2023}).json()

    assert data["evaluation_year"] == 2023
    assert data["compared_year"] is None
    assert verdicts(data)[22] == "UNKNOWN"


def test_get_company_risk_not_found(client: TestClient):
    assert client.get("/v1/companies/0000000000/risk").status_code == 404


def test_get_company_risk_without_statements(client: TestClient):
    client.put("/v1/companies/0109999999", json={"company": {"name": "Trống"}})

    assert client.get("/v1/companies/0109999999/risk").status_code == 404


def test_get_company_ratios(client: TestClient, stored_company: str):
    response = client.get(f"/v1/companies/{stored_company}/ratios", params={"year": 2024})

    assert response.status_code == 200
    assert response.json()["profitability"]["net_margin"] == pytest.approx(0.1)


def test_get_company_ratios_year_not_found(client: TestClient, stored_company: str):
    response = client.get(f"/v1/companies/{stored_company}/ratios", params={"year": 2010})
    assert response.status_code == 404


@patch("finrisk_gateway.infrastructure.clients.provider.FinancialDataClient.get_company_financials")
def test_sync_company(mock_provider: AsyncMock, client: TestClient):
    """Test POST /v1/companies/{tax_id}/sync stores the provider series"""
    mock_provider.return_value = (demo_company("0101999888"), generate_demo_series(years=3, seed=1))

    response = client.post("/v1/companies/0101999888/sync")

    assert response.status_code == 200
    assert response.json()["years_imported"] == [2024, 2023, 2022]

    stored = client.get("/v1/companies/0101999888").json()
    assert stored["available_years"] == [2024, 2023, 2022]
    assert stored["company"]["name"] == demo_company().name


@patch("finrisk_gateway.infrastructure.clients.provider.FinancialDataClient.get_company_financials")
def test_sync_company_uses_path_tax_id(mock_provider: AsyncMock, client: TestClient):
    info = CompanyInfo(tax_id="something-else", name="Cty")
    mock_provider.return_value = (info, generate_demo_series(years=1, seed=1))

    client.post("/v1/companies/0105555555/sync")

    assert client.get("/v1/companies/0105555555").status_code == 200


@patch("finrisk_gateway.infrastructure.clients.provider.FinancialDataClient.get_company_financials")
def test_sync_company_provider_error(mock_provider: AsyncMock, client: TestClient):
    """Test provider failure returns 503 and stores nothing"""
    mock_provider.side_effect = ProviderAPIError("Provider API timeout")

    response = client.post("/v1/companies/0101999888/sync")

    assert response.status_code == 503
    assert client.get("/v1/companies/0101999888").status_code == 404


def test_demo_financials(client: TestClient):
    """Test GET /v1/demo/financials is reproducible with a seed"""
    first = client.get("/v1/demo/financials", params={"years": 3, "seed": 5})
    second = client.get("/v1/demo/financials", params={"years": 3, "seed": 5})

    assert first.status_code == 200
    assert first.json() == second.json()
    assert [s["year"] for s in first.json()["financials"]] == [2024, 2023, 2022]


def test_demo_financials_rejects_bad_years(client: TestClient):
    assert client.get("/v1/demo/financials", params={"years": 0}).status_code == 422


@pytest.mark.parametrize("bad_value", ["NaN", "Infinity", "-Infinity"])
def test_evaluate_risk_rejects_non_finite_figures(client: TestClient, bad_value: str):
    """Test NaN/Infinity figures are rejected instead of screening as SAFE"""
    body = '{"financials": [{"year": 2024, "totalAssets": 100, "equity": 100, "totalLiabilities": %s}]}' % bad_value

    response = client.post("/v1/risk/evaluate", content=body, headers={"Content-Type": "application/json"})

    assert response.status_code == 422


def test_compute_ratios_rejects_non_finite_figures(client: TestClient):
    response = client.post(
        "/v1/ratios",
        content='{"year": 2024, "revenue": NaN}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422


def test_trial_balance_round_trip(client: TestClient):
    """Test trial balance totals are stored, returned in camelCase and checked"""
    response = client.put(
        "/v1/companies/0107777777",
        json={
            "company": {"name": "Công ty Sổ cái"},
            "financials": [statement(2024, trialBalanceTotalDebit=250_000, trialBalanceTotalCredit=240_000)],
        },
    )

    assert response.status_code == 200
    stored = response.json()["financials"][0]
    assert stored["trialBalanceTotalDebit"] == 250_000
    assert stored["trialBalanceTotalCredit"] == 240_000

    warnings = client.get("/v1/companies/0107777777/risk").json()["integrity_warnings"]
    assert [w["check"] for w in warnings] == ["TRIAL_BALANCE"]
    assert warnings[0]["gap"] == 10_000
