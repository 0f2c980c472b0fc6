"""Unit tests for horizontal and vertical statement analysis"""

import pytest
from finrisk_gateway.domain.trends import (
    LINE_ITEMS,
    Statement,
    TrendMode,
    analyze_trends,
    horizontal_analysis,
    vertical_analysis,
)


def row(table, field_name):
    return next(r for r in table.rows if r.field == field_name)


def test_horizontal_change_vs_prior_year(healthy_series):
    table = horizontal_analysis(healthy_series, Statement.INCOME_STATEMENT)

    assert table.mode is TrendMode.HORIZONTAL
    assert table.years == [2024, 2023, 2022]
    assert len(table.rows) == len(LINE_ITEMS[Statement.INCOME_STATEMENT])

    revenue = row(table, "revenue")
    assert revenue.label == "1. Doanh thu thuần"
    assert revenue.cells[0].value == 100_000
    assert revenue.cells[0].change == pytest.approx(8_000 / 92_000)
    # Oldest year has nothing to compare against
    assert revenue.cells[-1].change is None


def test_horizontal_matches_prior_year_by_year_not_position(make_snapshot):
    """Test 2024 + 2022 only: 2024 has no 2023 to compare against"""
    series = [make_snapshot(2022, revenue=50), make_snapshot(2024, revenue=100)]
    revenue = row(horizontal_analysis(series, Statement.INCOME_STATEMENT), "revenue")

    assert [cell.year for cell in revenue.cells] == [2024, 2022]
    assert all(cell.change is None for cell in revenue.cells)


def test_horizontal_zero_base_is_none(make_snapshot):
    series = [make_snapshot(2024, other_income=10), make_snapshot(2023, other_income=0)]
    other_income = row(horizontal_analysis(series, Statement.INCOME_STATEMENT), "other_income")

    assert other_income.cells[0].change is None


def test_vertical_default_base(healthy_series):
    table = vertical_analysis(healthy_series, Statement.BALANCE_SHEET)

    assert table.base_field == "total_assets"
    assert row(table, "total_assets").cells[0].share == pytest.approx(1.0)
    assert row(table, "total_liabilities").cells[0].share == pytest.approx(0.4)
    assert row(table, "equity").cells[0].share == pytest.approx(0.6)


def test_vertical_custom_base(healthy_series):
    table = vertical_analysis(healthy_series, Statement.INCOME_STATEMENT, base_field="gross_profit")

    assert table.base_field == "gross_profit"
    assert row(table, "gross_profit").cells[0].share == pytest.approx(1.0)


def test_vertical_zero_base_is_none(make_snapshot):
    table = vertical_analysis([make_snapshot(2024, revenue=0)], Statement.INCOME_STATEMENT)
    assert row(table, "net_profit").cells[0].share is None


def test_analyze_trends_dispatches_on_mode(healthy_series):
    assert analyze_trends(healthy_series, Statement.CASH_FLOW, TrendMode.VERTICAL).mode is TrendMode.VERTICAL
    assert analyze_trends(healthy_series, Statement.CASH_FLOW, TrendMode.HORIZONTAL).base_field is None


def test_empty_series_yields_empty_cells():
    table = horizontal_analysis([], Statement.BALANCE_SHEET)

    assert table.years == []
    assert all(r.cells == [] for r in table.rows)


def test_trial_balance_statement(make_snapshot):
    series = [
        make_snapshot(2024, trial_balance_total_debit=250_000, trial_balance_total_credit=250_000),
        make_snapshot(2023, trial_balance_total_debit=200_000, trial_balance_total_credit=200_000),
    ]
    table = horizontal_analysis(series, Statement.TRIAL_BALANCE)

    assert [r.field for r in table.rows] == ["trial_balance_total_debit", "trial_balance_total_credit"]
    assert table.rows[0].label == "Tổng phát sinh Nợ"
    assert table.rows[0].cells[0].change == pytest.approx(0.25)

    vertical = vertical_analysis(series, Statement.TRIAL_BALANCE)
    assert vertical.base_field == "trial_balance_total_debit"
    assert row(vertical, "trial_balance_total_credit").cells[0].share == pytest.approx(1.0)
