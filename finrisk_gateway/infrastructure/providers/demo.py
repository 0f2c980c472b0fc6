"""Demo financial data provider for walkthroughs and the mock provider server"""

import random
from typing import List, Optional

from finrisk_gateway.domain.models import CompanyInfo, FinancialSnapshot

BASE_REVENUE = 80_000_000_000  # 80 billion VND in the latest year


def generate_demo_series(
    years: int = 6,
    latest_year: int = 2024,
    seed: Optional[int] = None,
) -> List[FinancialSnapshot]:
    """
    Generate a plausible multi-year series, newest year first.

    Shape:
    - Revenue trends down 12% per year going back, +/-10% volatility
    - Gross margin 25-30%, net margin 8-12%
    - Total assets 0.9x revenue, split 65% current / 35% non-current
    - Debt ratio 40% in the latest year, +2 points per year going back
    - Balance sheet always balances (equity = assets - liabilities)
    - Trial balance turnover 2.5x total assets, debit = credit

    The same seed always yields the same series.
    """
    rng = random.Random(seed)
    series = []

    for age in range(years):
        volatility = 1 + (rng.random() * 0.2 - 0.1)
        trend = 1 - (age * 0.12)
        revenue = BASE_REVENUE * trend * volatility

        gross_margin = 0.25 + rng.random() * 0.05
        net_margin = 0.08 + rng.random() * 0.04

        gross_profit = revenue * gross_margin
        operating_expenses = revenue * 0.12
        net_profit = revenue * net_margin

        total_assets = revenue * 0.9
        current_assets = total_assets * 0.65
        non_current_assets = total_assets * 0.35

        debt_ratio = 0.4 + age * 0.02
        total_liabilities = total_assets * debt_ratio
        equity = total_assets - total_liabilities

        net_cash_operating = net_profit * 1.3
        net_cash_investing = -(non_current_assets * 0.15)
        net_cash_financing = -(total_liabilities * 0.1)

        series.append(
            FinancialSnapshot(
                year=latest_year - age,
                revenue=revenue,
                cost_of_goods_sold=revenue - gross_profit,
                gross_profit=gross_profit,
                operating_expenses=operating_expenses,
                operating_profit=gross_profit - operating_expenses,
                financial_income=revenue * 0.008,
                financial_expenses=revenue * 0.03,
                other_income=revenue * 0.005,
                other_expenses=revenue * 0.002,
                net_profit=net_profit,
                total_assets=total_assets,
                current_assets=current_assets,
                cash_and_equivalents=current_assets * 0.15,
                receivables=current_assets * 0.35,
                inventory=current_assets * 0.45,
                non_current_assets=non_current_assets,
                fixed_assets=non_current_assets * 0.85,
                total_liabilities=total_liabilities,
                current_liabilities=total_liabilities * 0.75,
                non_current_liabilities=total_liabilities * 0.25,
                equity=equity,
                retained_earnings=equity * 0.25,
                net_cash_operating=net_cash_operating,
                net_cash_investing=net_cash_investing,
                net_cash_financing=net_cash_financing,
                net_cash_flow=net_cash_operating + net_cash_investing + net_cash_financing,
                trial_balance_total_debit=total_assets * 2.5,
                trial_balance_total_credit=total_assets * 2.5,
            )
        )

    return series


def demo_company(tax_id: str = "0101999888") -> CompanyInfo:
    """Company profile shown alongside the demo series"""
    return CompanyInfo(
        tax_id=tax_id,
        name="CÔNG TY CỔ PHẦN TẬP ĐOÀN FINAI",
        address="Tầng 12, Tòa nhà FinAI, Cầu Giấy, Hà Nội",
        representative="Nguyễn Văn A",
        date_founded="2010-01-01",
    )
