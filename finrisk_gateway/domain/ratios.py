"""Standard financial ratios for a single fiscal year"""

from dataclasses import dataclass
from typing import Optional

from finrisk_gateway.domain.models import FinancialSnapshot
from finrisk_gateway.utils.math_utils import safe_divide


@dataclass
class LiquidityRatios:
    current_ratio: Optional[float]
    quick_ratio: Optional[float]
    cash_ratio: Optional[float]


@dataclass
class ProfitabilityRatios:
    gross_margin: Optional[float]
    operating_margin: Optional[float]
    net_margin: Optional[float]
    roe: Optional[float]
    roa: Optional[float]


@dataclass
class LeverageRatios:
    debt_to_equity: Optional[float]
    debt_to_assets: Optional[float]


@dataclass
class ActivityRatios:
    asset_turnover: Optional[float]
    inventory_turnover: Optional[float]
    receivables_turnover: Optional[float]


@dataclass
class Ratios:
    """Ratio set for one year; a ratio is None when its divisor is zero"""

    year: int
    liquidity: LiquidityRatios
    profitability: ProfitabilityRatios
    leverage: LeverageRatios
    activity: ActivityRatios


def calculate_ratios(data: FinancialSnapshot) -> Ratios:
    """
    Compute liquidity, profitability, leverage and activity ratios.

    Margins are fractions of revenue (0.25 == 25%). Turnovers are
    times per year.
    """
    return Ratios(
        year=data.year,
        liquidity=LiquidityRatios(
            current_ratio=safe_divide(data.current_assets, data.current_liabilities),
            quick_ratio=safe_divide(data.current_assets - data.inventory, data.current_liabilities),
            cash_ratio=safe_divide(data.cash_and_equivalents, data.current_liabilities),
        ),
        profitability=ProfitabilityRatios(
            gross_margin=safe_divide(data.gross_profit, data.revenue),
            operating_margin=safe_divide(data.operating_profit, data.revenue),
            net_margin=safe_divide(data.net_profit, data.revenue),
            roe=safe_divide(data.net_profit, data.equity),
            roa=safe_divide(data.net_profit, data.total_assets),
        ),
        leverage=LeverageRatios(
            debt_to_equity=safe_divide(data.total_liabilities, data.equity),
            debt_to_assets=safe_divide(data.total_liabilities, data.total_assets),
        ),
        activity=ActivityRatios(
            asset_turnover=safe_divide(data.revenue, data.total_assets),
            inventory_turnover=safe_divide(data.cost_of_goods_sold, data.inventory),
            receivables_turnover=safe_divide(data.revenue, data.receivables),
        ),
    )
