"""
Automatic checks backing the quantified catalog rules.

Every check takes an EvaluationContext and returns a Verdict. Checks
raise MissingYearError when a comparison year is absent,
NonFiniteFigureError when a snapshot they read carries NaN or Infinity,
and UndefinedRatioError when a divisor is zero. The screening engine
turns each into a verdict for that rule alone.
"""

import math

from finrisk_gateway.domain.exceptions import MissingYearError, NonFiniteFigureError, UndefinedRatioError
from finrisk_gateway.domain.models import FIGURE_FIELDS, EvaluationContext, FinancialSnapshot, Verdict
from finrisk_gateway.utils.math_utils import safe_divide


def require(ctx: EvaluationContext, offset: int = 0) -> FinancialSnapshot:
    """Snapshot at evaluation_year - offset with every figure finite"""
    snapshot = ctx.year(offset)
    if snapshot is None:
        raise MissingYearError(ctx.evaluation_year - offset)
    for name in FIGURE_FIELDS:
        if not math.isfinite(getattr(snapshot, name)):
            raise NonFiniteFigureError(snapshot.year, name)
    return snapshot


def ratio(numerator: float, denominator: float) -> float:
    value = safe_divide(numerator, denominator)
    if value is None:
        raise UndefinedRatioError("Divisor is zero or ratio is not finite")
    return value


def growth(current: float, previous: float) -> float:
    """(current - previous) / previous"""
    return ratio(current - previous, previous)


def flag(triggered: bool, verdict: Verdict) -> Verdict:
    return verdict if triggered else Verdict.SAFE


# --- Balance sheet ---


def cash_spike_with_falling_revenue(ctx: EvaluationContext) -> Verdict:
    c, p = require(ctx), require(ctx, 1)
    return flag(
        c.cash_and_equivalents > p.cash_and_equivalents * 1.5 and c.revenue < p.revenue,
        Verdict.RISK,
    )


def receivables_share_of_assets(ctx: EvaluationContext) -> Verdict:
    c = require(ctx)
    return flag(ratio(c.receivables, c.total_assets) > 0.4, Verdict.RISK)


def receivables_growth_vs_revenue(ctx: EvaluationContext) -> Verdict:
    c, p = require(ctx), require(ctx, 1)
    receivables_growth = growth(c.receivables, p.receivables)
    revenue_growth = growth(c.revenue, p.revenue)
    return flag(receivables_growth > 0.3 and revenue_growth < 0, Verdict.RISK)


def inventory_share_of_assets(ctx: EvaluationContext) -> Verdict:
    c = require(ctx)
    return flag(ratio(c.inventory, c.total_assets) > 0.5, Verdict.RISK)


def inventory_drop_without_sales(ctx: EvaluationContext) -> Verdict:
    c, p = require(ctx), require(ctx, 1)
    return flag(
        c.inventory < p.inventory * 0.7 and c.revenue <= p.revenue * 1.05,
        Verdict.WARNING,
    )


def debt_to_equity(ctx: EvaluationContext) -> Verdict:
    c = require(ctx)
    return flag(ratio(c.total_liabilities, c.equity) > 3.0, Verdict.RISK)


def payout_with_accumulated_losses(ctx: EvaluationContext) -> Verdict:
    # Financing outflow stands in for dividends paid
    c = require(ctx)
    return flag(c.retained_earnings < 0 and c.net_cash_financing < 0, Verdict.WARNING)


# --- Income statement ---


def revenue_swing(ctx: EvaluationContext) -> Verdict:
    c, p = require(ctx), require(ctx, 1)
    return flag(abs(growth(c.revenue, p.revenue)) > 0.3, Verdict.WARNING)


def cost_of_goods_share(ctx: EvaluationContext) -> Verdict:
    c = require(ctx)
    return flag(ratio(c.cost_of_goods_sold, c.revenue) > 0.95, Verdict.RISK)


def thin_gross_margin(ctx: EvaluationContext) -> Verdict:
    c = require(ctx)
    return flag(ratio(c.gross_profit, c.revenue) < 0.05, Verdict.WARNING)


def operating_expense_jump(ctx: EvaluationContext) -> Verdict:
    c, p = require(ctx), require(ctx, 1)
    return flag(growth(c.operating_expenses, p.operating_expenses) > 0.2, Verdict.WARNING)


def consecutive_losses(ctx: EvaluationContext) -> Verdict:
    c, p = require(ctx), require(ctx, 1)
    return flag(c.net_profit < 0 and p.net_profit < 0, Verdict.RISK)


def thin_pretax_margin(ctx: EvaluationContext) -> Verdict:
    # Net profit stands in for profit before tax
    c = require(ctx)
    return flag(ratio(c.net_profit, c.revenue) < 0.01, Verdict.WARNING)


# --- Cash flow ---


def profit_without_operating_cash(ctx: EvaluationContext) -> Verdict:
    c = require(ctx)
    return flag(c.net_cash_operating < 0 and c.net_profit > 0, Verdict.RISK)


def negative_cash_flow_three_years(ctx: EvaluationContext) -> Verdict:
    years = [require(ctx, offset) for offset in range(3)]
    return flag(all(s.net_cash_flow < 0 for s in years), Verdict.RISK)


# --- Horizontal & vertical analysis ---


def receivables_to_revenue_doubling(ctx: EvaluationContext) -> Verdict:
    c, p = require(ctx), require(ctx, 1)
    current_ratio = ratio(c.receivables, c.revenue)
    previous_ratio = ratio(p.receivables, p.revenue)
    return flag(current_ratio > previous_ratio * 2, Verdict.RISK)


def debt_to_assets(ctx: EvaluationContext) -> Verdict:
    c = require(ctx)
    return flag(ratio(c.total_liabilities, c.total_assets) > 0.8, Verdict.RISK)


def inventory_to_revenue(ctx: EvaluationContext) -> Verdict:
    c = require(ctx)
    return flag(ratio(c.inventory, c.revenue) > 0.7, Verdict.RISK)


def low_return_on_equity(ctx: EvaluationContext) -> Verdict:
    c = require(ctx)
    return flag(ratio(c.net_profit, c.equity) < 0.05, Verdict.WARNING)


def low_return_on_assets(ctx: EvaluationContext) -> Verdict:
    c = require(ctx)
    return flag(ratio(c.net_profit, c.total_assets) < 0.02, Verdict.WARNING)


def low_quick_ratio(ctx: EvaluationContext) -> Verdict:
    c = require(ctx)
    return flag(ratio(c.current_assets - c.inventory, c.current_liabilities) < 0.5, Verdict.RISK)
