"""Horizontal (year-over-year) and vertical (common-size) statement analysis"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from finrisk_gateway.domain.models import FinancialSeries, index_by_year
from finrisk_gateway.utils.math_utils import pct_change, safe_divide


class Statement(str, Enum):
    BALANCE_SHEET = "BALANCE_SHEET"
    INCOME_STATEMENT = "INCOME_STATEMENT"
    CASH_FLOW = "CASH_FLOW"
    TRIAL_BALANCE = "TRIAL_BALANCE"


class TrendMode(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


# (label, snapshot field) in statement presentation order
LINE_ITEMS: Dict[Statement, Tuple[Tuple[str, str], ...]] = {
    Statement.INCOME_STATEMENT: (
        ("1. Doanh thu thuần", "revenue"),
        ("2. Giá vốn hàng bán", "cost_of_goods_sold"),
        ("3. Lợi nhuận gộp", "gross_profit"),
        ("4. Doanh thu tài chính", "financial_income"),
        ("5. Chi phí tài chính", "financial_expenses"),
        ("6. Chi phí bán hàng & QLDN", "operating_expenses"),
        ("7. Lợi nhuận thuần từ HĐKD", "operating_profit"),
        ("8. Thu nhập khác", "other_income"),
        ("9. Chi phí khác", "other_expenses"),
        ("10. Lợi nhuận sau thuế", "net_profit"),
    ),
    Statement.BALANCE_SHEET: (
        ("A. TÀI SẢN NGẮN HẠN", "current_assets"),
        ("I. Tiền và tương đương tiền", "cash_and_equivalents"),
        ("II. Các khoản phải thu ngắn hạn", "receivables"),
        ("III. Hàng tồn kho", "inventory"),
        ("B. TÀI SẢN DÀI HẠN", "non_current_assets"),
        ("I. Tài sản cố định", "fixed_assets"),
        ("TỔNG CỘNG TÀI SẢN", "total_assets"),
        ("C. NỢ PHẢI TRẢ", "total_liabilities"),
        ("I. Nợ ngắn hạn", "current_liabilities"),
        ("II. Nợ dài hạn", "non_current_liabilities"),
        ("D. VỐN CHỦ SỞ HỮU", "equity"),
        ("I. Lợi nhuận sau thuế chưa PP", "retained_earnings"),
    ),
    Statement.CASH_FLOW: (
        ("I. Lưu chuyển tiền từ HĐKD", "net_cash_operating"),
        ("II. Lưu chuyển tiền từ HĐĐT", "net_cash_investing"),
        ("III. Lưu chuyển tiền từ HĐTC", "net_cash_financing"),
        ("Lưu chuyển tiền thuần trong kỳ", "net_cash_flow"),
        ("Tiền và TĐ tiền cuối kỳ", "cash_and_equivalents"),
    ),
    Statement.TRIAL_BALANCE: (
        ("Tổng phát sinh Nợ", "trial_balance_total_debit"),
        ("Tổng phát sinh Có", "trial_balance_total_credit"),
    ),
}

DEFAULT_BASE_FIELD = {
    Statement.INCOME_STATEMENT: "revenue",
    Statement.BALANCE_SHEET: "total_assets",
    Statement.CASH_FLOW: "total_assets",
    Statement.TRIAL_BALANCE: "trial_balance_total_debit",
}


@dataclass
class TrendCell:
    year: int
    value: float
    change: Optional[float] = None  # horizontal: fraction vs prior year
    share: Optional[float] = None  # vertical: fraction of base field


@dataclass
class TrendRow:
    label: str
    field: str
    cells: List[TrendCell]


@dataclass
class TrendTable:
    statement: Statement
    mode: TrendMode
    years: List[int]
    rows: List[TrendRow]
    base_field: Optional[str] = None


def horizontal_analysis(series: FinancialSeries, statement: Statement) -> TrendTable:
    """Year-over-year change per line item; prior year is matched by year, not position"""
    by_year = index_by_year(series)
    years = sorted(by_year, reverse=True)

    rows = []
    for label, field_name in LINE_ITEMS[statement]:
        cells = []
        for year in years:
            value = getattr(by_year[year], field_name)
            prior = by_year.get(year - 1)
            change = pct_change(getattr(prior, field_name), value) if prior is not None else None
            cells.append(TrendCell(year=year, value=value, change=change))
        rows.append(TrendRow(label=label, field=field_name, cells=cells))

    return TrendTable(statement=statement, mode=TrendMode.HORIZONTAL, years=years, rows=rows)


def vertical_analysis(
    series: FinancialSeries,
    statement: Statement,
    base_field: Optional[str] = None,
) -> TrendTable:
    """Each line item as a share of base_field (revenue or total assets by default)"""
    base_field = base_field or DEFAULT_BASE_FIELD[statement]
    by_year = index_by_year(series)
    years = sorted(by_year, reverse=True)

    rows = []
    for label, field_name in LINE_ITEMS[statement]:
        cells = []
        for year in years:
            snapshot = by_year[year]
            value = getattr(snapshot, field_name)
            share = safe_divide(value, getattr(snapshot, base_field))
            cells.append(TrendCell(year=year, value=value, share=share))
        rows.append(TrendRow(label=label, field=field_name, cells=cells))

    return TrendTable(
        statement=statement,
        mode=TrendMode.VERTICAL,
        years=years,
        rows=rows,
        base_field=base_field,
    )


def analyze_trends(
    series: FinancialSeries,
    statement: Statement,
    mode: TrendMode,
    base_field: Optional[str] = None,
) -> TrendTable:
    if mode is TrendMode.VERTICAL:
        return vertical_analysis(series, statement, base_field)
    return horizontal_analysis(series, statement)
