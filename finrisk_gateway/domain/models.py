"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence


@dataclass(frozen=True)
class FinancialSnapshot:
    """One fiscal year of financial statement figures (VND)"""

    year: int

    # Income statement
    revenue: float = 0.0
    cost_of_goods_sold: float = 0.0
    gross_profit: float = 0.0
    operating_expenses: float = 0.0  # selling + admin
    operating_profit: float = 0.0
    financial_income: float = 0.0
    financial_expenses: float = 0.0
    other_income: float = 0.0
    other_expenses: float = 0.0
    net_profit: float = 0.0  # may be negative

    # Balance sheet
    total_assets: float = 0.0
    current_assets: float = 0.0
    cash_and_equivalents: float = 0.0
    receivables: float = 0.0
    inventory: float = 0.0
    non_current_assets: float = 0.0
    fixed_assets: float = 0.0
    total_liabilities: float = 0.0
    current_liabilities: float = 0.0
    non_current_liabilities: float = 0.0
    equity: float = 0.0
    retained_earnings: float = 0.0  # may be negative

    # Cash flow (all may be negative)
    net_cash_operating: float = 0.0
    net_cash_investing: float = 0.0
    net_cash_financing: float = 0.0
    net_cash_flow: float = 0.0

    # Trial balance totals, 0 when the filing carries none
    trial_balance_total_debit: float = 0.0
    trial_balance_total_credit: float = 0.0


FIGURE_FIELDS = tuple(f.name for f in fields(FinancialSnapshot) if f.name != "year")

# Ordered snapshots for one company, one per distinct year
FinancialSeries = Sequence[FinancialSnapshot]


@dataclass
class CompanyInfo:
    """Company profile as extracted from the filed statements"""

    tax_id: str
    name: str
    address: str = ""
    representative: str = ""
    date_founded: Optional[str] = None


class RiskGroup(str, Enum):
    """Catalog sections, in display order"""

    BALANCE_SHEET = "BALANCE_SHEET"
    INCOME_STATEMENT = "INCOME_STATEMENT"
    CASH_FLOW = "CASH_FLOW"
    HORIZONTAL_VERTICAL_ANALYSIS = "HORIZONTAL_VERTICAL_ANALYSIS"


GROUP_TITLES = {
    RiskGroup.BALANCE_SHEET: "I. RỦI RO BẢNG CÂN ĐỐI KẾ TOÁN",
    RiskGroup.INCOME_STATEMENT: "II. RỦI RO KẾT QUẢ KINH DOANH",
    RiskGroup.CASH_FLOW: "III. RỦI RO LƯU CHUYỂN TIỀN TỆ",
    RiskGroup.HORIZONTAL_VERTICAL_ANALYSIS: "IV. PHÂN TÍCH NGANG & DỌC",
}


class Verdict(str, Enum):
    SAFE = "SAFE"
    RISK = "RISK"
    WARNING = "WARNING"
    UNKNOWN = "UNKNOWN"


class ZeroDivisorPolicy(str, Enum):
    """How a rule resolves when one of its divisors is exactly zero"""

    UNKNOWN = "unknown"  # report as not evaluable
    TRIGGER = "trigger"  # report the rule's trigger verdict


def index_by_year(series: FinancialSeries) -> Dict[int, FinancialSnapshot]:
    """Map year -> snapshot; when a year appears twice the first occurrence wins"""
    by_year: Dict[int, FinancialSnapshot] = {}
    for snapshot in series:
        by_year.setdefault(snapshot.year, snapshot)
    return by_year


class EvaluationContext:
    """
    Read-only view of a series anchored at the evaluation year.

    Snapshots are looked up by year, so position in the input series
    does not matter.
    """

    def __init__(self, series: FinancialSeries, evaluation_year: int):
        self.evaluation_year = evaluation_year
        self._by_year = index_by_year(series)

    def year(self, offset: int = 0) -> Optional[FinancialSnapshot]:
        """Snapshot for evaluation_year - offset, or None if absent"""
        return self._by_year.get(self.evaluation_year - offset)

    @property
    def current(self) -> Optional[FinancialSnapshot]:
        return self.year(0)

    @property
    def previous(self) -> Optional[FinancialSnapshot]:
        return self.year(1)


Predicate = Callable[[EvaluationContext], Verdict]


@dataclass(frozen=True)
class RiskRule:
    """Catalog entry for one red-flag heuristic"""

    id: int
    group: RiskGroup
    name: str
    condition_description: str
    explanation: str
    predicate: Optional[Predicate] = field(default=None, compare=False, repr=False)
    trigger_verdict: Optional[Verdict] = None

    @property
    def quantified(self) -> bool:
        """False for descriptive-only rules that have no automatic check yet"""
        return self.predicate is not None


@dataclass(frozen=True)
class RuleResult:
    """Verdict for one rule at one evaluation year"""

    rule: RiskRule
    verdict: Verdict


@dataclass
class GroupReport:
    """Results of one catalog group, in catalog order"""

    group: RiskGroup
    title: str
    results: List[RuleResult]

    @property
    def rule_count(self) -> int:
        return len(self.results)


class IntegrityCheck(str, Enum):
    BALANCE_SHEET = "BALANCE_SHEET"  # total assets vs liabilities + equity
    TRIAL_BALANCE = "TRIAL_BALANCE"  # total debit vs total credit


@dataclass
class IntegrityIssue:
    """Snapshot whose two sides of an accounting identity disagree"""

    year: int
    check: IntegrityCheck
    left_total: float
    right_total: float
    gap: float  # left_total - right_total


@dataclass
class RiskReport:
    """Output of a full risk screen"""

    evaluation_year: int
    compared_year: Optional[int]
    evaluated: bool
    results: List[RuleResult]
    groups: List[GroupReport]
    verdict_counts: Dict[Verdict, int]
    integrity_warnings: List[IntegrityIssue] = field(default_factory=list)
