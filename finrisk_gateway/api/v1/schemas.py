"""Pydantic schemas for API request/response validation"""

from dataclasses import asdict
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel, to_snake
from typing import Dict, List, Optional

from finrisk_gateway.domain.models import (
    FIGURE_FIELDS,
    CompanyInfo,
    FinancialSnapshot,
    IntegrityCheck,
    RiskGroup,
    RiskReport,
    RiskRule,
    Verdict,
)
from finrisk_gateway.domain.trends import Statement, TrendMode


class FinancialSnapshotSchema(BaseModel):
    """
    One fiscal year of figures.

    Serialized with the camelCase names used by accounting data
    providers; snake_case is accepted on input. Missing figures are 0;
    NaN and Infinity are rejected.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)

    year: int = Field(..., ge=1900, le=2200)

    # Income statement
    revenue: float = 0.0
    cost_of_goods_sold: float = 0.0
    gross_profit: float = 0.0
    operating_expenses: float = 0.0
    operating_profit: float = 0.0
    financial_income: float = 0.0
    financial_expenses: float = 0.0
    other_income: float = 0.0
    other_expenses: float = 0.0
    net_profit: float = 0.0

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
    retained_earnings: float = 0.0

    # Cash flow
    net_cash_operating: float = 0.0
    net_cash_investing: float = 0.0
    net_cash_financing: float = 0.0
    net_cash_flow: float = 0.0

    # Trial balance
    trial_balance_total_debit: float = 0.0
    trial_balance_total_credit: float = 0.0

    def to_domain(self) -> FinancialSnapshot:
        return FinancialSnapshot(**self.model_dump(by_alias=False))

    @classmethod
    def from_domain(cls, snapshot: FinancialSnapshot) -> "FinancialSnapshotSchema":
        return cls(**asdict(snapshot))


def _unique_years(financials: List[FinancialSnapshotSchema]) -> List[FinancialSnapshotSchema]:
    years = [item.year for item in financials]
    duplicates = sorted({year for year in years if years.count(year) > 1})
    if duplicates:
        raise ValueError(f"Duplicate fiscal years: {duplicates}")
    return financials


class SeriesRequest(BaseModel):
    """Request body carrying a company's yearly series"""

    financials: List[FinancialSnapshotSchema] = Field(default_factory=list)

    @field_validator("financials")
    @classmethod
    def years_must_be_unique(cls, value: List[FinancialSnapshotSchema]) -> List[FinancialSnapshotSchema]:
        return _unique_years(value)

    def series(self) -> List[FinancialSnapshot]:
        return [item.to_domain() for item in self.financials]


class EvaluateRequest(SeriesRequest):
    """Request body for POST /v1/risk/evaluate"""

    evaluation_year: Optional[int] = Field(None, description="Defaults to the newest year in financials")


class TrendRequest(SeriesRequest):
    """Request body for POST /v1/trends"""

    statement: Statement
    mode: TrendMode = TrendMode.HORIZONTAL
    base_field: Optional[str] = Field(None, description="Vertical mode base, e.g. revenue or totalAssets")

    @field_validator("base_field")
    @classmethod
    def base_field_must_be_a_figure(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        name = to_snake(value)
        if name not in FIGURE_FIELDS:
            raise ValueError(f"Unknown figure: {value}")
        return name


class CompanyProfileSchema(BaseModel):
    """Company profile fields (tax id comes from the path)"""

    name: str = Field(..., min_length=1)
    address: str = ""
    representative: str = ""
    date_founded: Optional[str] = None


class CompanySchema(CompanyProfileSchema):
    tax_id: str

    @classmethod
    def from_domain(cls, info: CompanyInfo) -> "CompanySchema":
        return cls(**asdict(info))


class CompanyUpsertRequest(SeriesRequest):
    """Request body for PUT /v1/companies/{tax_id}"""

    company: CompanyProfileSchema


class CompanyResponse(BaseModel):
    """Response for company endpoints"""

    company: CompanySchema
    available_years: List[int]
    financials: List[FinancialSnapshotSchema]


class SyncResponse(BaseModel):
    """Response for POST /v1/companies/{tax_id}/sync"""

    tax_id: str
    years_imported: List[int]


class RuleSchema(BaseModel):
    """Catalog metadata for one rule"""

    id: int
    group: RiskGroup
    name: str
    condition_description: str
    explanation: str
    quantified: bool
    trigger_verdict: Optional[Verdict] = None

    @classmethod
    def from_domain(cls, rule: RiskRule) -> "RuleSchema":
        return cls(
            id=rule.id,
            group=rule.group,
            name=rule.name,
            condition_description=rule.condition_description,
            explanation=rule.explanation,
            quantified=rule.quantified,
            trigger_verdict=rule.trigger_verdict,
        )


class RuleGroupSchema(BaseModel):
    group: RiskGroup
    title: str
    rule_count: int
    rules: List[RuleSchema]


class CatalogResponse(BaseModel):
    """Response for GET /v1/rules"""

    rule_count: int
    groups: List[RuleGroupSchema]


class RuleVerdictSchema(RuleSchema):
    """Rule metadata plus its verdict for the evaluation year"""

    verdict: Verdict


class GroupReportSchema(BaseModel):
    group: RiskGroup
    title: str
    rule_count: int
    results: List[RuleVerdictSchema]


class IntegrityIssueSchema(BaseModel):
    year: int
    check: IntegrityCheck
    left_total: float
    right_total: float
    gap: float


class RiskReportResponse(BaseModel):
    """Response for risk screen endpoints"""

    tax_id: Optional[str] = None
    evaluation_year: int
    compared_year: Optional[int] = None
    evaluated: bool
    available_years: List[int]
    verdict_counts: Dict[Verdict, int]
    groups: List[GroupReportSchema]
    integrity_warnings: List[IntegrityIssueSchema]

    @classmethod
    def from_domain(
        cls,
        report: RiskReport,
        available_years: List[int],
        tax_id: Optional[str] = None,
    ) -> "RiskReportResponse":
        return cls(
            tax_id=tax_id,
            evaluation_year=report.evaluation_year,
            compared_year=report.compared_year,
            evaluated=report.evaluated,
            available_years=available_years,
            verdict_counts=report.verdict_counts,
            groups=[
                GroupReportSchema(
                    group=group.group,
                    title=group.title,
                    rule_count=group.rule_count,
                    results=[
                        RuleVerdictSchema(
                            **RuleSchema.from_domain(result.rule).model_dump(),
                            verdict=result.verdict,
                        )
                        for result in group.results
                    ],
                )
                for group in report.groups
            ],
            integrity_warnings=[IntegrityIssueSchema(**asdict(issue)) for issue in report.integrity_warnings],
        )


class _FromAttributes(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class LiquiditySchema(_FromAttributes):
    current_ratio: Optional[float]
    quick_ratio: Optional[float]
    cash_ratio: Optional[float]


class ProfitabilitySchema(_FromAttributes):
    gross_margin: Optional[float]
    operating_margin: Optional[float]
    net_margin: Optional[float]
    roe: Optional[float]
    roa: Optional[float]


class LeverageSchema(_FromAttributes):
    debt_to_equity: Optional[float]
    debt_to_assets: Optional[float]


class ActivitySchema(_FromAttributes):
    asset_turnover: Optional[float]
    inventory_turnover: Optional[float]
    receivables_turnover: Optional[float]


class RatiosResponse(_FromAttributes):
    """Ratio set for one year; null where the divisor is zero"""

    year: int
    liquidity: LiquiditySchema
    profitability: ProfitabilitySchema
    leverage: LeverageSchema
    activity: ActivitySchema


class TrendCellSchema(_FromAttributes):
    year: int
    value: float
    change: Optional[float] = None
    share: Optional[float] = None


class TrendRowSchema(_FromAttributes):
    label: str
    field: str
    cells: List[TrendCellSchema]


class TrendTableResponse(_FromAttributes):
    statement: Statement
    mode: TrendMode
    base_field: Optional[str] = None
    years: List[int]
    rows: List[TrendRowSchema]


class DemoResponse(BaseModel):
    """Response for GET /v1/demo/financials"""

    company: CompanySchema
    financials: List[FinancialSnapshotSchema]
