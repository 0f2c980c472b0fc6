"""Risk screening engine - evaluates the red-flag catalog for one fiscal year"""

from typing import Dict, List, Sequence

from finrisk_gateway.domain.catalog import GROUP_ORDER, RULE_CATALOG
from finrisk_gateway.domain.exceptions import MissingYearError, NonFiniteFigureError, UndefinedRatioError
from finrisk_gateway.domain.integrity import balance_identity_gaps
from finrisk_gateway.domain.models import (
    GROUP_TITLES,
    EvaluationContext,
    FinancialSeries,
    GroupReport,
    RiskReport,
    RiskRule,
    RuleResult,
    Verdict,
    ZeroDivisorPolicy,
)


def evaluate_rule(
    rule: RiskRule,
    ctx: EvaluationContext,
    zero_divisor_policy: ZeroDivisorPolicy = ZeroDivisorPolicy.UNKNOWN,
) -> Verdict:
    """
    Run one rule's check against the anchored series.

    A missing comparison year or a NaN/Infinity figure resolves to
    UNKNOWN. A zero divisor resolves according to zero_divisor_policy.
    None of them aborts the screen.
    """
    if rule.predicate is None or ctx.current is None:
        return Verdict.UNKNOWN

    try:
        return rule.predicate(ctx)
    except (MissingYearError, NonFiniteFigureError):
        return Verdict.UNKNOWN
    except UndefinedRatioError:
        if zero_divisor_policy is ZeroDivisorPolicy.TRIGGER and rule.trigger_verdict is not None:
            return rule.trigger_verdict
        return Verdict.UNKNOWN


def evaluate(
    series: FinancialSeries,
    evaluation_year: int,
    *,
    catalog: Sequence[RiskRule] = RULE_CATALOG,
    zero_divisor_policy: ZeroDivisorPolicy = ZeroDivisorPolicy.UNKNOWN,
) -> List[RuleResult]:
    """
    Evaluate every catalog rule for evaluation_year.

    Returns one result per rule in catalog order. If evaluation_year is
    not in the series every rule is UNKNOWN and no check runs.
    """
    ctx = EvaluationContext(series, evaluation_year)

    if ctx.current is None:
        return [RuleResult(rule=rule, verdict=Verdict.UNKNOWN) for rule in catalog]

    return [
        RuleResult(rule=rule, verdict=evaluate_rule(rule, ctx, zero_divisor_policy))
        for rule in catalog
    ]


def group_results(results: List[RuleResult]) -> List[GroupReport]:
    """Split results into catalog groups, preserving catalog order within each"""
    by_group: Dict = {group: [] for group in GROUP_ORDER}
    for result in results:
        by_group.setdefault(result.rule.group, []).append(result)

    return [
        GroupReport(group=group, title=GROUP_TITLES[group], results=group_items)
        for group, group_items in by_group.items()
    ]


def count_verdicts(results: List[RuleResult]) -> Dict[Verdict, int]:
    counts = {verdict: 0 for verdict in Verdict}
    for result in results:
        counts[result.verdict] += 1
    return counts


def build_report(
    series: FinancialSeries,
    evaluation_year: int,
    *,
    catalog: Sequence[RiskRule] = RULE_CATALOG,
    zero_divisor_policy: ZeroDivisorPolicy = ZeroDivisorPolicy.UNKNOWN,
    integrity_tolerance: float = 0.01,
) -> RiskReport:
    """
    Main entry point: screen a company's series and package the verdicts.

    Returns the full RiskReport with per-group breakdown, verdict counts
    and any balance sheet integrity warnings for the evaluated years.
    """
    ctx = EvaluationContext(series, evaluation_year)
    results = evaluate(
        series,
        evaluation_year,
        catalog=catalog,
        zero_divisor_policy=zero_divisor_policy,
    )

    # Integrity warnings only for years the screen can look at
    window = [s for s in (ctx.year(offset) for offset in range(3)) if s is not None]

    return RiskReport(
        evaluation_year=evaluation_year,
        compared_year=ctx.previous.year if ctx.previous is not None else None,
        evaluated=ctx.current is not None,
        results=results,
        groups=group_results(results),
        verdict_counts=count_verdicts(results),
        integrity_warnings=balance_identity_gaps(window, tolerance=integrity_tolerance),
    )


def latest_year(series: FinancialSeries) -> int | None:
    """Newest fiscal year in the series, the default evaluation year"""
    if not series:
        return None
    return max(snapshot.year for snapshot in series)
