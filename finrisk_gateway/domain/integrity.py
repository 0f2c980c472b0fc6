"""Accounting identity checks (assets = liabilities + equity, debit = credit)"""

from typing import List, Optional

from finrisk_gateway.domain.models import FinancialSeries, FinancialSnapshot, IntegrityCheck, IntegrityIssue


def _gap_issue(
    snapshot: FinancialSnapshot,
    check: IntegrityCheck,
    left_total: float,
    right_total: float,
    tolerance: float,
) -> Optional[IntegrityIssue]:
    gap = left_total - right_total
    scale = max(abs(left_total), abs(right_total), 1.0)
    if abs(gap) <= tolerance * scale:
        return None
    return IntegrityIssue(
        year=snapshot.year,
        check=check,
        left_total=left_total,
        right_total=right_total,
        gap=gap,
    )


def balance_identity_gaps(series: FinancialSeries, tolerance: float = 0.01) -> List[IntegrityIssue]:
    """
    Report snapshots whose total assets differ from liabilities + equity,
    or whose trial balance debit and credit totals differ, by more than
    tolerance (relative to the larger side).

    The trial balance is only checked when the snapshot carries one.
    Purely informational: an unbalanced snapshot is still screened.
    """
    issues = []
    for snapshot in series:
        issue = _gap_issue(
            snapshot,
            IntegrityCheck.BALANCE_SHEET,
            snapshot.total_assets,
            snapshot.total_liabilities + snapshot.equity,
            tolerance,
        )
        if issue is not None:
            issues.append(issue)

        if snapshot.trial_balance_total_debit or snapshot.trial_balance_total_credit:
            issue = _gap_issue(
                snapshot,
                IntegrityCheck.TRIAL_BALANCE,
                snapshot.trial_balance_total_debit,
                snapshot.trial_balance_total_credit,
                tolerance,
            )
            if issue is not None:
                issues.append(issue)

    return sorted(issues, key=lambda issue: issue.year, reverse=True)
