from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from clubfund.config import get_settings
from clubfund.db.models import (
    BalanceAggregation,
    ContributionRecord,
    ContributionType,
    FundSummary,
    Member,
    MemberBalance,
)
from clubfund.logging import get_logger
from clubfund.services.errors import OrphanedReference
from clubfund.utils.parse import coerce_amount


def _new_totals() -> dict[ContributionType, float]:
    return {contribution_type: 0.0 for contribution_type in ContributionType}


def aggregate(
    contributions: Iterable[ContributionRecord],
    members: Iterable[Member],
) -> BalanceAggregation:
    """Recompute every member balance from the full contribution set.

    Members without contributions are left out. Contributions pointing at a
    member id missing from ``members`` are collected in ``orphaned``, those
    with an unknown type in ``skipped``. Amounts go through ``coerce_amount``.
    Balances are ordered by member name (case-insensitive), then member id.
    """
    roster = {member.id: member for member in members}
    totals: dict[int, dict[ContributionType, float]] = {}
    orphaned: list[ContributionRecord] = []
    skipped: list[ContributionRecord] = []

    for contribution in contributions:
        if contribution.member_id not in roster:
            orphaned.append(contribution)
            continue
        try:
            contribution_type = ContributionType.from_str(contribution.contribution_type)
        except ValueError:
            skipped.append(contribution)
            continue
        member_totals = totals.setdefault(contribution.member_id, _new_totals())
        member_totals[contribution_type] += coerce_amount(contribution.amount)

    log = get_logger(__name__)
    if skipped:
        log.warning(
            "ledger.skipped_contributions",
            count=len(skipped),
            contribution_ids=[c.id for c in skipped],
        )
    if orphaned:
        log.warning(
            "ledger.orphaned_contributions",
            count=len(orphaned),
            member_ids=sorted({c.member_id for c in orphaned}),
        )

    balances: list[MemberBalance] = []
    for member_id, member_totals in totals.items():
        deposits = member_totals[ContributionType.DEPOSIT]
        withdrawals = member_totals[ContributionType.WITHDRAWAL]
        session_payments = member_totals[ContributionType.SESSION_PAYMENT]
        balances.append(
            MemberBalance(
                member_id=member_id,
                member_name=roster[member_id].name,
                total_deposits=deposits,
                total_withdrawals=withdrawals,
                total_session_payments=session_payments,
                current_balance=deposits - withdrawals - session_payments,
            )
        )

    balances.sort(key=lambda b: (b.member_name.casefold(), b.member_id))
    return BalanceAggregation(balances=tuple(balances), orphaned=tuple(orphaned), skipped=tuple(skipped))


def summarize(
    balances: Iterable[MemberBalance],
    orphaned_count: int = 0,
    skipped_count: int = 0,
) -> FundSummary:
    ordered = tuple(balances)
    return FundSummary(
        total_fund_balance=sum((balance.current_balance for balance in ordered), 0.0),
        balances=ordered,
        orphaned_contributions=orphaned_count,
        skipped_contributions=skipped_count,
    )


def build_fund_summary(
    contributions: Iterable[ContributionRecord],
    members: Iterable[Member],
) -> FundSummary:
    aggregation = aggregate(contributions, members)
    return summarize(
        aggregation.balances,
        orphaned_count=aggregation.orphaned_count,
        skipped_count=aggregation.skipped_count,
    )


def count_members_in_credit(balances: Iterable[MemberBalance]) -> int:
    return sum(1 for balance in balances if balance.current_balance > 0)


def count_contributions_in_month(
    contributions: Iterable[ContributionRecord],
    today: Optional[date] = None,
) -> int:
    if today is None:
        today = datetime.now(get_settings().zoneinfo).date()
    return sum(
        1
        for c in contributions
        if c.contribution_date.year == today.year and c.contribution_date.month == today.month
    )


def search_contributions(
    contributions: Sequence[ContributionRecord],
    term: str,
) -> list[ContributionRecord]:
    needle = term.strip().casefold()
    if not needle:
        return list(contributions)

    matches: list[ContributionRecord] = []
    for c in contributions:
        haystacks = (c.member_name or "", c.description or "")
        if any(needle in text.casefold() for text in haystacks):
            matches.append(c)
    return matches


def member_history(
    contributions: Iterable[ContributionRecord],
    member_id: int,
) -> list[ContributionRecord]:
    history = [c for c in contributions if c.member_id == member_id]
    history.sort(key=lambda c: c.contribution_date)
    return history


def orphaned_references(aggregation: BalanceAggregation) -> list[OrphanedReference]:
    return [OrphanedReference(member_id=c.member_id, record_id=c.id) for c in aggregation.orphaned]
