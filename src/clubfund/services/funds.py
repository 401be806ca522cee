from __future__ import annotations

from typing import Optional, Protocol, Sequence

from clubfund.db.models import (
    ContributionRecord,
    CostItem,
    FundSummary,
    Member,
    Session,
    SessionCostBreakdown,
    SplitResult,
)
from clubfund.services import ledger, split
from clubfund.services.session_costs import breakdown_for_session


class Repository(Protocol):
    async def list_members(self) -> list[Member]: ...

    async def list_contributions(self) -> list[ContributionRecord]: ...

    async def get_session(self, session_id: int) -> Optional[Session]: ...


async def load_fund_summary(repo: Repository) -> FundSummary:
    members = await repo.list_members()
    contributions = await repo.list_contributions()
    return ledger.build_fund_summary(contributions, members)


async def load_session_breakdown(repo: Repository, session_id: int) -> Optional[SessionCostBreakdown]:
    session = await repo.get_session(session_id)
    if session is None:
        return None
    return breakdown_for_session(session)


async def load_split(repo: Repository, cost_items: Sequence[CostItem], player_ids: Sequence[int]) -> SplitResult:
    members = await repo.list_members()
    return split.calculate(cost_items, player_ids, [member.ref() for member in members])
