from datetime import date

import pytest

from clubfund.db.models import ContributionRecord, ContributionType, CostItem, Member, Session
from clubfund.services.errors import EmptySelection
from clubfund.services.funds import load_fund_summary, load_session_breakdown, load_split


class StubRepo:
    def __init__(self) -> None:
        self.members = [Member(id=1, name="An"), Member(id=2, name="Bình")]
        self.contributions = [
            ContributionRecord(1, 100000, ContributionType.DEPOSIT, date(2024, 5, 1)),
            ContributionRecord(2, 40000, ContributionType.SESSION_PAYMENT, date(2024, 5, 2)),
            ContributionRecord(9, 5000, ContributionType.DEPOSIT, date(2024, 5, 3)),
        ]
        self.sessions = {1: Session(id=1, court_cost=120000, participant_ids=[1, 2])}

    async def list_members(self):
        return self.members

    async def list_contributions(self):
        return self.contributions

    async def get_session(self, session_id: int):
        return self.sessions.get(session_id)


@pytest.mark.asyncio
async def test_load_fund_summary():
    summary = await load_fund_summary(StubRepo())

    assert summary.total_fund_balance == 60000
    assert [b.member_name for b in summary.balances] == ["An", "Bình"]
    assert summary.orphaned_contributions == 1


@pytest.mark.asyncio
async def test_load_session_breakdown():
    repo = StubRepo()

    breakdown = await load_session_breakdown(repo, 1)

    assert breakdown is not None
    assert breakdown.cost_per_participant == 60000
    assert await load_session_breakdown(repo, 2) is None


@pytest.mark.asyncio
async def test_load_split():
    result = await load_split(StubRepo(), [CostItem("court", 100000)], [2, 1])

    assert [pc.player_name for pc in result.player_costs] == ["Bình", "An"]
    assert result.cost_per_player == 50000


@pytest.mark.asyncio
async def test_load_split_unknown_players():
    with pytest.raises(EmptySelection):
        await load_split(StubRepo(), [CostItem("court", 100000)], [7])
