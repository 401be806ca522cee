import pytest

from clubfund.db.models import Member, Session
from clubfund.report import build_report, parse_session_id


class StubRepo:
    def __init__(self) -> None:
        self.sessions = {
            3: Session(id=3, court_cost=160000, shuttlecock_cost=40000, participant_ids=[1, 2, 3, 4]),
            4: Session(id=4, court_cost=80000),
        }

    async def list_members(self):
        return [Member(id=1, name="An")]

    async def list_contributions(self):
        return []

    async def get_session(self, session_id: int):
        return self.sessions.get(session_id)


@pytest.mark.asyncio
async def test_build_report_for_session():
    text = await build_report(StubRepo(), 3)

    assert text.splitlines() == [
        "Buổi đánh #3",
        "Tổng chi phí: 200.000đ",
        "4 người, mỗi người 50.000đ",
    ]


@pytest.mark.asyncio
async def test_build_report_for_session_without_participants():
    text = await build_report(StubRepo(), 4)
    assert text.endswith("Chưa có người tham gia")


@pytest.mark.asyncio
async def test_build_report_missing_session():
    assert await build_report(StubRepo(), 99) == "Không tìm thấy buổi đánh #99"


@pytest.mark.asyncio
async def test_build_report_fund_summary():
    assert await build_report(StubRepo()) == "Tổng quỹ: 0đ"


def test_parse_session_id():
    assert parse_session_id([]) is None
    assert parse_session_id(["12"]) == 12
    with pytest.raises(SystemExit):
        parse_session_id(["abc"])
