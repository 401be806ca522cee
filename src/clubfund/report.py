from __future__ import annotations

import asyncio
import sys
from typing import Optional, Sequence

from clubfund.config import get_settings
from clubfund.db.repo import ClubRepository, Database
from clubfund.logging import configure_logging, get_logger
from clubfund.services.formatting import format_fund_summary, format_session_breakdown
from clubfund.services.funds import Repository, load_fund_summary, load_session_breakdown


async def build_report(repo: Repository, session_id: Optional[int] = None) -> str:
    log = get_logger(__name__)

    if session_id is not None:
        breakdown = await load_session_breakdown(repo, session_id)
        if breakdown is None:
            log.warning("report.session_not_found", session_id=session_id)
            return f"Không tìm thấy buổi đánh #{session_id}"
        log.info("report.session", session_id=session_id, total_cost=breakdown.total_cost)
        return f"Buổi đánh #{session_id}\n{format_session_breakdown(breakdown)}"

    summary = await load_fund_summary(repo)
    log.info(
        "report.fund_summary",
        total_fund_balance=summary.total_fund_balance,
        members=len(summary.balances),
        orphaned_contributions=summary.orphaned_contributions,
        skipped_contributions=summary.skipped_contributions,
    )
    return format_fund_summary(summary)


def parse_session_id(argv: Sequence[str]) -> Optional[int]:
    if not argv:
        return None
    try:
        return int(argv[0])
    except ValueError:
        raise SystemExit(f"usage: python -m clubfund.report [session_id], got {argv[0]!r}") from None


async def main(argv: Sequence[str] = ()) -> None:
    settings = get_settings()
    configure_logging(settings.log_level, json_logs=settings.log_json)
    session_id = parse_session_id(argv)

    try:
        db = Database.from_settings()
    except RuntimeError as exc:
        raise SystemExit(str(exc)) from exc

    async with db:
        text = await build_report(ClubRepository(db), session_id)
    print(text)


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1:]))
