from __future__ import annotations

from typing import Any, Mapping, Optional

import asyncpg

from clubfund.config import get_settings
from clubfund.db.models import ContributionRecord, ContributionType, Member, Session
from clubfund.logging import get_logger, sql_logger
from clubfund.utils.parse import coerce_amount, parse_contribution_date


class Database:
    """Lazily created asyncpg pool; usable as ``async with Database(dsn) as db``."""

    def __init__(self, dsn: str, min_size: int = 1, max_size: int = 5) -> None:
        # asyncpg only understands postgresql:// and postgres:// schemes
        self._dsn = dsn.replace("+asyncpg", "")
        self._min_size = min_size
        self._max_size = max(max_size, min_size)
        self._pool: asyncpg.Pool | None = None
        self._log = get_logger(__name__)

    @classmethod
    def from_settings(cls) -> "Database":
        settings = get_settings()
        if not settings.database_url:
            raise RuntimeError("DATABASE_URL is not set")
        return cls(
            settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )

    async def __aenter__(self) -> "Database":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def connect(self) -> None:
        if self._pool is None:
            self._pool = await asyncpg.create_pool(
                self._dsn,
                min_size=self._min_size,
                max_size=self._max_size,
            )
            self._log.info("db.pool.created", min_size=self._min_size, max_size=self._max_size)

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            self._log.info("db.pool.closed")

    async def fetch(self, query: str, *args: Any) -> list[asyncpg.Record]:
        pool = await self._ensure_pool()
        sql_logger.debug("sql.fetch", query=query, args=args)
        return await pool.fetch(query, *args)

    async def fetchrow(self, query: str, *args: Any) -> asyncpg.Record | None:
        pool = await self._ensure_pool()
        sql_logger.debug("sql.fetchrow", query=query, args=args)
        return await pool.fetchrow(query, *args)

    async def _ensure_pool(self) -> asyncpg.Pool:
        if self._pool is None:
            await self.connect()
        assert self._pool
        return self._pool


class ClubRepository:
    """Read-only access to the member directory, session store and contribution store."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self._log = get_logger(__name__)

    async def list_members(self) -> list[Member]:
        rows = await self.db.fetch("SELECT id, name, email, phone FROM members ORDER BY name, id")
        return [
            Member(id=int(row["id"]), name=row["name"], email=row.get("email"), phone=row.get("phone"))
            for row in rows
        ]

    async def get_session(self, session_id: int) -> Optional[Session]:
        row = await self.db.fetchrow("SELECT * FROM sessions WHERE id = $1", session_id)
        if row is None:
            return None
        participants = await self.db.fetch(
            "SELECT member_id FROM session_participants WHERE session_id = $1 ORDER BY member_id",
            session_id,
        )
        return Session(
            id=int(row["id"]),
            session_date=row.get("session_date"),
            court_cost=coerce_amount(row.get("court_cost")),
            shuttlecock_cost=coerce_amount(row.get("shuttlecock_cost")),
            water_cost=coerce_amount(row.get("water_cost")),
            other_cost=coerce_amount(row.get("other_cost")),
            participant_ids=[int(p["member_id"]) for p in participants],
            location=row.get("location"),
            notes=row.get("notes"),
        )

    async def list_contributions(self) -> list[ContributionRecord]:
        rows = await self.db.fetch(
            """
            SELECT fc.id, fc.member_id, m.name AS member_name, fc.amount,
                   fc.contribution_type, fc.contribution_date, fc.description
            FROM fund_contributions fc
            LEFT JOIN members m ON m.id = fc.member_id
            ORDER BY fc.contribution_date DESC, fc.id DESC
            """
        )
        contributions: list[ContributionRecord] = []
        for row in rows:
            record = self._contribution_from_row(row)
            if record is not None:
                contributions.append(record)
        return contributions

    def _contribution_from_row(self, row: Mapping[str, Any]) -> Optional[ContributionRecord]:
        try:
            contribution_type = ContributionType.from_str(row["contribution_type"])
            contribution_date = parse_contribution_date(row["contribution_date"], get_settings().zoneinfo)
        except ValueError as exc:
            self._log.warning("contribution.skipped", contribution_id=row.get("id"), reason=str(exc))
            return None

        return ContributionRecord(
            id=row.get("id"),
            member_id=int(row["member_id"]),
            member_name=row.get("member_name"),
            amount=coerce_amount(row["amount"]),
            contribution_type=contribution_type,
            contribution_date=contribution_date,
            description=row.get("description"),
        )
