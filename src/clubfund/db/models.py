from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional


class ContributionType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    SESSION_PAYMENT = "session_payment"

    @classmethod
    def from_str(cls, value: str) -> "ContributionType":
        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError) as exc:
            raise ValueError(f"Unsupported contribution type: {value!r}") from exc


@dataclass(slots=True, frozen=True)
class PlayerRef:
    id: int
    name: str


@dataclass(slots=True)
class Member:
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None

    def ref(self) -> PlayerRef:
        return PlayerRef(id=self.id, name=self.name)


@dataclass(slots=True, frozen=True)
class CostItem:
    name: str
    amount: float


@dataclass(slots=True)
class Session:
    id: int
    session_date: Optional[date] = None
    court_cost: float = 0.0
    shuttlecock_cost: float = 0.0
    water_cost: float = 0.0
    other_cost: float = 0.0
    participant_ids: list[int] = field(default_factory=list)
    location: Optional[str] = None
    notes: Optional[str] = None


@dataclass(slots=True, frozen=True)
class ContributionRecord:
    member_id: int
    amount: float
    contribution_type: ContributionType
    contribution_date: date
    id: Optional[int] = None
    description: Optional[str] = None
    member_name: Optional[str] = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "member_id": self.member_id,
            "member_name": self.member_name,
            "amount": self.amount,
            "contribution_type": self.contribution_type.value,
            "contribution_date": self.contribution_date.isoformat(),
            "description": self.description,
        }


@dataclass(slots=True, frozen=True)
class PlayerCost:
    player_id: int
    player_name: str
    cost: float


@dataclass(slots=True, frozen=True)
class SplitResult:
    total_cost: float
    total_players: int
    cost_per_player: float
    player_costs: tuple[PlayerCost, ...]

    def as_dict(self) -> dict[str, Any]:
        return asdict(self) | {"player_costs": [asdict(pc) for pc in self.player_costs]}


@dataclass(slots=True, frozen=True)
class SessionCostBreakdown:
    court_cost: float
    shuttlecock_cost: float
    water_cost: float
    other_cost: float
    total_cost: float
    participant_count: int
    cost_per_participant: float

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class MemberBalance:
    member_id: int
    member_name: str
    total_deposits: float
    total_withdrawals: float
    total_session_payments: float
    current_balance: float

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class BalanceAggregation:
    balances: tuple[MemberBalance, ...]
    orphaned: tuple[ContributionRecord, ...] = ()
    skipped: tuple[ContributionRecord, ...] = ()

    @property
    def orphaned_count(self) -> int:
        return len(self.orphaned)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


@dataclass(slots=True, frozen=True)
class FundSummary:
    total_fund_balance: float
    balances: tuple[MemberBalance, ...]
    orphaned_contributions: int = 0
    skipped_contributions: int = 0

    def as_dict(self) -> dict[str, Any]:
        return {
            "total_fund_balance": self.total_fund_balance,
            "balances": [balance.as_dict() for balance in self.balances],
            "orphaned_contributions": self.orphaned_contributions,
            "skipped_contributions": self.skipped_contributions,
        }
