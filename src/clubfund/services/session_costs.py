from __future__ import annotations

from clubfund.db.models import CostItem, Session, SessionCostBreakdown
from clubfund.utils.parse import coerce_amount, coerce_count


SUB_COST_LABELS = {
    "court_cost": "Chi phí sân",
    "shuttlecock_cost": "Chi phí cầu",
    "water_cost": "Chi phí nước",
    "other_cost": "Chi phí khác",
}


def compute_session_costs(
    court_cost: object = 0,
    shuttlecock_cost: object = 0,
    water_cost: object = 0,
    other_cost: object = 0,
    participant_count: object = 0,
) -> SessionCostBreakdown:
    court = coerce_amount(court_cost)
    shuttlecock = coerce_amount(shuttlecock_cost)
    water = coerce_amount(water_cost)
    other = coerce_amount(other_cost)
    count = coerce_count(participant_count)

    total = court + shuttlecock + water + other
    per_participant = total / count if count > 0 else 0.0

    return SessionCostBreakdown(
        court_cost=court,
        shuttlecock_cost=shuttlecock,
        water_cost=water,
        other_cost=other,
        total_cost=total,
        participant_count=count,
        cost_per_participant=per_participant,
    )


def breakdown_for_session(session: Session) -> SessionCostBreakdown:
    return compute_session_costs(
        court_cost=session.court_cost,
        shuttlecock_cost=session.shuttlecock_cost,
        water_cost=session.water_cost,
        other_cost=session.other_cost,
        participant_count=len(set(session.participant_ids)),
    )


def session_cost_items(session: Session) -> list[CostItem]:
    items: list[CostItem] = []
    for attr, label in SUB_COST_LABELS.items():
        amount = coerce_amount(getattr(session, attr))
        if amount > 0:
            items.append(CostItem(name=label, amount=amount))
    return items
