from __future__ import annotations

from typing import Iterable

from clubfund.db.models import CostItem, PlayerCost, PlayerRef, SplitResult
from clubfund.logging import get_logger
from clubfund.services.errors import EmptySelection, NoValidCostItems
from clubfund.utils.parse import coerce_amount


def filter_cost_items(items: Iterable[CostItem]) -> list[CostItem]:
    valid: list[CostItem] = []
    for item in items:
        name = item.name.strip() if isinstance(item.name, str) else ""
        amount = coerce_amount(item.amount)
        if name and amount > 0:
            valid.append(CostItem(name=name, amount=amount))
    return valid


def resolve_players(
    player_ids: Iterable[int],
    roster: Iterable[PlayerRef],
) -> tuple[list[PlayerRef], list[int]]:
    """Look up selected ids in selection order.

    Repeated ids count once; ids missing from the roster are returned
    separately instead of failing the lookup.
    """
    by_id = {player.id: player for player in roster}
    resolved: list[PlayerRef] = []
    dropped: list[int] = []
    seen: set[int] = set()

    for player_id in player_ids:
        if player_id in seen:
            continue
        seen.add(player_id)
        player = by_id.get(player_id)
        if player is None:
            dropped.append(player_id)
        else:
            resolved.append(player)

    return resolved, dropped


def calculate(
    cost_items: Iterable[CostItem],
    player_ids: Iterable[int],
    roster: Iterable[PlayerRef],
) -> SplitResult:
    log = get_logger(__name__)
    cost_items = list(cost_items)
    player_ids = list(player_ids)

    players, dropped = resolve_players(player_ids, roster)
    if dropped:
        log.warning("split.unknown_players", player_ids=dropped)
    if not players:
        raise EmptySelection(requested=len(player_ids))

    items = filter_cost_items(cost_items)
    if not items:
        raise NoValidCostItems()

    total_cost = sum(item.amount for item in items)
    total_players = len(players)
    cost_per_player = total_cost / total_players

    player_costs = tuple(
        PlayerCost(player_id=player.id, player_name=player.name, cost=cost_per_player)
        for player in players
    )

    log.debug(
        "split.calculated",
        total_cost=total_cost,
        total_players=total_players,
        cost_per_player=cost_per_player,
        skipped_items=len(cost_items) - len(items),
    )
    return SplitResult(
        total_cost=total_cost,
        total_players=total_players,
        cost_per_player=cost_per_player,
        player_costs=player_costs,
    )
