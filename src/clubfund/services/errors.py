from __future__ import annotations

from dataclasses import dataclass


class CostAllocationError(ValueError):
    pass


class EmptySelection(CostAllocationError):
    def __init__(self, requested: int = 0) -> None:
        super().__init__("At least one known player must be selected.")
        self.requested = requested


class NoValidCostItems(CostAllocationError):
    def __init__(self) -> None:
        super().__init__("At least one cost item with a name and a positive amount is required.")


@dataclass(slots=True, frozen=True)
class OrphanedReference:
    """A record whose member id does not resolve in the roster snapshot."""

    member_id: int
    record_id: int | None = None
