from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterable, List, Protocol, Sequence

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from fleet.request import Request


@dataclass(frozen=True)
class CarView:
    """Lightweight view of a car for distribution decisions."""

    elevator_id: int
    floor: int
    top_floor: int
    capacity: int
    taking_requests: bool

    @property
    def at_ground(self) -> bool:
        return self.floor == 0

    @property
    def at_top(self) -> bool:
        return self.floor == self.top_floor


class DistributionPolicy(Protocol):
    """Strategy interface for handing queued requests to cars."""

    def select_batches(
        self,
        car_state: Iterable[CarView],
        up_requests: Sequence[Request],
        down_requests: Sequence[Request],
    ) -> Dict[int, List[Request]]:
        """
        Return mapping of elevator_id -> batch of requests to assign.

        Implementations must take requests from the front of each queue, in
        order, so the caller can remove them by popping from the left.
        """
        ...
