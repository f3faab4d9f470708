from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, List, Sequence

from .interface import CarView

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from fleet.request import Request


class TerminalPickupPolicy:
    """Greedy FIFO pickup for idle cars standing at the ground or top floor.

    A car at the ground floor takes up to its capacity from the front of the up
    queue; a car at the top floor does the same with the down queue. Cars
    anywhere else get nothing.
    """

    def select_batches(
        self,
        car_state: Iterable[CarView],
        up_requests: Sequence[Request],
        down_requests: Sequence[Request],
    ) -> Dict[int, List[Request]]:
        assignments: Dict[int, List[Request]] = {}
        up_cursor = 0
        down_cursor = 0
        for car in car_state:
            if not car.taking_requests:
                continue
            if car.at_ground and up_cursor < len(up_requests):
                batch = list(up_requests[up_cursor:up_cursor + car.capacity])
                up_cursor += len(batch)
                assignments[car.elevator_id] = batch
            elif car.at_top and down_cursor < len(down_requests):
                batch = list(down_requests[down_cursor:down_cursor + car.capacity])
                down_cursor += len(batch)
                assignments[car.elevator_id] = batch
        return assignments
