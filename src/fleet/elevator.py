from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .config import ElevatorTiming
from .report import ActiveReport, ElevatorReport, OutOfServiceReport, WaitingReport
from .request import Request
from .states import CarStatus, Direction

logger = logging.getLogger(__name__)


@dataclass
class ElevatorUnit:
    """One car: floor, direction, door, stop list and its tick-driven state machine.

    Idle cars wait at a terminal floor (ground or top). When the idle timer runs
    out the car repositions to the opposite terminal, so both pickup floors stay
    covered. After its stop list drains, a car keeps travelling to the terminal
    floor in its direction of travel and waits there.
    """

    elevator_id: int
    num_floors: int
    capacity: int
    timing: ElevatorTiming = field(default_factory=ElevatorTiming)
    current_floor: int = 0
    direction: Direction = Direction.NONE
    status: CarStatus = CarStatus.WAITING
    door_timer: int = 0
    idle_timer: int = field(init=False)
    stops: List[int] = field(default_factory=list)
    _returning_to_ground: bool = False

    def __post_init__(self) -> None:
        if self.num_floors < 2:
            raise ValueError("An elevator needs at least two floors to serve")
        if self.capacity < 1:
            raise ValueError("Elevator capacity must be at least 1")
        if not 0 <= self.current_floor < self.num_floors:
            raise ValueError(f"Floor {self.current_floor} is outside the building")
        self.idle_timer = self.timing.idle_ticks

    @property
    def top_floor(self) -> int:
        return self.num_floors - 1

    @property
    def max_stops(self) -> int:
        return 2 * self.capacity

    @property
    def door_closed(self) -> bool:
        return self.door_timer == 0

    @property
    def is_parked(self) -> bool:
        """Idle at the ground floor waiting to be shut down."""
        return self.status is CarStatus.WAITING and self._returning_to_ground

    def in_service(self) -> bool:
        return self.status is not CarStatus.OUT_OF_SERVICE

    def is_taking_requests(self) -> bool:
        return self.status is CarStatus.WAITING and not self._returning_to_ground

    def pickup_direction(self) -> Direction:
        """Direction of requests this car may accept where it stands."""
        if not self.is_taking_requests():
            return Direction.NONE
        if self.current_floor == 0:
            return Direction.UP
        if self.current_floor == self.top_floor:
            return Direction.DOWN
        return Direction.NONE

    def assign(self, requests: Iterable[Request]) -> List[Request]:
        """Merge a batch of requests into the stop list and start moving.

        Returns the requests actually accepted. A request travelling the wrong
        way for this terminal floor, or one that would overflow the stop list,
        is refused along with everything after it in the batch.
        """
        direction = self.pickup_direction()
        if direction is Direction.NONE:
            return []

        accepted: List[Request] = []
        stops = set(self.stops)
        for request in requests:
            if request.direction is not direction:
                logger.warning(
                    "Elevator %d refused %s: travels %s from floor %d",
                    self.elevator_id, request, request.direction.name, self.current_floor,
                )
                break
            merged = stops.union(request.floors())
            if len(merged) > self.max_stops:
                logger.warning(
                    "Elevator %d refused %s: stop list would exceed %d floors",
                    self.elevator_id, request, self.max_stops,
                )
                break
            stops = merged
            accepted.append(request)

        if not accepted:
            return accepted

        self.stops = sorted(stops, reverse=direction is Direction.DOWN)
        self.direction = direction
        self.status = CarStatus.MOVING
        self.idle_timer = self.timing.idle_ticks
        return accepted

    def step(self) -> None:
        if not self.in_service():
            return

        if self.status is CarStatus.STOPPED:
            self._close_door_tick()
            return

        if self.status is CarStatus.WAITING:
            self._count_down_idle()
            return

        if self.stops and self.current_floor == self.stops[0]:
            self._open_doors()
            return

        if self.stops:
            self._move(self.direction)
            return

        self._travel_to_terminal()

    def take_out_of_service(self) -> None:
        """Stop accepting work and head to the ground floor once current stops are served."""
        if not self.in_service():
            return
        self._returning_to_ground = True
        if self.status is CarStatus.WAITING:
            if self.current_floor != 0:
                self.status = CarStatus.MOVING
                self.direction = Direction.DOWN
            return
        if not self.stops:
            self.direction = Direction.DOWN

    def shut_down(self) -> None:
        self.status = CarStatus.OUT_OF_SERVICE
        self.stops.clear()
        self.door_timer = 0
        self.direction = Direction.NONE
        self._returning_to_ground = False

    def start(self) -> None:
        if self.in_service():
            return
        self.status = CarStatus.WAITING
        self.direction = Direction.NONE
        self.idle_timer = self.timing.idle_ticks

    def report(self) -> ElevatorReport:
        if not self.in_service():
            return OutOfServiceReport(self.elevator_id, self.current_floor)
        if self.status is CarStatus.WAITING:
            return WaitingReport(self.elevator_id, self.current_floor, self.idle_timer)
        return ActiveReport(
            elevator_id=self.elevator_id,
            floor=self.current_floor,
            status=self.status,
            direction=self.direction,
            door_timer=self.door_timer,
            stops=tuple(self.stops),
            num_floors=self.num_floors,
        )

    def _count_down_idle(self) -> None:
        if self._returning_to_ground:
            return
        if self.current_floor not in (0, self.top_floor):
            return
        self.idle_timer -= 1
        if self.idle_timer > 0:
            return
        # Reposition to the opposite terminal floor; movement starts next tick.
        self.status = CarStatus.MOVING
        self.direction = Direction.UP if self.current_floor == 0 else Direction.DOWN

    def _close_door_tick(self) -> None:
        self.door_timer -= 1
        if self.door_timer > 0:
            return
        self.door_timer = 0
        # Last stop was the ground floor on the way out of service: park now.
        if self._returning_to_ground and self.current_floor == 0 and not self.stops:
            self._settle()
            return
        self.status = CarStatus.MOVING

    def _open_doors(self) -> None:
        self.stops.pop(0)
        self.door_timer = self.timing.door_open_ticks
        self.status = CarStatus.STOPPED

    def _terminal_target(self) -> Optional[int]:
        if self._returning_to_ground or self.direction is Direction.DOWN:
            return 0
        if self.direction is Direction.UP:
            return self.top_floor
        return None

    def _travel_to_terminal(self) -> None:
        target = self._terminal_target()
        if target is not None and self.current_floor != target:
            if self._returning_to_ground:
                self.direction = Direction.DOWN
            self._move(self.direction)
            # A car heading out of service parks on the tick it reaches the ground.
            if not (self._returning_to_ground and self.current_floor == 0):
                return
        self._settle()

    def _settle(self) -> None:
        self.status = CarStatus.WAITING
        self.direction = Direction.NONE
        self.idle_timer = self.timing.idle_ticks
        if self._returning_to_ground:
            logger.debug("Elevator %d parked at the ground floor", self.elevator_id)

    def _move(self, direction: Direction) -> None:
        floor = self.current_floor + direction.value
        if not 0 <= floor < self.num_floors:
            raise RuntimeError(
                f"Elevator {self.elevator_id} cannot move {direction.name} from floor {self.current_floor}"
            )
        self.current_floor = floor
