from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Dict, List, Optional, Tuple

from dispatch import CarView, DistributionPolicy, get_policy

from .config import BuildingConfig, ElevatorTiming
from .elevator import ElevatorUnit
from .report import BuildingReport
from .request import Request
from .states import Direction, SystemStatus

logger = logging.getLogger(__name__)


class BuildingConfigurationError(ValueError):
    """Raised when a building cannot be constructed with the given settings."""


class Building:
    """Owns the fleet, the pending request queues and the system status.

    Time only advances through :meth:`step`. Requests are accepted while the
    system is running and handed to idle cars at the terminal floors by the
    distribution policy.
    """

    def __init__(
        self,
        num_floors: int,
        num_elevators: int,
        elevator_capacity: int,
        timing: Optional[ElevatorTiming] = None,
        policy: str = "terminal",
    ) -> None:
        if num_floors < 2:
            raise BuildingConfigurationError("Number of floors should be at least 2")
        if num_elevators < 1:
            raise BuildingConfigurationError("At least one elevator is required")
        if elevator_capacity < 1:
            raise BuildingConfigurationError("Elevator capacity should be at least 1")
        try:
            self.policy: DistributionPolicy = get_policy(policy)
        except ValueError as exc:
            raise BuildingConfigurationError(str(exc)) from exc

        self._num_floors = num_floors
        self._num_elevators = num_elevators
        self._elevator_capacity = elevator_capacity
        self.policy_name = policy
        self.timing = timing or ElevatorTiming()
        self._elevators: List[ElevatorUnit] = [
            ElevatorUnit(i, num_floors, elevator_capacity, timing=self.timing)
            for i in range(num_elevators)
        ]
        self._up_requests: Deque[Request] = deque()
        self._down_requests: Deque[Request] = deque()
        self._system_status = SystemStatus.OUT_OF_SERVICE
        self.current_time = 0

    @classmethod
    def from_config(cls, config: BuildingConfig) -> "Building":
        return cls(
            num_floors=config.num_floors,
            num_elevators=config.num_elevators,
            elevator_capacity=config.elevator_capacity,
            timing=config.timing,
            policy=config.policy,
        )

    @property
    def num_floors(self) -> int:
        return self._num_floors

    @property
    def num_elevators(self) -> int:
        return self._num_elevators

    @property
    def elevator_capacity(self) -> int:
        return self._elevator_capacity

    @property
    def system_status(self) -> SystemStatus:
        return self._system_status

    @property
    def elevators(self) -> Tuple[ElevatorUnit, ...]:
        return tuple(self._elevators)

    @property
    def up_requests(self) -> Tuple[Request, ...]:
        return tuple(self._up_requests)

    @property
    def down_requests(self) -> Tuple[Request, ...]:
        return tuple(self._down_requests)

    def add_request(self, request: Optional[Request]) -> bool:
        if not self._is_valid_request(request):
            return False
        if self._system_status is not SystemStatus.RUNNING:
            logger.info("Request %s rejected: system is %s", request, self._system_status.display)
            return False
        if request.direction is Direction.UP:
            self._up_requests.append(request)
        else:
            self._down_requests.append(request)
        return True

    def request_ride(self, start_floor: int, end_floor: int) -> bool:
        return self.add_request(Request(start_floor, end_floor))

    def start(self) -> bool:
        if self._system_status is SystemStatus.STOPPING:
            logger.warning("Elevator system cannot be started while it is stopping")
            return False
        if self._system_status is SystemStatus.RUNNING:
            logger.info("Elevator system is already running")
            return True
        for elevator in self._elevators:
            elevator.start()
        self._system_status = SystemStatus.RUNNING
        logger.info("Elevator system started")
        return True

    def stop(self) -> None:
        if self._system_status is not SystemStatus.RUNNING:
            return
        dropped = len(self._up_requests) + len(self._down_requests)
        self._up_requests.clear()
        self._down_requests.clear()
        for elevator in self._elevators:
            elevator.take_out_of_service()
        self._system_status = SystemStatus.STOPPING
        logger.info("Elevator system stopping; %d pending requests purged", dropped)

    def step(self) -> None:
        self.current_time += 1
        if self._system_status is SystemStatus.OUT_OF_SERVICE:
            logger.debug("Step ignored: elevator system is out of service")
            return

        if self._system_status is SystemStatus.RUNNING:
            self.distribute()

        for elevator in self._elevators:
            elevator.step()

        if self._system_status is SystemStatus.STOPPING and self._all_parked():
            for elevator in self._elevators:
                elevator.shut_down()
            self._system_status = SystemStatus.OUT_OF_SERVICE
            logger.info("All elevators parked at the ground floor; system out of service")

    def run(self, ticks: int) -> None:
        for _ in range(ticks):
            self.step()

    def distribute(self) -> None:
        """Hand queued requests to idle cars waiting at the terminal floors."""
        if not self._up_requests and not self._down_requests:
            return
        assignments = self.policy.select_batches(
            self._car_views(), tuple(self._up_requests), tuple(self._down_requests)
        )
        refused: Dict[Direction, List[Request]] = {Direction.UP: [], Direction.DOWN: []}
        for elevator_id, batch in assignments.items():
            if len(batch) > self._elevator_capacity:
                raise RuntimeError(
                    f"Policy offered {len(batch)} requests to elevator {elevator_id} "
                    f"with capacity {self._elevator_capacity}"
                )
            elevator = self._elevators[elevator_id]
            direction = elevator.pickup_direction()
            queue = self._queue_for(direction)
            if queue is None:
                continue
            taken = [queue.popleft() for _ in batch]
            accepted = elevator.assign(taken)
            refused[direction].extend(taken[len(accepted):])

        # Requests a car refused go back to the head of their queue, in order.
        for direction, requests in refused.items():
            if requests:
                self._queue_for(direction).extendleft(reversed(requests))

    def status_snapshot(self) -> BuildingReport:
        return BuildingReport(
            num_floors=self._num_floors,
            num_elevators=self._num_elevators,
            elevator_capacity=self._elevator_capacity,
            elevator_reports=tuple(elevator.report() for elevator in self._elevators),
            up_requests=tuple(self._up_requests),
            down_requests=tuple(self._down_requests),
            system_status=self._system_status,
        )

    def _is_valid_request(self, request: Optional[Request]) -> bool:
        if request is None:
            logger.info("Request rejected: request cannot be None")
            return False
        reason = request.rejection_reason(self._num_floors)
        if reason is not None:
            logger.info("Request %s rejected: %s", request, reason)
            return False
        return True

    def _queue_for(self, direction: Direction) -> Optional[Deque[Request]]:
        if direction is Direction.UP:
            return self._up_requests
        if direction is Direction.DOWN:
            return self._down_requests
        return None

    def _car_views(self) -> List[CarView]:
        return [
            CarView(
                elevator_id=elevator.elevator_id,
                floor=elevator.current_floor,
                top_floor=elevator.top_floor,
                capacity=self._elevator_capacity,
                taking_requests=elevator.is_taking_requests(),
            )
            for elevator in self._elevators
        ]

    def _all_parked(self) -> bool:
        return all(
            elevator.is_parked and elevator.current_floor == 0 and elevator.door_closed and not elevator.stops
            for elevator in self._elevators
        )
