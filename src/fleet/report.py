"""Immutable status reports for cars and the building.

Reports are plain data; :func:`format_elevator_report` turns a car report into
the fixed text form shown by consoles and logs.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import List, Tuple, Union

from .request import Request
from .states import CarStatus, Direction, SystemStatus


@dataclass(frozen=True)
class WaitingReport:
    elevator_id: int
    floor: int
    idle_time: int

    def __str__(self) -> str:
        return format_elevator_report(self)


@dataclass(frozen=True)
class OutOfServiceReport:
    elevator_id: int
    floor: int

    def __str__(self) -> str:
        return format_elevator_report(self)


@dataclass(frozen=True)
class ActiveReport:
    """A car that is travelling or stopped with its door open."""

    elevator_id: int
    floor: int
    status: CarStatus
    direction: Direction
    door_timer: int
    stops: Tuple[int, ...]
    num_floors: int

    @property
    def door_closed(self) -> bool:
        return self.door_timer == 0

    def __str__(self) -> str:
        return format_elevator_report(self)


ElevatorReport = Union[WaitingReport, OutOfServiceReport, ActiveReport]


def format_elevator_report(report: ElevatorReport) -> str:
    if isinstance(report, WaitingReport):
        return f"Waiting[Floor {report.floor}, Time {report.idle_time}]"
    if isinstance(report, OutOfServiceReport):
        return f"Out of Service[Floor {report.floor}]"
    if isinstance(report, ActiveReport):
        door = "C  " if report.door_closed else f"O {report.door_timer}"
        slots = "".join(
            f"{floor:>3}" if floor in report.stops else " --"
            for floor in range(report.num_floors)
        )
        return f"[{report.floor}|{report.direction.symbol}|{door}]<{slots}>"
    raise TypeError(f"Unsupported elevator report: {report!r}")


def elevator_report_to_dict(report: ElevatorReport) -> dict:
    payload = asdict(report)
    if isinstance(report, ActiveReport):
        payload["status"] = report.status.value
        payload["direction"] = report.direction.value
        payload["stops"] = list(report.stops)
        kind = "active"
    elif isinstance(report, WaitingReport):
        kind = "waiting"
    else:
        kind = "out_of_service"
    payload["kind"] = kind
    payload["text"] = format_elevator_report(report)
    return payload


def _format_requests(requests: Tuple[Request, ...]) -> str:
    return "[" + ", ".join(str(request) for request in requests) + "]"


@dataclass(frozen=True)
class BuildingReport:
    """Point-in-time copy of the building's state."""

    num_floors: int
    num_elevators: int
    elevator_capacity: int
    elevator_reports: Tuple[ElevatorReport, ...]
    up_requests: Tuple[Request, ...]
    down_requests: Tuple[Request, ...]
    system_status: SystemStatus

    def elevator_texts(self) -> List[str]:
        return [format_elevator_report(report) for report in self.elevator_reports]

    def to_dict(self) -> dict:
        return {
            "num_floors": self.num_floors,
            "num_elevators": self.num_elevators,
            "elevator_capacity": self.elevator_capacity,
            "elevators": [elevator_report_to_dict(report) for report in self.elevator_reports],
            "up_requests": [str(request) for request in self.up_requests],
            "down_requests": [str(request) for request in self.down_requests],
            "system_status": self.system_status.value,
        }

    def __str__(self) -> str:
        return (
            "BuildingReport:\n"
            f"Number of floors: {self.num_floors}, "
            f"Number of elevators: {self.num_elevators}, "
            f"Elevator capacity: {self.elevator_capacity}, "
            f"Up requests: {_format_requests(self.up_requests)}, "
            f"Down requests: {_format_requests(self.down_requests)}, "
            f"System status: {self.system_status.display}\n"
            f"Elevator reports: [{', '.join(self.elevator_texts())}]\n"
        )
