from __future__ import annotations

from enum import Enum


class Direction(Enum):
    """Travel direction of a car or a request: +1 up, -1 down, 0 none."""

    UP = 1
    DOWN = -1
    NONE = 0

    @property
    def symbol(self) -> str:
        if self is Direction.UP:
            return "^"
        if self is Direction.DOWN:
            return "v"
        return " "


class CarStatus(Enum):
    WAITING = "waiting"
    MOVING = "moving"
    STOPPED = "stopped"  # door open at a floor
    OUT_OF_SERVICE = "out_of_service"


class SystemStatus(Enum):
    """Building-wide operational mode."""

    RUNNING = "running"
    STOPPING = "stopping"
    OUT_OF_SERVICE = "out_of_service"

    @property
    def display(self) -> str:
        return {
            SystemStatus.RUNNING: "Running",
            SystemStatus.STOPPING: "Stopping",
            SystemStatus.OUT_OF_SERVICE: "Out of Service",
        }[self]
