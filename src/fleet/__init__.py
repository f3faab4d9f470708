"""Elevator fleet dispatch primitives."""

from .building import Building, BuildingConfigurationError
from .config import BuildingConfig, ElevatorTiming
from .elevator import ElevatorUnit
from .report import (
    ActiveReport,
    BuildingReport,
    ElevatorReport,
    OutOfServiceReport,
    WaitingReport,
    format_elevator_report,
)
from .request import Request
from .states import CarStatus, Direction, SystemStatus
from .traffic import RandomRequestSource

__all__ = [
    "ActiveReport",
    "Building",
    "BuildingConfig",
    "BuildingConfigurationError",
    "BuildingReport",
    "CarStatus",
    "Direction",
    "ElevatorReport",
    "ElevatorTiming",
    "ElevatorUnit",
    "OutOfServiceReport",
    "RandomRequestSource",
    "Request",
    "SystemStatus",
    "WaitingReport",
    "format_elevator_report",
]
